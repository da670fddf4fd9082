"""
Unit tests for the scanner/classifier.
"""

import os
from pathlib import Path

import pytest

from extfix.config import DEFAULT_FORMATS
from extfix import scanner
from extfix.scanner import candidates, classify, current_extension, scan, with_extension

import signatures as sig

FORMATS = frozenset(DEFAULT_FORMATS)


class TestExtensionHelpers:

    @pytest.mark.parametrize(
        "name, ext",
        [
            ("photo.jpg", "jpg"),
            ("photo.JPG", "JPG"),
            ("archive.tar.gz", "gz"),
            ("photo", ""),
            (".hidden", ""),
            ("photo.", ""),
        ],
    )
    def test_current_extension(self, name, ext):
        assert current_extension(Path("dir") / name) == ext

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("photo.jpg", "photo.png"),
            ("photo", "photo.png"),
            ("photo.", "photo.png"),
            (".hidden", ".hidden.png"),
            ("archive.tar.gz", "archive.tar.png"),
        ],
    )
    def test_with_extension_keeps_parent_and_stem(self, name, expected):
        path = Path("some") / "dir" / name
        assert with_extension(path, "png") == Path("some") / "dir" / expected


class TestClassify:

    def test_mismatched_allowed_type_yields_candidate(self, tmp_path: Path):
        path = tmp_path / "photo.jpg"
        path.write_bytes(sig.PNG)

        cand = classify(path, FORMATS)

        assert cand is not None
        assert cand.original == path
        assert cand.corrected == tmp_path / "photo.png"
        assert cand.current_ext == "jpg"
        assert cand.detected_ext == "png"
        assert cand.detected_mime == "image/png"

    def test_matching_extension_is_noop(self, tmp_path: Path):
        path = tmp_path / "photo.png"
        path.write_bytes(sig.PNG)
        assert classify(path, FORMATS) is None

    def test_detected_type_outside_allow_list_is_ignored(self, tmp_path: Path):
        path = tmp_path / "doc.jpg"
        path.write_bytes(sig.PDF)
        assert classify(path, FORMATS) is None

    def test_allow_list_restricts_candidates(self, tmp_path: Path):
        path = tmp_path / "photo.jpg"
        path.write_bytes(sig.PNG)
        assert classify(path, frozenset({"gif"})) is None

    def test_current_extension_is_unconstrained(self, tmp_path: Path):
        path = tmp_path / "movie.bin"
        path.write_bytes(sig.MKV)

        cand = classify(path, FORMATS)

        assert cand is not None
        assert cand.corrected == tmp_path / "movie.mkv"

    def test_file_without_extension(self, tmp_path: Path):
        path = tmp_path / "clip"
        path.write_bytes(sig.WEBM)

        cand = classify(path, FORMATS)

        assert cand is not None
        assert cand.current_ext == ""
        assert cand.corrected == tmp_path / "clip.webm"

    def test_uppercase_extension_is_treated_as_mismatch(self, tmp_path: Path):
        path = tmp_path / "photo.JPG"
        path.write_bytes(sig.JPEG)

        cand = classify(path, FORMATS)

        assert cand is not None
        assert cand.corrected == tmp_path / "photo.jpg"

    def test_text_file_is_never_a_candidate(self, tmp_path: Path):
        path = tmp_path / "notes.txt"
        path.write_bytes(sig.TEXT)
        assert classify(path, FORMATS) is None


class TestScan:

    def test_scan_recurses_into_subdirectories(self, tmp_path: Path):
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        (tmp_path / "top.jpg").write_bytes(sig.PNG)
        (nested / "deep.gif").write_bytes(sig.JPEG)
        (nested / "ok.png").write_bytes(sig.PNG)
        (nested / "notes.txt").write_bytes(sig.TEXT)

        entries = scan(tmp_path, FORMATS)
        found = {(c.original.name, c.corrected.name) for c in candidates(entries)}

        assert found == {("top.jpg", "top.png"), ("deep.gif", "deep.jpg")}
        assert len(entries) == 4
        assert all(e.ok for e in entries)

    def test_directories_are_not_entries(self, tmp_path: Path):
        (tmp_path / "album.jpg").mkdir()
        assert scan(tmp_path, FORMATS) == []

    def test_broken_symlink_is_skipped(self, tmp_path: Path):
        link = tmp_path / "dangling.jpg"
        link.symlink_to(tmp_path / "missing.png")
        assert scan(tmp_path, FORMATS) == []

    def test_unreadable_file_becomes_error_entry(self, tmp_path: Path, monkeypatch):
        locked = tmp_path / "locked.jpg"
        locked.write_bytes(sig.PNG)
        (tmp_path / "photo.jpg").write_bytes(sig.PNG)
        real_detect = scanner.detect_filetype

        def _detect(path):
            if path == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_detect(path)

        monkeypatch.setattr("extfix.scanner.detect_filetype", _detect)

        entries = scan(tmp_path, FORMATS)

        errors = [e for e in entries if not e.ok]
        assert [e.path for e in errors] == [locked]
        assert errors[0].candidate is None
        assert "PermissionError" in errors[0].error
        assert [c.original for c in candidates(entries)] == [tmp_path / "photo.jpg"]

    def test_non_utf8_file_name_becomes_error_entry(self, tmp_path: Path):
        bad = tmp_path / os.fsdecode(b"bad\xff.jpg")
        bad.write_bytes(sig.PNG)
        (tmp_path / "photo.jpg").write_bytes(sig.PNG)

        entries = scan(tmp_path, FORMATS)

        errors = [e for e in entries if not e.ok]
        assert [e.path for e in errors] == [bad]
        assert "UnicodeEncodeError" in errors[0].error
        assert [c.original for c in candidates(entries)] == [tmp_path / "photo.jpg"]
