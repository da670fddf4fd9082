# extfix/filetype.py

from __future__ import annotations
from pathlib import Path

from .model import DetectionResult

# --- extension/MIME table -------------------------------------------------------

_EXT_MIME = {
    "jpg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
    "tif": "image/tiff",
    "ico": "image/vnd.microsoft.icon",
    "avif": "image/avif",
    "heif": "image/heif",
    "mp4": "video/mp4",
    "m4v": "video/x-m4v",
    "m4a": "audio/mp4",
    "mov": "video/quicktime",
    "3gp": "video/3gpp",
    "webm": "video/webm",
    "mkv": "video/x-matroska",
    "avi": "video/x-msvideo",
    "wav": "audio/x-wav",
    "mp3": "audio/mpeg",
    "flac": "audio/x-flac",
    "ogg": "audio/ogg",
    "pdf": "application/pdf",
    "zip": "application/zip",
    "gz": "application/gzip",
    "bz2": "application/x-bzip2",
    "xz": "application/x-xz",
    "7z": "application/x-7z-compressed",
    "rar": "application/vnd.rar",
}

HEAD_BYTES = 8192


def _result(ext: str) -> DetectionResult:
    return DetectionResult(ext=ext, mime=_EXT_MIME[ext])


# --- sniffers -------------------------------------------------------------------


def _read_head(p: Path, head_bytes: int = HEAD_BYTES) -> bytes:
    """Read the first bytes of a file. Raises OSError for unreadable entries."""
    with p.open("rb") as f:
        return f.read(head_bytes)


def _is_jpeg(head: bytes) -> bool:
    return head.startswith(b"\xFF\xD8\xFF")


def _is_png(head: bytes) -> bool:
    return head.startswith(b"\x89PNG\r\n\x1a\n")


def _is_gif(head: bytes) -> bool:
    return head.startswith(b"GIF87a") or head.startswith(b"GIF89a")


def _is_tiff(head: bytes) -> bool:
    return head.startswith(b"II*\x00") or head.startswith(b"MM\x00*")


def _is_bmp(head: bytes) -> bool:
    # reserved header fields are always zero
    return head.startswith(b"BM") and len(head) >= 14 and head[6:10] == b"\x00\x00\x00\x00"


def _is_ico(head: bytes) -> bool:
    return head.startswith(b"\x00\x00\x01\x00") and len(head) >= 6 and head[4:6] != b"\x00\x00"


def _is_riff(head: bytes, fourcc: bytes) -> bool:
    return head[:4] == b"RIFF" and len(head) >= 12 and head[8:12] == fourcc


def _ftyp_brands(head: bytes) -> tuple[bytes, set[bytes]] | None:
    """Major and compatible brands of an ISO base media file, or None without an ftyp box."""
    if len(head) < 12 or head[4:8] != b"ftyp":
        return None
    box_size = min(int.from_bytes(head[0:4], "big"), len(head))
    compatible = {head[i:i + 4] for i in range(16, box_size - 3, 4)}
    return head[8:12], compatible


_AVIF_BRANDS = {b"avif", b"avis"}
_HEIF_BRANDS = {b"heic", b"heix", b"hevc", b"hevx"}
_MIAF_BRANDS = {b"mif1", b"msf1"}
_M4V_BRANDS = {b"M4V ", b"M4VH", b"M4VP"}
_3GP_BRANDS = {b"3gp4", b"3gp5", b"3gp6", b"3gp7", b"3gs7", b"3ge6", b"3ge7", b"3gg6"}
_MP4_BRANDS = {
    b"isom", b"iso2", b"iso3", b"iso4", b"iso5", b"iso6",
    b"mp41", b"mp42", b"mp4v", b"avc1", b"dash", b"mmp4",
    b"M4B ", b"M4P ", b"F4V ", b"f4v ", b"MSNV",
}


def _iso_media(brand: bytes, compatible: set[bytes]) -> DetectionResult | None:
    """Refine an ftyp file by its brands. Unknown brands (e.g. raw photos) are not matched."""
    if brand in _AVIF_BRANDS:
        return _result("avif")
    if brand in _HEIF_BRANDS:
        return _result("heif")
    if brand in _MIAF_BRANDS:
        # generic image container, the compatible brands name the codec
        if compatible & _AVIF_BRANDS:
            return _result("avif")
        return _result("heif")
    if brand in _M4V_BRANDS:
        return _result("m4v")
    if brand == b"M4A ":
        return _result("m4a")
    if brand == b"qt  ":
        return _result("mov")
    if brand in _3GP_BRANDS:
        return _result("3gp")
    if brand in _MP4_BRANDS or brand.startswith(b"ND"):
        return _result("mp4")
    return None


def _ebml_doctype(head: bytes) -> bytes | None:
    """DocType string of an EBML (Matroska/WebM) header, if present."""
    if not head.startswith(b"\x1A\x45\xDF\xA3"):
        return None
    i = head.find(b"\x42\x82", 4, 64)
    if i < 0 or i + 3 > len(head):
        return None
    size_byte = head[i + 2]
    if not size_byte & 0x80:
        return None
    size = size_byte & 0x7F
    return head[i + 3:i + 3 + size]


def _is_mp3(head: bytes) -> bool:
    return head.startswith(b"ID3") or (len(head) > 2 and head[0] == 0xFF and (head[1] & 0xE0) == 0xE0)


def _is_7z(head: bytes) -> bool:
    return head.startswith(b"7z\xBC\xAF\x27\x1C")


def _is_rar(head: bytes) -> bool:
    return head.startswith(b"Rar!\x1A\x07\x00") or head.startswith(b"Rar!\x1A\x07\x01\x00")


def _is_gz(head: bytes) -> bool:
    return head.startswith(b"\x1F\x8B\x08")


def _is_bz2(head: bytes) -> bool:
    return head.startswith(b"BZh")


def _is_xz(head: bytes) -> bool:
    return head.startswith(b"\xFD7zXZ\x00")


# --- public API -----------------------------------------------------------------


def sniff(head: bytes) -> DetectionResult | None:
    """Match the leading bytes of a file against known signatures."""
    if _is_jpeg(head):
        return _result("jpg")
    if _is_png(head):
        return _result("png")
    if _is_gif(head):
        return _result("gif")
    if _is_tiff(head):
        return _result("tif")
    if _is_bmp(head):
        return _result("bmp")
    if _is_ico(head):
        return _result("ico")

    if _is_riff(head, b"WEBP"):
        return _result("webp")
    if _is_riff(head, b"AVI "):
        return _result("avi")
    if _is_riff(head, b"WAVE"):
        return _result("wav")

    brands = _ftyp_brands(head)
    if brands is not None:
        return _iso_media(*brands)

    doctype = _ebml_doctype(head)
    if doctype == b"webm":
        return _result("webm")
    if doctype == b"matroska":
        return _result("mkv")

    if head.startswith(b"fLaC"):
        return _result("flac")
    if head.startswith(b"OggS"):
        return _result("ogg")
    if _is_mp3(head):
        return _result("mp3")

    if head.startswith(b"%PDF-"):
        return _result("pdf")
    if head.startswith((b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")):
        return _result("zip")
    if _is_7z(head):
        return _result("7z")
    if _is_rar(head):
        return _result("rar")
    if _is_gz(head):
        return _result("gz")
    if _is_bz2(head):
        return _result("bz2")
    if _is_xz(head):
        return _result("xz")

    return None


def detect_filetype(path: Path) -> DetectionResult | None:
    """Detect the file type of a given path based on magic bytes.

    Returns None when no known signature matches.
    Raises OSError when the entry cannot be read as a file.
    """
    return sniff(_read_head(path))
