"""Canonical image formats, aliases and mime types."""

from __future__ import annotations

from enum import Enum
from typing import Final

from ..exceptions import UnsupportedFormatError


class ImageFormat(str, Enum):
    """Canonical image formats.

    The value is the canonical short extension. "jpeg" is an alias of JPEG.
    """
    JPEG = "jpg"
    PNG = "png"
    WEBP = "webp"
    BMP = "bmp"
    ICO = "ico"
    HEIC = "heic"


_ALIASES: Final[dict[str, ImageFormat]] = {
    "jpeg": ImageFormat.JPEG,
}

MIME_TYPES: Final[dict[ImageFormat, str]] = {
    ImageFormat.JPEG: "image/jpeg",
    ImageFormat.PNG: "image/png",
    ImageFormat.WEBP: "image/webp",
    ImageFormat.BMP: "image/bmp",
    ImageFormat.ICO: "image/x-icon",
    ImageFormat.HEIC: "image/heic",
}

# Pillow format names used for open/save
PIL_FORMATS: Final[dict[ImageFormat, str]] = {
    ImageFormat.JPEG: "JPEG",
    ImageFormat.PNG: "PNG",
    ImageFormat.WEBP: "WEBP",
    ImageFormat.BMP: "BMP",
    ImageFormat.ICO: "ICO",
    ImageFormat.HEIC: "HEIF",
}


def _clean(token: str) -> str:
    return token.strip().lower().lstrip(".")


def normalize(token: str | ImageFormat) -> ImageFormat:
    """Resolve a format token to its canonical format.

    Args:
        token: Format token such as "png", "jpeg", ".JPG" or an ImageFormat

    Returns:
        Canonical ImageFormat

    Raises:
        UnsupportedFormatError: If the token names no supported format
    """
    if isinstance(token, ImageFormat):
        return token

    cleaned = _clean(token)
    if cleaned in _ALIASES:
        return _ALIASES[cleaned]
    try:
        return ImageFormat(cleaned)
    except ValueError:
        raise UnsupportedFormatError(token) from None


def is_supported(token: str | ImageFormat) -> bool:
    """Check whether a token normalizes to one of the supported formats."""
    try:
        normalize(token)
    except UnsupportedFormatError:
        return False
    return True


def mime_of(fmt: str | ImageFormat) -> str:
    """Get the mime type advertised for a format."""
    return MIME_TYPES[normalize(fmt)]


def pil_format_of(fmt: str | ImageFormat) -> str:
    """Get the Pillow format name for a format."""
    return PIL_FORMATS[normalize(fmt)]


def extension_of(raw_token: str | ImageFormat, fmt: ImageFormat | None = None) -> str:
    """Get the file extension used in output names.

    The "jpeg" spelling is preserved when the caller asked for it; every
    other token maps to the canonical short extension.

    Args:
        raw_token: Format token exactly as requested
        fmt: Canonical format (resolved from raw_token when omitted)

    Returns:
        Extension without leading dot
    """
    if fmt is None:
        fmt = normalize(raw_token)
    if not isinstance(raw_token, ImageFormat) and _clean(raw_token) == "jpeg":
        return "jpeg"
    return fmt.value


def detect_format(mime_type: str | None, filename: str | None) -> str:
    """Detect the source format token of an input file.

    The mime subtype wins when it names a supported format. Otherwise the
    filename extension is used, with "jpeg" folded to "jpg".

    Args:
        mime_type: Mime type reported for the file (e.g. "image/png"), may be empty
        filename: Original file name, may be empty

    Returns:
        Lowercase format token

    Raises:
        UnsupportedFormatError: If neither hint names a supported format
    """
    if mime_type:
        _, _, subtype = mime_type.partition("/")
        subtype = subtype.lower()
        if subtype and is_supported(subtype):
            return subtype

    ext = ""
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].lower()
    if ext == "jpeg":
        ext = "jpg"
    if not ext or not is_supported(ext):
        raise UnsupportedFormatError(ext or (filename or ""))
    return ext


def available_targets(source_token: str | ImageFormat) -> list[ImageFormat]:
    """List formats a source can be converted to (everything but itself)."""
    source = normalize(source_token)
    return [fmt for fmt in ImageFormat if fmt is not source]
