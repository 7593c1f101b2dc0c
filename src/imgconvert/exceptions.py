"""Exception hierarchy for image conversion."""

from __future__ import annotations


class ImageConvertError(Exception):
    """Base exception for all conversion errors."""


class UnsupportedFormatError(ImageConvertError):
    """Format token is not one of the supported image formats."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unsupported image format: {token!r}")


class NoOpConversionError(ImageConvertError):
    """Source and target formats are the same."""


class DecodeError(ImageConvertError):
    """Input could not be decoded into a raster (unreadable or corrupt)."""


class EncodeError(ImageConvertError):
    """Encoding step failed (native encoder or embedded PNG)."""
