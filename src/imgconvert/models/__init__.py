"""Data models for image conversion."""

from .formats import (
    MIME_TYPES,
    ImageFormat,
    available_targets,
    detect_format,
    extension_of,
    is_supported,
    mime_of,
    normalize,
    pil_format_of,
)
from .options import ConversionOptions
from .raster import ConversionRequest, ConversionResult, EncodedImage, Raster

__all__ = [
    "ConversionOptions",
    "ConversionRequest",
    "ConversionResult",
    "EncodedImage",
    "ImageFormat",
    "MIME_TYPES",
    "Raster",
    "available_targets",
    "detect_format",
    "extension_of",
    "is_supported",
    "mime_of",
    "normalize",
    "pil_format_of",
]
