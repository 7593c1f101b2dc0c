"""Image Conversion Package.

  Converts decoded rasters into encoded image containers (BMP, ICO, PNG,
  JPEG, WEBP, HEIC) with byte-exact BMP and ICO writers.
  """

from .converter import ImageConverter, coerce_mime
from .decoding import ImageDecoder
from .encoding import PillowEncoder, PlatformEncoder, encode_bmp, encode_ico
from .exceptions import (
    DecodeError,
    EncodeError,
    ImageConvertError,
    NoOpConversionError,
    UnsupportedFormatError,
)
from .models import (
    MIME_TYPES,
    ConversionOptions,
    ConversionRequest,
    ConversionResult,
    EncodedImage,
    ImageFormat,
    Raster,
    available_targets,
    detect_format,
    extension_of,
    is_supported,
    mime_of,
    normalize,
)
from .naming import NameAllocator

__version__ = "0.1.0"

__all__ = [
    # Main API
    "ImageConverter",
    "NameAllocator",
    "coerce_mime",
    # Collaborators
    "ImageDecoder",
    "PillowEncoder",
    "PlatformEncoder",
    "encode_bmp",
    "encode_ico",
    # Exceptions
    "ImageConvertError",
    "UnsupportedFormatError",
    "NoOpConversionError",
    "DecodeError",
    "EncodeError",
    # Models
    "ConversionOptions",
    "ConversionRequest",
    "ConversionResult",
    "EncodedImage",
    "ImageFormat",
    "Raster",
    # Format catalog
    "MIME_TYPES",
    "available_targets",
    "detect_format",
    "extension_of",
    "is_supported",
    "mime_of",
    "normalize",
]
