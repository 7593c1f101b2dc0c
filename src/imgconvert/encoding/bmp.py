"""Uncompressed 32-bit top-down BMP encoding."""

from __future__ import annotations

import logging
import struct
from typing import Final

import numpy as np

from ..models.formats import ImageFormat, mime_of
from ..models.raster import EncodedImage, Raster

_LOGGER = logging.getLogger(__name__)

FILE_HEADER_SIZE: Final = 14
INFO_HEADER_SIZE: Final = 40
BMP_HEADER_SIZE: Final = FILE_HEADER_SIZE + INFO_HEADER_SIZE  # pixel data offset (54)
BMP_PIXELS_PER_METER: Final = 2835  # ~72 DPI
BI_RGB: Final = 0

# BITMAPFILEHEADER: [signature:2][file_size:4][reserved:4][data_offset:4]
_FILE_HEADER = struct.Struct("<2sIII")
# BITMAPINFOHEADER: [size:4][width:i4][height:i4][planes:2][bpp:2][compression:4]
#                   [image_size:4][x_ppm:i4][y_ppm:i4][colors_used:4][colors_important:4]
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")

# RGBA -> BGRA channel order
_BGRA_ORDER = [2, 1, 0, 3]


def build_bmp_header(width: int, height: int) -> bytes:
    """Build the 54-byte file + info header for a top-down 32bpp bitmap.

    Height is written negative to mark rows as stored top-to-bottom.

    Args:
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        54 header bytes
    """
    data_size = width * height * 4
    file_header = _FILE_HEADER.pack(b"BM", BMP_HEADER_SIZE + data_size, 0, BMP_HEADER_SIZE)
    info_header = _INFO_HEADER.pack(
        INFO_HEADER_SIZE,
        width,
        -height,
        1,       # color planes
        32,      # bits per pixel
        BI_RGB,
        data_size,
        BMP_PIXELS_PER_METER,
        BMP_PIXELS_PER_METER,
        0,       # colors in palette
        0,       # important colors
    )
    return file_header + info_header


def rgba_to_bgra(pixels: bytes) -> bytes:
    """Swap red and blue channels of an RGBA buffer, keeping alpha."""
    rgba = np.frombuffer(pixels, dtype=np.uint8).reshape(-1, 4)
    return rgba[:, _BGRA_ORDER].tobytes()


def encode_bmp(raster: Raster) -> EncodedImage:
    """Encode a raster as an uncompressed 32bpp top-down BMP.

    Rows need no padding: 32-bit rows are always a multiple of 4 bytes.

    Args:
        raster: Source raster

    Returns:
        EncodedImage of exactly 54 + width * height * 4 bytes
    """
    data = build_bmp_header(raster.width, raster.height) + rgba_to_bgra(raster.pixels)
    _LOGGER.debug("Encoded %dx%d BMP: %d bytes", raster.width, raster.height, len(data))
    return EncodedImage(data=data, mime=mime_of(ImageFormat.BMP))
