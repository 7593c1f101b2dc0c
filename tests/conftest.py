"""Shared fixtures for imgconvert tests."""

from __future__ import annotations

import io
import struct
import zlib

import pytest
from PIL import Image

from imgconvert.models.raster import Raster


def _make_raster(width: int, height: int, rgba: tuple[int, int, int, int] = (10, 20, 30, 255)) -> Raster:
    """Build a raster filled with one color."""
    return Raster(width=width, height=height, pixels=bytes(rgba) * (width * height))


@pytest.fixture
def make_raster():
    """Factory building single-color rasters."""
    return _make_raster


@pytest.fixture
def gradient_image() -> Image.Image:
    """Small RGBA image with distinct pixels."""
    image = Image.new("RGBA", (4, 3))
    for y in range(3):
        for x in range(4):
            image.putpixel((x, y), (x * 60, y * 100, 200, 255 - x * 10))
    return image


@pytest.fixture
def png_bytes(gradient_image: Image.Image) -> bytes:
    """PNG encoding of gradient_image."""
    buffer = io.BytesIO()
    gradient_image.save(buffer, format="PNG")
    return buffer.getvalue()


def _png_chunk(tag: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", len(payload)) + tag + payload + struct.pack(">I", zlib.crc32(tag + payload))


@pytest.fixture
def oversized_png_bytes() -> bytes:
    """PNG whose IHDR declares 30000x30000 pixels, past Pillow's bomb limit."""
    ihdr = struct.pack(">IIBBBBB", 30000, 30000, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00"))
        + _png_chunk(b"IEND", b"")
    )
