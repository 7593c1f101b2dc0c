"""Raster and encoded image value types."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from .formats import ImageFormat

BYTES_PER_PIXEL = 4


@dataclass(frozen=True, slots=True)
class Raster:
    """Decoded RGBA8 pixel grid.

    Pixels are row-major, top-to-bottom, left-to-right, 4 bytes per pixel
    as (R, G, B, A) with straight (non-premultiplied) alpha.
    """

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Raster dimensions must be positive, got {self.width}x{self.height}"
            )
        # Own an immutable copy of bytearray/memoryview input
        if not isinstance(self.pixels, bytes):
            object.__setattr__(self, "pixels", bytes(self.pixels))
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.pixels) != expected:
            raise ValueError(
                f"Pixel buffer is {len(self.pixels)} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @classmethod
    def from_image(cls, image: Image.Image) -> Raster:
        """Build a raster from a PIL Image (converted to RGBA)."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(width=image.width, height=image.height, pixels=image.tobytes())

    def to_image(self) -> Image.Image:
        """Create a new RGBA PIL Image holding a copy of the pixels."""
        return Image.frombytes("RGBA", self.size, self.pixels)


@dataclass(frozen=True, slots=True)
class EncodedImage:
    """Encoded image bytes with their advertised mime type."""

    data: bytes
    mime: str

    def __len__(self) -> int:
        return len(self.data)

    def with_mime(self, mime: str) -> EncodedImage:
        """Return the same bytes advertised under another mime type."""
        return EncodedImage(data=self.data, mime=mime)


@dataclass(frozen=True, slots=True)
class ConversionRequest:
    """One raster-to-container conversion.

    Format fields keep the caller's raw token so the "jpeg" spelling
    survives into the output file name. quality=None uses the options
    default for the target format.
    """

    raster: Raster
    source_format: str | ImageFormat
    target_format: str | ImageFormat
    quality: float | None = None

    def __post_init__(self) -> None:
        if self.quality is not None and not 0.0 <= self.quality <= 1.0:
            raise ValueError(f"quality out of range: {self.quality} (must be 0.0-1.0)")


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Successful conversion output."""

    image: EncodedImage
    filename: str
