"""Conversion options."""

from __future__ import annotations

from dataclasses import dataclass

from .formats import ImageFormat


def _check_quality(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} out of range: {value} (must be 0.0-1.0)")


@dataclass(frozen=True, slots=True)
class ConversionOptions:
    """Per-converter defaults applied when a request leaves them unset."""

    jpeg_quality: float = 0.92
    default_quality: float = 1.0
    icon_size: int = 256

    def __post_init__(self) -> None:
        _check_quality("jpeg_quality", self.jpeg_quality)
        _check_quality("default_quality", self.default_quality)
        # ICONDIRENTRY stores dimensions in one byte, 0 meaning 256
        if not 1 <= self.icon_size <= 256:
            raise ValueError(f"icon_size out of range: {self.icon_size} (must be 1-256)")

    def quality_for(self, fmt: ImageFormat) -> float:
        """Get the default encoder quality for a target format."""
        if fmt is ImageFormat.JPEG:
            return self.jpeg_quality
        return self.default_quality
