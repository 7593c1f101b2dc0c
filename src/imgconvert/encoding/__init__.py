"""Image encoding."""

from .bmp import build_bmp_header, encode_bmp, rgba_to_bgra
from .ico import build_ico_container, encode_ico, fit_icon_canvas, icon_placement
from .platform import (
    PLATFORM_FORMATS,
    PillowEncoder,
    PlatformEncoder,
    encode_with_pillow,
    quality_to_pil,
)

__all__ = [
    "PLATFORM_FORMATS",
    "PillowEncoder",
    "PlatformEncoder",
    "build_bmp_header",
    "build_ico_container",
    "encode_bmp",
    "encode_ico",
    "encode_with_pillow",
    "fit_icon_canvas",
    "icon_placement",
    "quality_to_pil",
]
