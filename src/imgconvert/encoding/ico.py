"""Single-entry ICO encoding with an embedded PNG image."""

from __future__ import annotations

import logging
import math
import struct
from typing import TYPE_CHECKING, Final

from PIL import Image

from ..models.formats import ImageFormat, mime_of
from ..models.raster import EncodedImage, Raster

if TYPE_CHECKING:
    from .platform import PlatformEncoder

_LOGGER = logging.getLogger(__name__)

ICO_CANVAS_SIZE: Final = 256
ICONDIR_SIZE: Final = 6
ICONDIRENTRY_SIZE: Final = 16
ICO_HEADER_SIZE: Final = ICONDIR_SIZE + ICONDIRENTRY_SIZE  # embedded image offset (22)
ICO_TYPE_ICON: Final = 1

# ICONDIR: [reserved:2][type:2][count:2]
_ICONDIR = struct.Struct("<HHH")
# ICONDIRENTRY: [width:1][height:1][palette:1][reserved:1][planes:2][bit_count:2]
#               [bytes_in_resource:4][image_offset:4]
_ICONDIRENTRY = struct.Struct("<BBBBHHII")

_TRANSPARENT = (0, 0, 0, 0)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def icon_placement(
    width: int,
    height: int,
    canvas_size: int = ICO_CANVAS_SIZE,
) -> tuple[tuple[int, int], tuple[int, int]]:
    """Compute scaled size and centered offset of an image on the icon canvas.

    The image is only ever shrunk, never enlarged.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        canvas_size: Square canvas edge in pixels

    Returns:
        ((scaled_width, scaled_height), (offset_x, offset_y))
    """
    scale = min(canvas_size / width, canvas_size / height, 1)
    scaled_w = _round_half_up(width * scale)
    scaled_h = _round_half_up(height * scale)
    offset_x = (canvas_size - scaled_w) // 2
    offset_y = (canvas_size - scaled_h) // 2
    return (scaled_w, scaled_h), (offset_x, offset_y)


def fit_icon_canvas(raster: Raster, canvas_size: int = ICO_CANVAS_SIZE) -> Raster:
    """Scale and center a raster onto a transparent square canvas.

    Args:
        raster: Source raster
        canvas_size: Square canvas edge in pixels

    Returns:
        New canvas_size x canvas_size raster
    """
    (scaled_w, scaled_h), offset = icon_placement(raster.width, raster.height, canvas_size)
    canvas = Image.new("RGBA", (canvas_size, canvas_size), _TRANSPARENT)

    # Extreme aspect ratios can round one side to 0: nothing to draw
    if scaled_w > 0 and scaled_h > 0:
        image = raster.to_image()
        if image.size != (scaled_w, scaled_h):
            _LOGGER.debug("Scaling icon source from %s to %s", image.size, (scaled_w, scaled_h))
            image = image.resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)
        canvas.paste(image, offset)

    return Raster.from_image(canvas)


def build_ico_container(png_data: bytes, canvas_size: int = ICO_CANVAS_SIZE) -> bytes:
    """Wrap PNG bytes in a single-entry ICO container.

    Args:
        png_data: Encoded PNG of the canvas_size x canvas_size icon
        canvas_size: Icon edge in pixels (256 is stored as 0)

    Returns:
        ICONDIR + ICONDIRENTRY + png_data
    """
    dimension = 0 if canvas_size == 256 else canvas_size
    header = _ICONDIR.pack(0, ICO_TYPE_ICON, 1)
    entry = _ICONDIRENTRY.pack(
        dimension,
        dimension,
        0,    # color palette
        0,    # reserved
        1,    # planes
        32,   # bit count
        len(png_data),
        ICO_HEADER_SIZE,
    )
    return header + entry + png_data


async def encode_ico(
    raster: Raster,
    encoder: PlatformEncoder,
    canvas_size: int = ICO_CANVAS_SIZE,
) -> EncodedImage:
    """Encode a raster as a single-resolution ICO.

    Args:
        raster: Source raster
        encoder: Platform encoder used for the embedded PNG
        canvas_size: Icon edge in pixels

    Returns:
        EncodedImage with ICO container bytes

    Raises:
        EncodeError: If the embedded PNG encode fails
    """
    canvas = fit_icon_canvas(raster, canvas_size)
    png = await encoder.encode(canvas, ImageFormat.PNG, 1.0)
    data = build_ico_container(png.data, canvas_size)
    _LOGGER.debug("Encoded ICO: %d bytes (embedded PNG %d bytes)", len(data), len(png.data))
    return EncodedImage(data=data, mime=mime_of(ImageFormat.ICO))
