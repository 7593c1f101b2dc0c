"""Platform encoders for formats with mature library support."""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Final, Protocol

from PIL import Image
from pillow_heif import register_heif_opener

from ..exceptions import EncodeError
from ..models.formats import ImageFormat, mime_of, pil_format_of
from ..models.raster import EncodedImage, Raster

_LOGGER = logging.getLogger(__name__)

register_heif_opener()

PLATFORM_FORMATS: Final[frozenset[ImageFormat]] = frozenset({
    ImageFormat.PNG,
    ImageFormat.JPEG,
    ImageFormat.WEBP,
    ImageFormat.HEIC,
})

# Formats without an alpha channel
_OPAQUE_FORMATS: Final[frozenset[ImageFormat]] = frozenset({ImageFormat.JPEG})


class PlatformEncoder(Protocol):
    """Encodes rasters into formats with native/library encoders."""

    async def encode(self, raster: Raster, fmt: ImageFormat, quality: float) -> EncodedImage:
        """Encode a raster.

        Args:
            raster: Source raster
            fmt: One of PNG, JPEG, WEBP, HEIC
            quality: Encoder quality 0.0-1.0 (ignored by lossless formats)

        Returns:
            Encoded bytes tagged with the mime type actually produced

        Raises:
            EncodeError: If the format is unsupported or encoding fails
        """
        ...


def quality_to_pil(quality: float) -> int:
    """Map 0.0-1.0 quality onto Pillow's 0-100 scale."""
    return max(0, min(100, round(quality * 100)))


def encode_with_pillow(raster: Raster, fmt: ImageFormat, quality: float) -> EncodedImage:
    """Encode a raster synchronously with Pillow.

    Raises:
        EncodeError: If the format is unsupported or Pillow fails
    """
    if fmt not in PLATFORM_FORMATS:
        raise EncodeError(f"Platform encoder does not support {fmt.name}")

    pil_format = pil_format_of(fmt)
    image = raster.to_image()
    if fmt in _OPAQUE_FORMATS:
        image = image.convert("RGB")

    save_kwargs: dict[str, object] = {}
    if fmt is not ImageFormat.PNG:
        save_kwargs["quality"] = quality_to_pil(quality)

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=pil_format, **save_kwargs)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"{fmt.name} encode failed: {e}") from e
    finally:
        image.close()

    data = buffer.getvalue()
    if not data:
        raise EncodeError(f"{fmt.name} encoder produced no data")

    # Report what Pillow says it wrote; callers coerce when it differs
    mime = Image.MIME.get(pil_format) or mime_of(fmt)
    _LOGGER.debug("Pillow encoded %s (%s): %d bytes", pil_format, mime, len(data))
    return EncodedImage(data=data, mime=mime)


class PillowEncoder:
    """PlatformEncoder backed by Pillow and pillow-heif.

    Encoding runs in a worker thread so the event loop is not blocked.
    """

    async def encode(self, raster: Raster, fmt: ImageFormat, quality: float) -> EncodedImage:
        return await asyncio.to_thread(encode_with_pillow, raster, fmt, quality)
