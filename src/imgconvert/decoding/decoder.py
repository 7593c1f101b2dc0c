"""Decode input files into rasters with a fallback chain of strategies."""

from __future__ import annotations

import asyncio
import io
import logging
from collections.abc import Callable, Sequence

from PIL import Image, ImageFile
from pillow_heif import register_heif_opener

from ..exceptions import DecodeError
from ..models.raster import Raster

_LOGGER = logging.getLogger(__name__)

register_heif_opener()

DecodeStrategy = Callable[[bytes], Raster]

_FEED_BLOCK_SIZE = 64 * 1024


def decode_with_pillow(data: bytes) -> Raster:
    """Decode a complete file with Image.open.

    Raises:
        DecodeError: If Pillow cannot identify or load the data
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            return Raster.from_image(image)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Pillow decode failed: {e}") from e


def decode_incremental(data: bytes) -> Raster:
    """Decode by feeding data through Pillow's incremental parser.

    Slower than decode_with_pillow but tolerates streams the one-shot
    open path rejects.

    Raises:
        DecodeError: If the parser cannot produce an image
    """
    parser = ImageFile.Parser()
    try:
        for start in range(0, len(data), _FEED_BLOCK_SIZE):
            parser.feed(data[start:start + _FEED_BLOCK_SIZE])
        image = parser.close()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Incremental decode failed: {e}") from e

    try:
        return Raster.from_image(image)
    finally:
        image.close()


DEFAULT_STRATEGIES: tuple[DecodeStrategy, ...] = (decode_with_pillow, decode_incremental)


class ImageDecoder:
    """Decoder running strategies in order until one yields a raster."""

    def __init__(self, strategies: Sequence[DecodeStrategy] = DEFAULT_STRATEGIES):
        if not strategies:
            raise ValueError("At least one decode strategy is required")
        self.strategies = tuple(strategies)

    def decode_sync(self, data: bytes, hint: str | None = None) -> Raster:
        """Decode data, falling back through strategies.

        Args:
            data: Raw file bytes
            hint: Mime type or file name, used for log messages only

        Returns:
            Decoded raster

        Raises:
            DecodeError: If every strategy fails
        """
        if not data:
            raise DecodeError("Input is empty")

        errors: list[Exception] = []
        for strategy in self.strategies:
            try:
                raster = strategy(data)
            except Exception as e:
                _LOGGER.debug("Strategy %s failed for %s: %s", strategy.__name__, hint, e)
                errors.append(e)
                continue
            _LOGGER.debug(
                "Decoded %s with %s: %dx%d",
                hint,
                strategy.__name__,
                raster.width,
                raster.height,
            )
            return raster

        raise DecodeError(
            f"Could not decode {hint or 'input'}: {errors[-1]}"
        ) from errors[-1]

    async def decode(
            self,
            data: bytes,
            mime_hint: str | None = None,
            filename_hint: str | None = None,
    ) -> Raster:
        """Decode data in a worker thread.

        Args:
            data: Raw file bytes
            mime_hint: Mime type reported for the file
            filename_hint: Original file name

        Returns:
            Decoded raster

        Raises:
            DecodeError: If every strategy fails
        """
        hint = filename_hint or mime_hint
        return await asyncio.to_thread(self.decode_sync, data, hint)
