"""Test decoder fallback chain."""

from __future__ import annotations

import pytest

from imgconvert.decoding.decoder import ImageDecoder, decode_incremental, decode_with_pillow
from imgconvert.exceptions import DecodeError
from imgconvert.models.raster import Raster

_GARBAGE = b"definitely not an image" * 10


class TestStrategies:
    """Test individual decode strategies."""

    def test_decode_with_pillow(self, png_bytes, gradient_image):
        raster = decode_with_pillow(png_bytes)
        assert raster.size == (4, 3)
        assert raster.pixels == gradient_image.tobytes()

    def test_decode_incremental(self, png_bytes, gradient_image):
        raster = decode_incremental(png_bytes)
        assert raster.size == (4, 3)
        assert raster.pixels == gradient_image.tobytes()

    @pytest.mark.parametrize("strategy", [decode_with_pillow, decode_incremental])
    def test_garbage_raises_decode_error(self, strategy):
        with pytest.raises(DecodeError):
            strategy(_GARBAGE)


class TestImageDecoder:
    """Test ordered fallback between strategies."""

    def test_primary_success_skips_fallback(self, make_raster):
        calls: list[str] = []
        raster = make_raster(1, 1)

        def primary(data: bytes) -> Raster:
            calls.append("primary")
            return raster

        def secondary(data: bytes) -> Raster:
            calls.append("secondary")
            return raster

        assert ImageDecoder([primary, secondary]).decode_sync(b"x") is raster
        assert calls == ["primary"]

    def test_falls_back_on_primary_failure(self, make_raster):
        calls: list[str] = []
        raster = make_raster(2, 2)

        def primary(data: bytes) -> Raster:
            calls.append("primary")
            raise DecodeError("primary broke")

        def secondary(data: bytes) -> Raster:
            calls.append("secondary")
            return raster

        assert ImageDecoder([primary, secondary]).decode_sync(b"x") is raster
        assert calls == ["primary", "secondary"]

    def test_all_strategies_fail(self):
        with pytest.raises(DecodeError, match="Could not decode broken.png"):
            ImageDecoder().decode_sync(_GARBAGE, "broken.png")

    def test_empty_input(self):
        with pytest.raises(DecodeError, match="empty"):
            ImageDecoder().decode_sync(b"")

    def test_requires_a_strategy(self):
        with pytest.raises(ValueError, match="At least one"):
            ImageDecoder([])


@pytest.mark.asyncio
async def test_async_decode(png_bytes) -> None:
    raster = await ImageDecoder().decode(png_bytes, "image/png", "gradient.png")
    assert raster.size == (4, 3)


class TestOversizedInput:
    """Pillow's decompression bomb guard surfaces as DecodeError."""

    @pytest.mark.parametrize("strategy", [decode_with_pillow, decode_incremental])
    def test_strategy_wraps_bomb_error(self, strategy, oversized_png_bytes):
        with pytest.raises(DecodeError):
            strategy(oversized_png_bytes)

    def test_decoder_wraps_bomb_error(self, oversized_png_bytes):
        with pytest.raises(DecodeError, match="Could not decode huge.png"):
            ImageDecoder().decode_sync(oversized_png_bytes, "huge.png")

    def test_unexpected_strategy_error_falls_through(self, make_raster):
        raster = make_raster(1, 1)

        def primary(data: bytes) -> Raster:
            raise RuntimeError("host decoder crashed")

        def secondary(data: bytes) -> Raster:
            return raster

        assert ImageDecoder([primary, secondary]).decode_sync(b"x") is raster

    def test_unexpected_error_from_last_strategy_wrapped(self):
        def only(data: bytes) -> Raster:
            raise RuntimeError("host decoder crashed")

        with pytest.raises(DecodeError, match="host decoder crashed") as exc_info:
            ImageDecoder([only]).decode_sync(b"x")

        assert isinstance(exc_info.value.__cause__, RuntimeError)
