"""Input decoding."""

from .decoder import (
    DEFAULT_STRATEGIES,
    DecodeStrategy,
    ImageDecoder,
    decode_incremental,
    decode_with_pillow,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "DecodeStrategy",
    "ImageDecoder",
    "decode_incremental",
    "decode_with_pillow",
]
