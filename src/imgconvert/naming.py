"""Per-format output file name allocation."""

from __future__ import annotations

import logging
import threading

from .models.formats import ImageFormat, extension_of, normalize

_LOGGER = logging.getLogger(__name__)

NAME_PREFIX = "converted"


class NameAllocator:
    """Hands out unique, increasing output names per canonical format.

    Counters start empty and only ever increase. Aliases share a counter
    ("jpg" and "jpeg" both count JPEG outputs). Allocation is atomic, so
    concurrent conversions never receive the same name.
    """

    def __init__(self, prefix: str = NAME_PREFIX):
        self.prefix = prefix
        self._counts: dict[ImageFormat, int] = {}
        self._lock = threading.Lock()

    def allocate(self, raw_token: str | ImageFormat) -> str:
        """Allocate the next file name for a target format.

        Args:
            raw_token: Target format token as requested by the caller

        Returns:
            File name such as "converted_3.png"

        Raises:
            UnsupportedFormatError: If the token is not a supported format
        """
        fmt = normalize(raw_token)
        with self._lock:
            count = self._counts.get(fmt, 0) + 1
            self._counts[fmt] = count

        name = f"{self.prefix}_{count}.{extension_of(raw_token, fmt)}"
        _LOGGER.debug("Allocated output name %s", name)
        return name

    def peek(self, raw_token: str | ImageFormat) -> int:
        """Get how many names were allocated for a format so far."""
        fmt = normalize(raw_token)
        with self._lock:
            return self._counts.get(fmt, 0)
