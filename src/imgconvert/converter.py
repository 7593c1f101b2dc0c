"""Raster-to-container conversion orchestration."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from .decoding import ImageDecoder
from .encoding import PillowEncoder, PlatformEncoder, encode_bmp, encode_ico
from .exceptions import DecodeError, EncodeError, NoOpConversionError
from .models.formats import ImageFormat, detect_format, mime_of, normalize
from .models.options import ConversionOptions
from .models.raster import ConversionRequest, ConversionResult, EncodedImage, Raster
from .naming import NameAllocator

_LOGGER = logging.getLogger(__name__)

HEIC_FAILURE_MESSAGE = "HEIC conversion failed"

_Handler = Callable[[Raster, float], Awaitable[EncodedImage]]


class ImageConverter:
    """Converts rasters and image files into a target container format.

    Usage:
        converter = ImageConverter()
        result = await converter.convert_file(data, "bmp", filename="photo.png")
        Path(result.filename).write_bytes(result.image.data)

    The name allocator is owned by the caller's session; pass the same one
    to every converter that should share output numbering.
    """

    def __init__(
            self,
            encoder: PlatformEncoder | None = None,
            decoder: ImageDecoder | None = None,
            names: NameAllocator | None = None,
            options: ConversionOptions | None = None,
    ):
        """Initialize converter.

        Args:
            encoder: Platform encoder for PNG/JPEG/WEBP/HEIC (default: Pillow)
            decoder: Decoder for convert_file input (default: Pillow fallback chain)
            names: Output name allocator (default: a new allocator)
            options: Quality and icon defaults (default: ConversionOptions())
        """
        self.encoder = encoder if encoder is not None else PillowEncoder()
        self.decoder = decoder if decoder is not None else ImageDecoder()
        self.names = names if names is not None else NameAllocator()
        self.options = options if options is not None else ConversionOptions()

        self._handlers: dict[ImageFormat, _Handler] = {
            ImageFormat.BMP: self._encode_bmp,
            ImageFormat.ICO: self._encode_ico,
            ImageFormat.PNG: self._platform_handler(ImageFormat.PNG),
            ImageFormat.JPEG: self._platform_handler(ImageFormat.JPEG),
            ImageFormat.WEBP: self._platform_handler(ImageFormat.WEBP),
            ImageFormat.HEIC: self._platform_handler(ImageFormat.HEIC),
        }

    async def convert(self, request: ConversionRequest) -> ConversionResult:
        """Encode a raster into the requested target format.

        Args:
            request: Raster plus source/target format tokens and quality

        Returns:
            ConversionResult with encoded bytes (mime matching the target)
            and a freshly allocated file name

        Raises:
            UnsupportedFormatError: If a format token is unknown
            NoOpConversionError: If source and target are the same format
            EncodeError: If encoding fails
        """
        source = normalize(request.source_format)
        target = normalize(request.target_format)
        self._check_not_noop(source, target)

        if source is ImageFormat.HEIC:
            try:
                image = await self._encode(request.raster, target, request.quality)
            except EncodeError as e:
                raise EncodeError(HEIC_FAILURE_MESSAGE) from e
        else:
            image = await self._encode(request.raster, target, request.quality)

        return self._finish(image, request.target_format, target)

    async def convert_file(
            self,
            data: bytes,
            target_format: str | ImageFormat,
            *,
            filename: str | None = None,
            mime_type: str | None = None,
            quality: float | None = None,
    ) -> ConversionResult:
        """Decode an input file and convert it to the target format.

        The source format is detected from mime_type, then filename.

        Args:
            data: Raw input file bytes
            target_format: Target format token (e.g. "png", "jpeg")
            filename: Original file name
            mime_type: Mime type reported for the file
            quality: Encoder quality 0.0-1.0 (default: per-format option)

        Returns:
            ConversionResult with encoded bytes and allocated file name

        Raises:
            UnsupportedFormatError: If source or target format is unknown
            NoOpConversionError: If source and target are the same format
            DecodeError: If the input cannot be decoded
            EncodeError: If encoding fails, or any step of a HEIC source fails
        """
        source_token = detect_format(mime_type, filename)
        source = normalize(source_token)
        target = normalize(target_format)
        self._check_not_noop(source, target)

        if source is ImageFormat.HEIC:
            try:
                raster = await self.decoder.decode(data, mime_type, filename)
                image = await self._encode(raster, target, quality)
            except (DecodeError, EncodeError) as e:
                raise EncodeError(HEIC_FAILURE_MESSAGE) from e
        else:
            raster = await self.decoder.decode(data, mime_type, filename)
            image = await self._encode(raster, target, quality)

        return self._finish(image, target_format, target)

    @staticmethod
    def _check_not_noop(source: ImageFormat, target: ImageFormat) -> None:
        if source is target:
            raise NoOpConversionError(
                f"Source and target are both {target.name}; nothing to convert"
            )

    async def _encode(
            self,
            raster: Raster,
            target: ImageFormat,
            quality: float | None,
    ) -> EncodedImage:
        if quality is None:
            quality = self.options.quality_for(target)
        _LOGGER.debug(
            "Encoding %dx%d raster as %s (quality=%.2f)",
            raster.width,
            raster.height,
            target.name,
            quality,
        )
        return await self._handlers[target](raster, quality)

    def _finish(
            self,
            image: EncodedImage,
            raw_target: str | ImageFormat,
            target: ImageFormat,
    ) -> ConversionResult:
        image = coerce_mime(image, mime_of(target))
        filename = self.names.allocate(raw_target)
        _LOGGER.info("Converted to %s: %s (%d bytes)", target.name, filename, len(image.data))
        return ConversionResult(image=image, filename=filename)

    async def _encode_bmp(self, raster: Raster, quality: float) -> EncodedImage:
        return encode_bmp(raster)

    async def _encode_ico(self, raster: Raster, quality: float) -> EncodedImage:
        return await encode_ico(raster, self.encoder, self.options.icon_size)

    def _platform_handler(self, fmt: ImageFormat) -> _Handler:
        async def handler(raster: Raster, quality: float) -> EncodedImage:
            try:
                return await self.encoder.encode(raster, fmt, quality)
            except EncodeError as e:
                message = HEIC_FAILURE_MESSAGE if fmt is ImageFormat.HEIC else "Conversion failed"
                raise EncodeError(message) from e

        return handler


def coerce_mime(image: EncodedImage, expected_mime: str) -> EncodedImage:
    """Force an encoded image's advertised mime type without touching its bytes.

    Platform encoders may silently substitute another output type; the
    result is still advertised as the requested target.
    """
    if not expected_mime or image.mime == expected_mime:
        return image
    _LOGGER.warning("Encoder produced %s, advertising as %s", image.mime, expected_mime)
    return image.with_mime(expected_mime)
