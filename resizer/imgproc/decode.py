"""Decoding of raw source bytes into an RGBA working buffer."""

from __future__ import annotations

import logging
import struct
from io import BytesIO

from PIL import ExifTags, Image, UnidentifiedImageError

from resizer.imgproc.errors import DecodeError
from resizer.imgproc.models import Orientation, SourceImage

logger = logging.getLogger(__name__)

SUPPORTED_INPUT_FORMATS = ("JPEG", "PNG", "GIF", "BMP", "WEBP", "TIFF")

_ALPHA_MODES = {"RGBA", "RGBa", "LA", "La", "PA"}


def _read_orientation(image: Image.Image) -> Orientation:
    try:
        exif = image.getexif()
    except (OSError, SyntaxError, ValueError):
        logger.debug("Ignoring unreadable EXIF block")
        return Orientation.TOP_LEFT
    return Orientation.from_exif(exif.get(ExifTags.Base.Orientation, Orientation.TOP_LEFT))


def decode_image(data: bytes) -> SourceImage:
    """Decode ``data`` at full 32-bit depth and detect its orientation tag.

    Palette and greyscale sources are expanded to RGBA so later arithmetic
    never deals with indexed colour. Only the first frame of a multi-frame
    source is used.
    """

    try:
        with Image.open(BytesIO(data), formats=SUPPORTED_INPUT_FORMATS) as raw:
            raw.load()
            orientation = _read_orientation(raw)
            has_alpha = raw.mode in _ALPHA_MODES or "transparency" in raw.info
            pixels = raw.convert("RGBA")
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
        struct.error,
    ) as exc:
        raise DecodeError(f"Cannot decode source image: {exc}") from exc

    logger.debug(
        "Decoded %sx%s source, orientation=%s, alpha=%s",
        pixels.width,
        pixels.height,
        orientation.name,
        has_alpha,
    )
    return SourceImage(pixels=pixels, orientation=orientation, has_alpha=has_alpha)
