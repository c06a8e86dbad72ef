"""Serialisation of the final buffer into JPEG or PNG bytes."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

from resizer.imgproc.models import EncodedImage, OutputFormat

JPEG_BACKGROUND = (255, 255, 255)


def _flatten(image: Image.Image) -> Image.Image:
    """Composite RGBA onto an opaque white background."""

    background = Image.new("RGB", image.size, JPEG_BACKGROUND)
    background.paste(image, mask=image.getchannel("A"))
    return background


def encode_image(image: Image.Image, fmt: OutputFormat, quality: int, keep_alpha: bool = True) -> EncodedImage:
    """Encode ``image`` as ``fmt``.

    JPEG honours ``quality``; PNG is lossless and ignores it. ``keep_alpha``
    only matters for PNG, where dropping it saves an unused channel for
    opaque sources.
    """

    buffer = BytesIO()
    if fmt is OutputFormat.PNG and (keep_alpha or image.mode != "RGBA"):
        image.save(buffer, format="PNG")
        return EncodedImage(data=buffer.getvalue(), format=fmt)

    if fmt is OutputFormat.JPEG and image.mode == "RGBA":
        converted = _flatten(image)
    else:
        converted = image.convert("RGB")
    try:
        if fmt is OutputFormat.JPEG:
            converted.save(buffer, format="JPEG", quality=quality)
        else:
            converted.save(buffer, format="PNG")
    finally:
        converted.close()
    return EncodedImage(data=buffer.getvalue(), format=fmt)
