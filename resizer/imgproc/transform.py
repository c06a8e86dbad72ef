"""Pixel operations: crop, resize and pad."""

from __future__ import annotations

from contextlib import ExitStack

from PIL import Image

from resizer.imgproc.models import CropBox, GeometryPlan

OPAQUE_FILL = (255, 255, 255, 255)
TRANSPARENT_FILL = (255, 255, 255, 0)


def crop_image(image: Image.Image, crop: CropBox) -> Image.Image:
    return image.crop(crop.as_box())


def resize_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """Resample to ``width`` x ``height`` with a Lanczos filter.

    RGBA input is resampled premultiplied by Pillow, so transparent pixels do
    not bleed their colour into neighbours.
    """

    return image.resize((width, height), Image.Resampling.LANCZOS)


def pad_image(image: Image.Image, canvas_width: int, canvas_height: int, transparent: bool) -> Image.Image:
    """Centre ``image`` on a canvas of the given size."""

    fill = TRANSPARENT_FILL if transparent else OPAQUE_FILL
    canvas = Image.new("RGBA", (canvas_width, canvas_height), fill)
    offset = ((canvas_width - image.width) // 2, (canvas_height - image.height) // 2)
    canvas.paste(image, offset)
    return canvas


def apply_plan(image: Image.Image, plan: GeometryPlan, transparent_padding: bool) -> Image.Image:
    """Run crop, resize and pad in that order and return a new image.

    ``image`` itself is left untouched; every intermediate buffer is closed
    before returning, including when a step raises.
    """

    with ExitStack() as intermediates:
        working = image
        if plan.crop is not None:
            working = crop_image(working, plan.crop)
            intermediates.callback(working.close)

        resized = resize_image(working, plan.width, plan.height)
        if plan.canvas is None:
            return resized

        intermediates.callback(resized.close)
        return pad_image(resized, plan.canvas[0], plan.canvas[1], transparent_padding)
