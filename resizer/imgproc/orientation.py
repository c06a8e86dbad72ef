"""EXIF orientation correction."""

from __future__ import annotations

from PIL import Image

from resizer.imgproc.models import Orientation, SourceImage

_TRANSPOSE = {
    Orientation.TOP_RIGHT: Image.Transpose.FLIP_LEFT_RIGHT,
    Orientation.BOTTOM_RIGHT: Image.Transpose.ROTATE_180,
    Orientation.BOTTOM_LEFT: Image.Transpose.FLIP_TOP_BOTTOM,
    Orientation.LEFT_TOP: Image.Transpose.TRANSPOSE,
    Orientation.RIGHT_TOP: Image.Transpose.ROTATE_270,
    Orientation.RIGHT_BOTTOM: Image.Transpose.TRANSVERSE,
    Orientation.LEFT_BOTTOM: Image.Transpose.ROTATE_90,
}


def normalize_orientation(source: SourceImage, autorotate: bool) -> SourceImage:
    """Rotate/flip ``source`` upright in place when ``autorotate`` is set.

    Without autorotate the buffer and its orientation tag are left as decoded.
    """

    if not autorotate or source.orientation is Orientation.TOP_LEFT:
        return source

    method = _TRANSPOSE[source.orientation]
    source.replace_pixels(source.pixels.transpose(method))
    source.orientation = Orientation.TOP_LEFT
    return source
