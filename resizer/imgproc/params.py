"""Resolution of unset target dimensions against the source size."""

from __future__ import annotations

from dataclasses import replace

from resizer.imgproc.errors import GeometryError
from resizer.imgproc.models import TransformRequest

MAX_DIMENSION = 8192


def resolve_dimensions(
    request: TransformRequest,
    native_width: int,
    native_height: int,
    max_dimension: int = MAX_DIMENSION,
) -> TransformRequest:
    """Return a copy of ``request`` whose width and height are both positive.

    Both unset resolves to the native size. One unset is derived from the
    native aspect ratio and rounded to the nearest integer. A resolved side
    larger than ``max_dimension`` raises ``GeometryError``.
    """

    if native_width <= 0 or native_height <= 0:
        raise GeometryError(f"Source has no area: {native_width}x{native_height}")

    width, height = request.width, request.height
    if width == 0 and height == 0:
        width, height = native_width, native_height
    elif height == 0:
        height = max(1, round(native_height * width / native_width))
    elif width == 0:
        width = max(1, round(native_width * height / native_height))

    if width > max_dimension or height > max_dimension:
        raise GeometryError(f"Target size {width}x{height} exceeds the {max_dimension}px limit")

    if width == request.width and height == request.height:
        return request
    return replace(request, width=width, height=height)
