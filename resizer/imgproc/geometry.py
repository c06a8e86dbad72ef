"""Target geometry planning for each resize mode."""

from __future__ import annotations

from resizer.imgproc.errors import GeometryError
from resizer.imgproc.models import CropBox, GeometryPlan, ResizeMode, TransformRequest


def centered_crop(source_width: int, source_height: int, target_width: int, target_height: int) -> CropBox:
    """Return the largest centred rectangle with the target aspect ratio."""

    # Compare ratios by cross-multiplication to stay in integers.
    if source_width * target_height > source_height * target_width:
        width = max(1, round(source_height * target_width / target_height))
        height = source_height
    else:
        width = source_width
        height = max(1, round(source_width * target_height / target_width))
    return CropBox(
        x=(source_width - width) // 2,
        y=(source_height - height) // 2,
        width=width,
        height=height,
    )


def fit_within(source_width: int, source_height: int, box_width: int, box_height: int) -> tuple[int, int]:
    """Scale the source size to fit the box while keeping its aspect ratio."""

    source_ratio = source_width / source_height
    box_ratio = box_width / box_height
    if source_ratio > box_ratio:
        return box_width, max(1, round(source_height * box_width / source_width))
    return max(1, round(source_width * box_height / source_height)), box_height


def plan_geometry(source_width: int, source_height: int, request: TransformRequest) -> GeometryPlan:
    """Compute crop rectangle, resize target and padded canvas for ``request``.

    ``request`` must already carry resolved (positive) dimensions and the
    source size must be the post-orientation one.
    """

    if source_width <= 0 or source_height <= 0:
        raise GeometryError(f"Source has no area: {source_width}x{source_height}")
    if request.width <= 0 or request.height <= 0:
        raise GeometryError(f"Unresolved target size {request.width}x{request.height}")

    if request.mode is ResizeMode.CROP:
        crop = centered_crop(source_width, source_height, request.width, request.height)
        return GeometryPlan(width=request.width, height=request.height, crop=crop)

    if request.mode in (ResizeMode.PAD, ResizeMode.MAX):
        width, height = fit_within(source_width, source_height, request.width, request.height)
        canvas = (request.width, request.height) if request.mode is ResizeMode.PAD else None
        return GeometryPlan(width=width, height=height, canvas=canvas)

    return GeometryPlan(width=request.width, height=request.height)
