"""Decode, geometry, transform and encode stages of the resize pipeline."""

from .decode import decode_image
from .encode import encode_image
from .errors import DecodeError, GeometryError, ImageResizeError, UnsupportedFormatError
from .geometry import plan_geometry
from .models import (
    CropBox,
    EncodedImage,
    GeometryPlan,
    Orientation,
    OutputFormat,
    ResizeMode,
    SourceImage,
    TransformRequest,
)
from .orientation import normalize_orientation
from .params import resolve_dimensions
from .transform import apply_plan

__all__ = [
    "CropBox",
    "DecodeError",
    "EncodedImage",
    "GeometryError",
    "GeometryPlan",
    "ImageResizeError",
    "Orientation",
    "OutputFormat",
    "ResizeMode",
    "SourceImage",
    "TransformRequest",
    "UnsupportedFormatError",
    "apply_plan",
    "decode_image",
    "encode_image",
    "normalize_orientation",
    "plan_geometry",
    "resolve_dimensions",
]
