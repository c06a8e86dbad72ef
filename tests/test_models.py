"""Tests for request validation and enum parsing."""

from __future__ import annotations

import pytest

from resizer.imgproc.errors import GeometryError, UnsupportedFormatError
from resizer.imgproc.models import Orientation, OutputFormat, ResizeMode, TransformRequest


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("crop", ResizeMode.CROP), ("PAD", ResizeMode.PAD), (" max ", ResizeMode.MAX), ("stretch", ResizeMode.DEFAULT), ("", ResizeMode.DEFAULT), (None, ResizeMode.DEFAULT)],
)
def test_mode_parse(raw: str | None, expected: ResizeMode) -> None:
    assert ResizeMode.parse(raw) is expected


def test_format_parse_accepts_jpg_alias() -> None:
    assert OutputFormat.parse("JPG") is OutputFormat.JPEG
    assert OutputFormat.parse("png") is OutputFormat.PNG


@pytest.mark.parametrize("raw", ["svg", "webp", "gif", ""])
def test_format_parse_rejects_everything_else(raw: str) -> None:
    with pytest.raises(UnsupportedFormatError):
        OutputFormat.parse(raw)


def test_request_coerces_string_fields() -> None:
    request = TransformRequest(width=1, height=1, mode="crop", format="jpg")  # type: ignore[arg-type]

    assert request.mode is ResizeMode.CROP
    assert request.format is OutputFormat.JPEG


def test_request_rejects_negative_dimensions() -> None:
    with pytest.raises(GeometryError):
        TransformRequest(width=-1, height=10)


@pytest.mark.parametrize("quality", [-1, 101])
def test_request_rejects_out_of_range_quality(quality: int) -> None:
    with pytest.raises(ValueError):
        TransformRequest(quality=quality)


def test_request_rejects_vector_format() -> None:
    with pytest.raises(UnsupportedFormatError):
        TransformRequest(format="svg")  # type: ignore[arg-type]


def test_canonical_form_is_stable() -> None:
    request = TransformRequest(width=400, height=300, mode=ResizeMode.PAD, format=OutputFormat.PNG, quality=90, autorotate=True)

    assert request.canonical() == "w=400;h=300;mode=pad;format=png;quality=90;autorotate=1"
    assert TransformRequest(width=400, height=300, mode="pad", format="png", quality=90, autorotate=True).canonical() == request.canonical()  # type: ignore[arg-type]


@pytest.mark.parametrize("value", [None, 0, 9, "garbage"])
def test_invalid_orientation_tags_are_identity(value: object) -> None:
    assert Orientation.from_exif(value) is Orientation.TOP_LEFT
