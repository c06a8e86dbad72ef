"""Query-string handling for image resize requests."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any, Mapping

from pydantic import BaseModel, field_validator

from resizer.imgproc.models import OutputFormat, ResizeMode, TransformRequest

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".svg"}
RESIZE_KEYS = ("w", "h", "mode", "format", "quality", "autorotate")

_CONTENT_TYPES = {
    OutputFormat.PNG: "image/png",
    OutputFormat.JPEG: "image/jpeg",
}


def is_image_path(path: str) -> bool:
    return PurePosixPath(path).suffix.lower() in IMAGE_EXTENSIONS


def content_type_for(fmt: OutputFormat) -> str:
    return _CONTENT_TYPES[fmt]


def _lenient_int(value: Any, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


class ResizeQuery(BaseModel):
    """Resize parameters as they arrive on the query string.

    Malformed values never fail validation: they fall back to the same
    defaults an absent parameter would get.
    """

    w: int = 0
    h: int = 0
    mode: ResizeMode = ResizeMode.DEFAULT
    format: str
    quality: int = 100
    autorotate: bool = False

    @field_validator("w", "h", mode="before")
    @classmethod
    def _coerce_dimension(cls, value: Any) -> int:
        return max(0, _lenient_int(value, 0))

    @field_validator("quality", mode="before")
    @classmethod
    def _coerce_quality(cls, value: Any) -> int:
        return min(100, max(0, _lenient_int(value, 100)))

    @field_validator("mode", mode="before")
    @classmethod
    def _coerce_mode(cls, value: Any) -> ResizeMode:
        return ResizeMode.parse(value if isinstance(value, (str, ResizeMode)) else None)

    @field_validator("autorotate", mode="before")
    @classmethod
    def _coerce_autorotate(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() == "true"

    @field_validator("format", mode="before")
    @classmethod
    def _coerce_format(cls, value: Any) -> str:
        return str(value).strip().lower()

    def to_request(self) -> TransformRequest:
        """Build the pipeline request; raises ``UnsupportedFormatError`` for SVG and friends."""

        return TransformRequest(
            width=self.w,
            height=self.h,
            mode=self.mode,
            format=OutputFormat.parse(self.format),
            quality=self.quality,
            autorotate=self.autorotate,
        )


def parse_resize_query(
    path: str,
    params: Mapping[str, str],
    default_quality: int = 100,
) -> ResizeQuery | None:
    """Return the resize parameters for ``path`` or ``None`` when there are none."""

    if not any(key in params for key in RESIZE_KEYS):
        return None

    values: dict[str, Any] = {key: params[key] for key in RESIZE_KEYS if key in params}
    values.setdefault("format", PurePosixPath(path).suffix.lstrip("."))
    try:
        int(str(values.get("quality")).strip())
    except ValueError:
        values["quality"] = default_quality
    return ResizeQuery(**values)
