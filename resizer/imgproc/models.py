"""Data structures shared by the resize pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from PIL import Image

from resizer.imgproc.errors import GeometryError, UnsupportedFormatError


class ResizeMode(str, Enum):
    """How the source is fitted into the requested box."""

    CROP = "crop"
    PAD = "pad"
    MAX = "max"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: str | ResizeMode | None) -> ResizeMode:
        """Map a raw mode string onto a mode, falling back to stretch."""

        if isinstance(value, ResizeMode):
            return value
        normalized = (value or "").strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        return cls.DEFAULT


class OutputFormat(str, Enum):
    """Raster encodings the pipeline can produce."""

    JPEG = "jpeg"
    PNG = "png"

    @property
    def supports_alpha(self) -> bool:
        return self is OutputFormat.PNG

    @classmethod
    def parse(cls, value: str | OutputFormat) -> OutputFormat:
        if isinstance(value, OutputFormat):
            return value
        normalized = value.strip().lower()
        if normalized == "jpg":
            normalized = "jpeg"
        try:
            return cls(normalized)
        except ValueError as exc:
            raise UnsupportedFormatError(f"Unsupported output format: {value!r}") from exc


class Orientation(IntEnum):
    """EXIF orientation values; TOP_LEFT needs no correction."""

    TOP_LEFT = 1
    TOP_RIGHT = 2
    BOTTOM_RIGHT = 3
    BOTTOM_LEFT = 4
    LEFT_TOP = 5
    RIGHT_TOP = 6
    RIGHT_BOTTOM = 7
    LEFT_BOTTOM = 8

    @classmethod
    def from_exif(cls, value: object) -> Orientation:
        try:
            return cls(int(value))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return cls.TOP_LEFT


@dataclass(frozen=True, slots=True)
class TransformRequest:
    """Transformation parameters for a single image.

    A width or height of zero means "derive from the source". Once the
    request has passed through ``resolve_dimensions`` both are positive.
    """

    width: int = 0
    height: int = 0
    mode: ResizeMode = ResizeMode.DEFAULT
    format: OutputFormat = OutputFormat.JPEG
    quality: int = 100
    autorotate: bool = False

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise GeometryError(f"Negative target size {self.width}x{self.height}")
        if not 0 <= self.quality <= 100:
            raise ValueError(f"Quality must be within 0..100, got {self.quality}")
        object.__setattr__(self, "mode", ResizeMode.parse(self.mode))
        object.__setattr__(self, "format", OutputFormat.parse(self.format))

    def canonical(self) -> str:
        """Return a stable serialisation used for cache identity."""

        return (
            f"w={self.width};h={self.height};mode={self.mode.value};"
            f"format={self.format.value};quality={self.quality};"
            f"autorotate={int(self.autorotate)}"
        )


@dataclass(slots=True)
class SourceImage:
    """Decoded RGBA pixel buffer together with its decode-time metadata."""

    pixels: Image.Image
    orientation: Orientation = Orientation.TOP_LEFT
    has_alpha: bool = False

    @property
    def width(self) -> int:
        return self.pixels.width

    @property
    def height(self) -> int:
        return self.pixels.height

    def replace_pixels(self, pixels: Image.Image) -> None:
        """Swap in a new buffer and release the previous one."""

        if pixels is self.pixels:
            return
        previous = self.pixels
        self.pixels = pixels
        previous.close()

    def close(self) -> None:
        self.pixels.close()

    def __enter__(self) -> SourceImage:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass(frozen=True, slots=True)
class CropBox:
    """Crop rectangle in source pixel coordinates."""

    x: int
    y: int
    width: int
    height: int

    def as_box(self) -> tuple[int, int, int, int]:
        """Return the (left, upper, right, lower) tuple Pillow expects."""

        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True, slots=True)
class GeometryPlan:
    """Resize target plus the optional crop rectangle and padded canvas."""

    width: int
    height: int
    crop: CropBox | None = None
    canvas: tuple[int, int] | None = None


@dataclass(frozen=True, slots=True)
class EncodedImage:
    """Encoded output bytes tagged with their format."""

    data: bytes
    format: OutputFormat

    @property
    def size(self) -> int:
        return len(self.data)
