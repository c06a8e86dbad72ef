"""Tests for output encoding."""

from __future__ import annotations

from PIL import Image

from imaging import gradient, open_bytes
from resizer.imgproc.encode import encode_image
from resizer.imgproc.models import OutputFormat


def test_jpeg_quality_changes_output() -> None:
    image = gradient(96, 96).convert("RGBA")

    low = encode_image(image, OutputFormat.JPEG, quality=10)
    high = encode_image(image, OutputFormat.JPEG, quality=95)

    assert low.size < high.size
    assert open_bytes(low.data).format == "JPEG"


def test_jpeg_flattens_alpha_onto_white() -> None:
    image = Image.new("RGBA", (16, 16), (0, 0, 0, 0))

    encoded = encode_image(image, OutputFormat.JPEG, quality=90)

    decoded = open_bytes(encoded.data)
    assert decoded.mode == "RGB"
    assert all(channel > 245 for channel in decoded.getpixel((8, 8)))


def test_png_ignores_quality() -> None:
    image = gradient(32, 32).convert("RGBA")

    first = encode_image(image, OutputFormat.PNG, quality=1)
    second = encode_image(image, OutputFormat.PNG, quality=100)

    assert first.data == second.data
    assert first.format is OutputFormat.PNG


def test_png_drops_alpha_only_when_asked() -> None:
    image = Image.new("RGBA", (4, 4), (10, 20, 30, 255))

    opaque = open_bytes(encode_image(image, OutputFormat.PNG, quality=0, keep_alpha=False).data)
    with_alpha = open_bytes(encode_image(image, OutputFormat.PNG, quality=0, keep_alpha=True).data)

    assert opaque.mode == "RGB"
    assert with_alpha.mode == "RGBA"


def test_size_matches_byte_length() -> None:
    encoded = encode_image(Image.new("RGBA", (4, 4)), OutputFormat.PNG, quality=0)

    assert encoded.size == len(encoded.data)
