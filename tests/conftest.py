"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Callable

import pytest
from PIL import Image

from imaging import RED, encode
from resizer.config.settings import get_settings


@pytest.fixture
def make_png() -> Callable[..., bytes]:
    def _make(width: int, height: int, color: tuple[int, ...] = RED, mode: str = "RGB") -> bytes:
        return encode(Image.new(mode, (width, height), color), "PNG")

    return _make


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> None:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
