"""Exceptions raised by the resize pipeline."""

from __future__ import annotations


class ImageResizeError(RuntimeError):
    """Base class for failures that abort a single resize request."""


class DecodeError(ImageResizeError):
    """Raised when source bytes are not a decodable raster image."""


class UnsupportedFormatError(ImageResizeError):
    """Raised when an output format other than JPEG or PNG is requested."""


class GeometryError(ImageResizeError):
    """Raised for zero-area sources or dimensions that cannot be resolved."""
