"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter, Histogram


cache_requests_total = Counter(
    "resize_cache_requests_total",
    "Resize requests split by result cache outcome.",
    ["result"],
)

transform_seconds = Histogram(
    "resize_transform_seconds",
    "Time spent decoding, transforming and encoding a single image.",
)

errors_total = Counter(
    "resize_errors_total",
    "Resize pipeline failures by error class.",
    ["error"],
)
