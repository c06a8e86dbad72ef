"""Resize pipeline orchestration with result caching."""

from __future__ import annotations

import logging
from typing import Callable

from resizer.cache.backend import CacheStore
from resizer.cache.keys import SourceIdentity, compute_cache_key
from resizer.cache.single_flight import SingleFlight
from resizer.imgproc.decode import decode_image
from resizer.imgproc.encode import encode_image
from resizer.imgproc.errors import ImageResizeError
from resizer.imgproc.geometry import plan_geometry
from resizer.imgproc.models import EncodedImage, TransformRequest
from resizer.imgproc.orientation import normalize_orientation
from resizer.imgproc.params import MAX_DIMENSION, resolve_dimensions
from resizer.imgproc.transform import apply_plan
from resizer.metrics import prometheus_exporter as metrics

logger = logging.getLogger(__name__)


def resolve_and_transform(
    source_bytes: bytes,
    request: TransformRequest,
    max_dimension: int = MAX_DIMENSION,
) -> EncodedImage:
    """Decode, orient, resize and encode ``source_bytes`` per ``request``.

    Raises ``DecodeError`` for undecodable input and ``GeometryError`` for
    degenerate or oversized targets. No buffer outlives the call.
    """

    with decode_image(source_bytes) as source:
        normalize_orientation(source, request.autorotate)
        resolved = resolve_dimensions(request, source.width, source.height, max_dimension)
        plan = plan_geometry(source.width, source.height, resolved)
        padded = plan.canvas is not None
        output = apply_plan(
            source.pixels,
            plan,
            transparent_padding=resolved.format.supports_alpha,
        )
        try:
            return encode_image(
                output,
                resolved.format,
                resolved.quality,
                keep_alpha=source.has_alpha or padded,
            )
        finally:
            output.close()


class ImageResizeService:
    """Serves transformed images, consulting the injected cache first."""

    def __init__(
        self,
        cache: CacheStore,
        single_flight: bool = True,
        max_dimension: int = MAX_DIMENSION,
    ) -> None:
        self._cache = cache
        self._max_dimension = max_dimension
        self._flight = SingleFlight() if single_flight else None

    @property
    def cache(self) -> CacheStore:
        return self._cache

    def get_image_data(
        self,
        identity: SourceIdentity,
        request: TransformRequest,
        load_source: Callable[[], bytes],
    ) -> EncodedImage:
        """Return encoded bytes for ``identity`` under ``request``.

        ``load_source`` is only called on a cache miss. The result is stored
        under the composite key once fully encoded.
        """

        # Keyed on the request as received; dimensions resolve only after decode.
        key = compute_cache_key(identity, request)
        cached = self._cache.get(key)
        if cached is not None:
            metrics.cache_requests_total.labels(result="hit").inc()
            return EncodedImage(data=cached, format=request.format)

        metrics.cache_requests_total.labels(result="miss").inc()
        if self._flight is None:
            return self._compute(key, identity, request, load_source)
        return self._flight.do(key, lambda: self._compute(key, identity, request, load_source))

    def _compute(
        self,
        key: str,
        identity: SourceIdentity,
        request: TransformRequest,
        load_source: Callable[[], bytes],
    ) -> EncodedImage:
        source_bytes = load_source()
        try:
            with metrics.transform_seconds.time():
                image = resolve_and_transform(source_bytes, request, self._max_dimension)
        except ImageResizeError as exc:
            metrics.errors_total.labels(error=type(exc).__name__).inc()
            raise

        self._cache.put(key, image.data)
        logger.debug("Cached %s bytes for %s (%s)", image.size, identity.path, request.canonical())
        return image
