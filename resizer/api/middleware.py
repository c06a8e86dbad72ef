"""HTTP middleware that serves resized images from the media root."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from resizer.api.query import content_type_for, is_image_path, parse_resize_query
from resizer.cache.keys import SourceIdentity
from resizer.imgproc.errors import ImageResizeError, UnsupportedFormatError
from resizer.services.resizer import ImageResizeService

logger = logging.getLogger(__name__)


def resolve_media_path(media_root: Path, url_path: str) -> Path | None:
    """Map a URL path onto a file inside ``media_root``.

    Returns ``None`` when the file is missing or the path escapes the root.
    """

    root = media_root.resolve()
    candidate = (root / url_path.lstrip("/")).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


class ResizeImageMiddleware(BaseHTTPMiddleware):
    """Answers image requests carrying resize parameters; everything else passes through."""

    def __init__(
        self,
        app: ASGIApp,
        service: ImageResizeService,
        media_root: str | Path,
        default_quality: int = 100,
    ) -> None:
        super().__init__(app)
        self._service = service
        self._media_root = Path(media_root)
        self._default_quality = default_quality

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not request.query_params or not is_image_path(path):
            return await call_next(request)

        query = parse_resize_query(path, request.query_params, self._default_quality)
        if query is None:
            return await call_next(request)

        try:
            transform = query.to_request()
        except UnsupportedFormatError:
            # SVG and other non-raster outputs are served untouched.
            return await call_next(request)

        file_path = await asyncio.to_thread(resolve_media_path, self._media_root, path)
        if file_path is None:
            return await call_next(request)

        try:
            identity = await asyncio.to_thread(SourceIdentity.from_path, file_path)
        except FileNotFoundError:
            return await call_next(request)

        try:
            image = await asyncio.to_thread(
                self._service.get_image_data,
                identity,
                transform,
                file_path.read_bytes,
            )
        except (ImageResizeError, OSError) as exc:
            logger.warning("Serving %s untransformed: %s", path, exc)
            return await call_next(request)

        return Response(content=image.data, media_type=content_type_for(image.format))
