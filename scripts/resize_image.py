"""Resize a single local image without going through HTTP."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from resizer.imgproc.errors import ImageResizeError
from resizer.imgproc.models import OutputFormat, ResizeMode, TransformRequest
from resizer.monitoring.logging import configure_logging
from resizer.services.resizer import resolve_and_transform

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source", type=Path)
    parser.add_argument("output", type=Path)
    parser.add_argument("--width", type=int, default=0)
    parser.add_argument("--height", type=int, default=0)
    parser.add_argument("--mode", choices=[mode.value for mode in ResizeMode], default=ResizeMode.DEFAULT.value)
    parser.add_argument("--format", dest="fmt", default=None, help="jpeg or png; defaults to the output suffix")
    parser.add_argument("--quality", type=int, default=100)
    parser.add_argument("--autorotate", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = _parse_args(argv)
    try:
        request = TransformRequest(
            width=args.width,
            height=args.height,
            mode=ResizeMode(args.mode),
            format=OutputFormat.parse(args.fmt or args.output.suffix.lstrip(".")),
            quality=args.quality,
            autorotate=args.autorotate,
        )
        image = resolve_and_transform(args.source.read_bytes(), request)
    except (ImageResizeError, ValueError) as exc:
        logger.error("Cannot resize %s: %s", args.source, exc)
        return 1

    args.output.write_bytes(image.data)
    print(f"{args.output}: {image.size} bytes ({image.format.value})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
