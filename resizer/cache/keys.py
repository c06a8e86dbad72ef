"""Cache identity for transformed images."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from resizer.imgproc.models import TransformRequest

KEY_PREFIX = "resizer:"


@dataclass(frozen=True, slots=True)
class SourceIdentity:
    """Where a source image lives and when it last changed."""

    path: str
    last_modified_ns: int

    @classmethod
    def from_path(cls, path: Path) -> SourceIdentity:
        """Stat ``path`` and build its identity; raises ``OSError`` if missing."""

        return cls(path=str(path), last_modified_ns=path.stat().st_mtime_ns)


def compute_cache_key(identity: SourceIdentity, request: TransformRequest) -> str:
    """Return a digest over the source identity and the canonical request.

    Fields are joined with NUL separators so no path can collide with a
    different path/timestamp split.
    """

    material = "\0".join(
        (identity.path, str(identity.last_modified_ns), request.canonical()),
    )
    return KEY_PREFIX + hashlib.sha256(material.encode("utf-8", "surrogateescape")).hexdigest()
