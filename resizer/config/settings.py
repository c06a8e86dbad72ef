"""Service configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised resizer settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    media_root: str = "data/media"

    cache_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    cache_max_entries: int = 512
    cache_ttl_seconds: int = 3600
    single_flight: bool = True

    default_quality: int = 100
    max_dimension: int = 8192


def _build_settings() -> Settings:
    _load_env_file()

    default_quality = int(os.getenv("DEFAULT_QUALITY", "100"))
    if not 0 <= default_quality <= 100:
        raise ValueError(f"DEFAULT_QUALITY must be within 0..100, got {default_quality}")

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        media_root=os.getenv("MEDIA_ROOT", "data/media"),
        cache_backend=os.getenv("CACHE_BACKEND", "memory").strip().lower(),
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        cache_max_entries=int(os.getenv("CACHE_MAX_ENTRIES", "512")),
        cache_ttl_seconds=int(os.getenv("CACHE_TTL_SECONDS", "3600")),
        single_flight=_env_bool("RESIZER_SINGLE_FLIGHT", True),
        default_quality=default_quality,
        max_dimension=int(os.getenv("MAX_DIMENSION", "8192")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
