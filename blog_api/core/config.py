"""
Configuration helpers for the blog backend.

Settings are read once from environment variables and then passed explicitly
to the storage layer and services by the composition root
(blog_api.dependencies); nothing else should look at os.environ.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = ("json", "sql")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str = "dev"
    storage_backend: str = "json"
    data_dir: str = "./data"
    database_url: str = ""
    default_page_size: int = 10
    max_page_size: int = 100
    log_level: str = "INFO"
    api_prefix: str = "/api"
    cors_origins: tuple[str, ...] = ()
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    backend = (os.getenv("STORAGE_BACKEND") or "json").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}")

    prefix = (os.getenv("API_PREFIX") or "/api").strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=backend,
        data_dir=os.getenv("DATA_DIR", "./data"),
        database_url=os.getenv("DATABASE_URL", ""),
        default_page_size=max(1, _int(os.getenv("DEFAULT_PAGE_SIZE"), 10)),
        max_page_size=max(1, _int(os.getenv("MAX_PAGE_SIZE"), 100)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        api_prefix=prefix,
        cors_origins=_csv(os.getenv("CORS_ORIGINS")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT"), 8000),
    )
