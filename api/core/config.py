"""
Process settings read from environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_env: str
    log_level: str
    db_min_pool_size: int
    db_max_pool_size: int
    db_max_idle_time_s: float
    db_query_timeout_s: float
    cors_allow_origins: tuple[str, ...]


def load_settings() -> Settings:
    return Settings(
        app_env=_env_str("APP_ENV", "development"),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        db_min_pool_size=_env_int("DB_MIN_POOL_SIZE", 1),
        db_max_pool_size=_env_int("DB_MAX_POOL_SIZE", 30),
        db_max_idle_time_s=_env_float("DB_MAX_IDLE_TIME_S", 900.0),
        db_query_timeout_s=_env_float("DB_QUERY_TIMEOUT_S", 5.0),
        cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
