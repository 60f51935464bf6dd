from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    tailor_rate_limit: str
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    openai_api_key: str | None
    openai_base_url: str | None
    ai_model: str
    ai_timeout_s: float
    ai_max_retries: int
    ai_retry_backoff_s: float
    authorship_api_url: str
    authorship_api_key: str | None
    authorship_timeout_s: float


settings = Settings(
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    tailor_rate_limit=_get_env("TAILOR_RATE_LIMIT", "10/minute") or "10/minute",
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:8081",
            "http://localhost:19006",
            "http://localhost:3000",
        ],
    ),
    openai_api_key=_get_env("OPENAI_API_KEY"),
    openai_base_url=_get_env("OPENAI_BASE_URL"),
    ai_model=(_get_env("AI_MODEL", "gpt-4o") or "gpt-4o").strip(),
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 30.0),
    ai_max_retries=_get_env_int("AI_MAX_RETRIES", 1),
    ai_retry_backoff_s=_get_env_float("AI_RETRY_BACKOFF_S", 1.0),
    authorship_api_url=_get_env(
        "AUTHORSHIP_API_URL", "https://api.zerogpt.com/api/detect/detectText"
    )
    or "https://api.zerogpt.com/api/detect/detectText",
    authorship_api_key=_get_env("AUTHORSHIP_API_KEY"),
    authorship_timeout_s=_get_env_float("AUTHORSHIP_TIMEOUT_S", 10.0),
)

if settings.ai_max_retries < 0:
    raise RuntimeError("AI_MAX_RETRIES must be zero or a positive integer.")

__all__ = ["Settings", "settings"]
