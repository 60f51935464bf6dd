from dataclasses import dataclass

from app.core.config import settings


@dataclass(frozen=True)
class AIConfig:
    model: str
    api_key: str | None
    base_url: str | None
    timeout_s: float
    max_retries: int
    retry_backoff_s: float


def load_ai_config() -> AIConfig:
    return AIConfig(
        model=settings.ai_model,
        api_key=(settings.openai_api_key or "").strip() or None,
        base_url=settings.openai_base_url,
        timeout_s=settings.ai_timeout_s,
        max_retries=settings.ai_max_retries,
        retry_backoff_s=settings.ai_retry_backoff_s,
    )
