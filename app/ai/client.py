from __future__ import annotations

import asyncio
import logging
from typing import Any, Literal

import openai
from openai import AsyncOpenAI

from app.ai.config import AIConfig, load_ai_config

logger = logging.getLogger(__name__)

ModelErrorKind = Literal["timeout", "rate_limit", "invalid_response", "api_error", "network_error"]

_RETRYABLE: frozenset[str] = frozenset({"timeout", "rate_limit", "network_error"})


class ModelClientError(RuntimeError):
    def __init__(self, message: str, *, kind: ModelErrorKind = "api_error", retryable: bool | None = None):
        super().__init__(message)
        self.kind = kind
        self.retryable = kind in _RETRYABLE if retryable is None else retryable


def classify_error(exc: BaseException) -> ModelClientError:
    if isinstance(exc, ModelClientError):
        return exc
    if isinstance(exc, (openai.APITimeoutError, asyncio.TimeoutError, TimeoutError)):
        return ModelClientError("Request timed out", kind="timeout")
    if isinstance(exc, openai.RateLimitError):
        return ModelClientError("Rate limit exceeded", kind="rate_limit")
    if isinstance(exc, openai.APIConnectionError):
        return ModelClientError("Network error", kind="network_error")

    message = str(exc)
    lowered = message.lower()
    if "rate limit" in lowered or "429" in lowered:
        return ModelClientError("Rate limit exceeded", kind="rate_limit")
    if "timeout" in lowered or "timed out" in lowered:
        return ModelClientError("Request timed out", kind="timeout")
    if "network" in lowered or "econnrefused" in lowered or "connection" in lowered:
        return ModelClientError("Network error", kind="network_error")
    if "invalid" in lowered or "json" in lowered:
        return ModelClientError(message, kind="invalid_response")
    return ModelClientError(message or exc.__class__.__name__, kind="api_error")


class ModelClient:
    """Chat-completion wrapper with a per-attempt deadline and bounded retries.

    The SDK handle is created on first use from this instance's credential;
    SDK-level retries are disabled so the retry policy lives here only.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str = "gpt-4o",
        base_url: str | None = None,
        timeout_s: float = 30.0,
        max_retries: int = 1,
        backoff_s: float = 1.0,
        sdk: Any | None = None,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self._api_key = (api_key or "").strip()
        self._model = model
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._backoff_s = backoff_s
        self._sdk = sdk

    @classmethod
    def from_config(cls, cfg: AIConfig | None = None) -> "ModelClient":
        cfg = cfg or load_ai_config()
        return cls(
            api_key=cfg.api_key,
            model=cfg.model,
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
            max_retries=cfg.max_retries,
            backoff_s=cfg.retry_backoff_s,
        )

    @property
    def model(self) -> str:
        return self._model

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def _client(self) -> Any:
        if self._sdk is None:
            if not self._api_key:
                raise ModelClientError("OPENAI_API_KEY is missing", kind="api_error", retryable=False)
            self._sdk = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url or None,
                timeout=self._timeout_s,
                max_retries=0,
            )
        return self._sdk

    async def _attempt(self, create_kwargs: dict[str, Any]) -> str:
        try:
            response = await asyncio.wait_for(
                self._client().chat.completions.create(**create_kwargs),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as exc:
            raise ModelClientError(
                f"Request timed out after {self._timeout_s}s", kind="timeout"
            ) from exc
        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            raise ModelClientError("Empty response from model", kind="invalid_response")
        return content

    async def call(
        self,
        prompt: str,
        *,
        json_mode: bool = False,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        model: str | None = None,
    ) -> str:
        create_kwargs: dict[str, Any] = {
            "model": model or self._model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if json_mode:
            create_kwargs["response_format"] = {"type": "json_object"}

        attempt = 0
        while True:
            try:
                return await self._attempt(create_kwargs)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                error = classify_error(exc)
                if not error.retryable or attempt >= self._max_retries:
                    logger.warning(
                        "model_call_failed kind=%s attempt=%s message=%s",
                        error.kind,
                        attempt + 1,
                        error,
                    )
                    if error is exc:
                        raise
                    raise error from exc
                delay = self._backoff_s * (attempt + 1)
                logger.info(
                    "model_call_retry kind=%s attempt=%s delay_s=%.2f",
                    error.kind,
                    attempt + 1,
                    delay,
                )
                attempt += 1
                if delay > 0:
                    await asyncio.sleep(delay)
