from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

_FEEDBACK_BANDS: tuple[tuple[float, str], ...] = (
    (20, "Excellent! Your writing sounds very natural and human."),
    (35, "Great job! Reads like it was written by a person."),
    (50, "Good. Mostly natural with minor AI-like patterns."),
    (65, "Some AI patterns detected. A few personal edits would help."),
    (80, "Noticeable AI patterns. Consider adding personal touches."),
)
_FEEDBACK_HIGHEST = "High AI content detected. We recommend editing before sending."


@dataclass(frozen=True)
class SentenceVerdict:
    text: str
    is_ai: bool


@dataclass(frozen=True)
class DetectionResult:
    score: int
    is_human_passing: bool
    feedback: str
    sentences: list[SentenceVerdict] = field(default_factory=list)
    text_words: int = 0


def feedback_for_score(score: float) -> str:
    for upper, message in _FEEDBACK_BANDS:
        if score < upper:
            return message
    return _FEEDBACK_HIGHEST


def _word_count(text: str) -> int:
    return len(text.split()) if text else 0


def _passing(text: str, reason: str) -> DetectionResult:
    return DetectionResult(score=0, is_human_passing=True, feedback=reason, text_words=_word_count(text))


class AuthorshipDetector:
    """Client for the third-party machine-authorship classifier.

    Detection is advisory: every failure collapses into a passing result with
    a feedback string naming what went wrong.
    """

    def __init__(
        self,
        *,
        api_url: str,
        api_key: str | None,
        timeout_s: float = 10.0,
        min_chars: int = 100,
        passing_threshold: int = 50,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_url = api_url
        self._api_key = (api_key or "").strip()
        self._timeout_s = timeout_s
        self._min_chars = min_chars
        self._passing_threshold = passing_threshold
        self._http = http_client
        self._owns_http = http_client is None

    @classmethod
    def from_settings(cls) -> "AuthorshipDetector":
        return cls(
            api_url=settings.authorship_api_url,
            api_key=settings.authorship_api_key,
            timeout_s=settings.authorship_timeout_s,
        )

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout_s)
        return self._http

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    async def detect(self, text: str) -> DetectionResult:
        if not text or len(text.strip()) < self._min_chars:
            return _passing(text, "Text too short to analyze")
        if not self._api_key:
            return _passing(text, "Detection not configured")

        try:
            response = await self._client().post(
                self._api_url,
                json={"input_text": text},
                headers={"ApiKey": self._api_key, "Content-Type": "application/json"},
                timeout=self._timeout_s,
            )
        except httpx.TimeoutException:
            logger.warning("authorship_detect_timeout timeout_s=%s", self._timeout_s)
            return _passing(text, "Detection timed out")
        except httpx.HTTPError as exc:
            logger.warning("authorship_detect_failed error=%s", exc.__class__.__name__)
            return _passing(text, "Detection unavailable")

        if not response.is_success:
            logger.warning("authorship_detect_http_error status=%s", response.status_code)
            return _passing(text, "Detection service unavailable")

        try:
            payload = response.json()
        except ValueError:
            logger.warning("authorship_detect_bad_payload")
            return _passing(text, "Detection unavailable")

        if not isinstance(payload, dict) or payload.get("success") is False or payload.get("error"):
            logger.warning("authorship_detect_service_error error=%s", payload.get("error") if isinstance(payload, dict) else None)
            return _passing(text, "Detection service error")

        return self._result_from_payload(text, payload)

    def _result_from_payload(self, text: str, payload: dict[str, Any]) -> DetectionResult:
        data = payload.get("data") if isinstance(payload.get("data"), dict) else {}
        raw_sentences = data.get("sentences") or []
        if not isinstance(raw_sentences, list):
            logger.warning("authorship_detect_bad_payload field=sentences")
            return _passing(text, "Detection unavailable")
        try:
            raw_score = float(data.get("fakePercentage") or 0)
        except (TypeError, ValueError):
            raw_score = 0.0
        if not math.isfinite(raw_score):
            raw_score = 0.0
        score = max(0, min(100, round(raw_score)))

        sentences: list[SentenceVerdict] = []
        for item in raw_sentences:
            if isinstance(item, dict):
                sentences.append(SentenceVerdict(text=str(item.get("sentence") or ""), is_ai=item.get("isAI") is True))
            elif isinstance(item, str):
                sentences.append(SentenceVerdict(text=item, is_ai=True))

        text_words = data.get("textWords")
        if not (isinstance(text_words, (int, float)) and math.isfinite(text_words) and text_words > 0):
            text_words = _word_count(text)
        return DetectionResult(
            score=score,
            is_human_passing=raw_score < self._passing_threshold,
            feedback=feedback_for_score(raw_score),
            sentences=sentences,
            text_words=int(text_words),
        )
