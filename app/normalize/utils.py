from __future__ import annotations

import re
from functools import lru_cache

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►▸·-–—*"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_WORD_RE = re.compile(r"[a-z0-9][a-z0-9+#]*(?:[./-][a-z0-9+#]+)*")


def non_empty_lines(text: str) -> list[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def is_bullet_like(line: str) -> bool:
    return bool(_BULLET_PATTERN.match(line))


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line).strip()


def contains_any(text: str, markers: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


@lru_cache(maxsize=4096)
def _term_pattern(term: str) -> re.Pattern[str]:
    # A trailing "s"/"es" is tolerated so "APIs" still hits "api".
    return re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?:e?s)?(?![a-z0-9])")


def contains_term(text: str, term: str) -> bool:
    """Boundary-aware containment: ``go`` hits "Go, Rust" but never "Google"."""
    term = term.strip().lower()
    if not term:
        return False
    return bool(_term_pattern(term).search(text.lower()))


def contains_any_term(text: str, terms: tuple[str, ...] | list[str] | frozenset[str]) -> bool:
    lowered = text.lower()
    return any(contains_term(lowered, term) for term in terms)


def words(text: str) -> list[str]:
    return _WORD_RE.findall((text or "").lower())
