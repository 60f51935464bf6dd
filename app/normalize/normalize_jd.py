from __future__ import annotations

import math
import re

from app.features.lexicons import TECHNICAL_INDICATORS
from app.schemas.tailoring import Importance, JDContext, Requirement, RequirementSet, RequirementType

from .utils import contains_any, contains_term, is_bullet_like, non_empty_lines, strip_bullet_prefix

_CRITICAL_MARKERS = ("must", "required")
_HIGH_MARKERS = ("strong", "excellent")
_LOW_MARKERS = ("familiar", "knowledge of")
_DEGREE_MARKERS = ("degree", "bachelor", "master", "phd", "ph.d", "mba", "diploma")
_YEARS_RE = re.compile(r"\b\d+\+?\s*(?:years?|yrs?)\b|\byears?\b", re.IGNORECASE)
_HEADER_RE = re.compile(
    r"^(about( us| the role)?|requirements?|qualifications|responsibilities|what you('ll| will) do|"
    r"nice to have|preferred|benefits|who you are|the role)\s*:?$",
    re.IGNORECASE,
)
_PROSE_MIN_CHARS = 10
_PROSE_MAX_CHARS = 200
_TITLE_MAX_WORDS = 10


def classify_requirement_type(text: str) -> RequirementType:
    lowered = text.lower()
    if _YEARS_RE.search(lowered) and "experience" in lowered:
        return "experience"
    if contains_any(lowered, _DEGREE_MARKERS):
        return "education"
    if "certif" in lowered:
        return "certification"
    if any(contains_term(lowered, term) for term in TECHNICAL_INDICATORS):
        return "skill"
    return "other"


def classify_importance(text: str) -> Importance:
    lowered = text.lower()
    if any(contains_term(lowered, marker) for marker in _CRITICAL_MARKERS):
        return "critical"
    if any(contains_term(lowered, marker) for marker in _HIGH_MARKERS):
        return "high"
    if any(contains_term(lowered, marker) for marker in _LOW_MARKERS):
        return "low"
    return "medium"


def _candidate_lines(lines: list[str]) -> list[str]:
    bullets = [strip_bullet_prefix(line) for line in lines if is_bullet_like(line)]
    if bullets:
        return [line for line in bullets if line]
    return [
        line
        for line in lines
        if _PROSE_MIN_CHARS <= len(line) <= _PROSE_MAX_CHARS and not _HEADER_RE.match(line)
    ]


def _fallback_title(lines: list[str]) -> str:
    for line in lines:
        if is_bullet_like(line) or _HEADER_RE.match(line):
            continue
        if len(line.split()) <= _TITLE_MAX_WORDS:
            return line.rstrip(":")
        break
    return "Position"


def extract_requirements_fallback(jd_text: str) -> RequirementSet:
    """Heuristic requirement extraction used when the model reply is unusable."""
    lines = non_empty_lines(jd_text)
    seen: set[str] = set()
    requirements: list[Requirement] = []
    for line in _candidate_lines(lines):
        key = line.lower()
        if len(line) <= 3 or key in seen:
            continue
        seen.add(key)
        requirements.append(
            Requirement(text=line, type=classify_requirement_type(line), importance=classify_importance(line))
        )

    split_at = math.ceil(len(requirements) / 2)
    lowered = jd_text.lower()
    keywords = [term for term in TECHNICAL_INDICATORS if contains_term(lowered, term)]
    return RequirementSet(
        title=_fallback_title(lines),
        company=None,
        required=requirements[:split_at],
        preferred=requirements[split_at:],
        keywords=list(dict.fromkeys(keyword for keyword in keywords if len(keyword) > 2)),
        context=JDContext(),
    )
