from __future__ import annotations

import json
import logging
from typing import Any

from app.ai.client import ModelClient
from app.core.config.tuning import GenerationTuning, get_tuning
from app.normalize.normalize_jd import extract_requirements_fallback
from app.schemas.tailoring import (
    COMPANY_TYPES,
    IMPORTANCE_LEVELS,
    REQUIREMENT_TYPES,
    SENIORITY_LEVELS,
    WORK_STYLES,
    JDContext,
    Requirement,
    RequirementSet,
)
from app.services.prompts import JD_ANALYSIS_PROMPT

logger = logging.getLogger(__name__)

_MIN_REQUIREMENT_CHARS = 3
_MIN_KEYWORD_CHARS = 2


def _clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _enum_or_none(value: Any, allowed: tuple[str, ...]) -> str | None:
    text = (_clean_str(value) or "").lower()
    return text if text in allowed else None


def _normalize_requirement(item: Any) -> Requirement | None:
    if isinstance(item, str):
        item = {"text": item}
    if not isinstance(item, dict):
        return None
    text = _clean_str(item.get("text"))
    if not text:
        return None
    req_type = (_clean_str(item.get("type")) or "").lower()
    importance = (_clean_str(item.get("importance")) or "").lower()
    return Requirement(
        text=text,
        type=req_type if req_type in REQUIREMENT_TYPES else "other",
        importance=importance if importance in IMPORTANCE_LEVELS else "medium",
    )


def _normalize_context(raw: Any) -> JDContext:
    if not isinstance(raw, dict):
        return JDContext()
    return JDContext(
        industry=_clean_str(raw.get("industry")),
        seniority_level=_enum_or_none(raw.get("seniorityLevel", raw.get("seniority_level")), SENIORITY_LEVELS),
        work_style=_enum_or_none(raw.get("workStyle", raw.get("work_style")), WORK_STYLES),
        company_type=_enum_or_none(raw.get("companyType", raw.get("company_type")), COMPANY_TYPES),
        team_size=_clean_str(raw.get("teamSize", raw.get("team_size"))),
    )


def _requirements(raw: Any, seen: set[str]) -> list[Requirement]:
    requirements: list[Requirement] = []
    for item in raw if isinstance(raw, list) else []:
        requirement = _normalize_requirement(item)
        if requirement is None or len(requirement.text) <= _MIN_REQUIREMENT_CHARS:
            continue
        key = requirement.text.lower()
        if key in seen:
            continue
        seen.add(key)
        requirements.append(requirement)
    return requirements


def _keywords(raw: Any) -> list[str]:
    keywords: list[str] = []
    seen: set[str] = set()
    for item in raw if isinstance(raw, list) else []:
        keyword = _clean_str(item)
        if not keyword or len(keyword) <= _MIN_KEYWORD_CHARS or keyword.lower() in seen:
            continue
        seen.add(keyword.lower())
        keywords.append(keyword)
    return keywords


def parse_requirement_payload(data: dict[str, Any]) -> RequirementSet:
    seen: set[str] = set()
    return RequirementSet(
        title=_clean_str(data.get("title")) or "Unknown Position",
        company=_clean_str(data.get("company")),
        required=_requirements(data.get("required"), seen),
        preferred=_requirements(data.get("preferred"), seen),
        keywords=_keywords(data.get("keywords")),
        context=_normalize_context(data.get("context")),
    )


async def analyze_job_description(
    jd_text: str,
    *,
    client: ModelClient,
    tuning: GenerationTuning | None = None,
) -> RequirementSet:
    """Extract a structured requirement set from job-description text.

    Model-client failures propagate. An unparseable or empty reply falls back
    to the deterministic line-based extractor over ``jd_text``.
    """
    cfg = tuning or get_tuning().generation
    reply = await client.call(
        JD_ANALYSIS_PROMPT.replace("{JD_TEXT}", jd_text),
        json_mode=True,
        max_tokens=cfg.jd_max_tokens,
        temperature=cfg.jd_temperature,
    )

    try:
        data = json.loads(reply)
    except json.JSONDecodeError:
        logger.warning("jd_analysis_fallback reason=invalid_json chars=%s", len(reply))
        return extract_requirements_fallback(jd_text)

    if not isinstance(data, dict):
        logger.warning("jd_analysis_fallback reason=not_an_object type=%s", type(data).__name__)
        return extract_requirements_fallback(jd_text)

    requirements = parse_requirement_payload(data)
    if not requirements.required and not requirements.preferred:
        logger.warning("jd_analysis_fallback reason=no_requirements")
        return extract_requirements_fallback(jd_text)
    return requirements
