from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, assert_never

from app.ai.client import ModelClient
from app.core.config.tuning import GenerationTuning, get_tuning
from app.schemas.tailoring import (
    BulletEvidence,
    EducationEvidence,
    ExperienceEvidence,
    MatchRecord,
    NoEvidence,
    RequirementSet,
    ResumeProfile,
    SkillEvidence,
    TailoredExperience,
    TailoredResume,
)
from app.services.prompts import FORMAT_PROMPT

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PrioritizedBullet:
    experience: str
    text: str
    score: int


def _bullet_scores(matched: Sequence[MatchRecord]) -> dict[str, int]:
    scores: dict[str, int] = {}
    for record in matched:
        evidence = record.evidence
        if isinstance(evidence, BulletEvidence):
            key = evidence.bullet.text
            scores[key] = max(scores.get(key, 0), record.score)
        elif isinstance(evidence, (SkillEvidence, EducationEvidence, ExperienceEvidence, NoEvidence)):
            continue
        else:
            assert_never(evidence)
    return scores


def prioritize_bullets(resume: ResumeProfile, matched: Sequence[MatchRecord]) -> list[PrioritizedBullet]:
    scores = _bullet_scores(matched)
    bullets = [
        PrioritizedBullet(
            experience=f"{exp.title} at {exp.company}" if exp.company else exp.title,
            text=bullet.text,
            score=scores.get(bullet.text, 0),
        )
        for exp in resume.experiences
        for bullet in exp.bullets
    ]
    bullets.sort(key=lambda item: item.score, reverse=True)
    return bullets


def jaccard_similarity(left: str, right: str) -> float:
    left_words = set(left.lower().split())
    right_words = set(right.lower().split())
    union = left_words | right_words
    if not union:
        return 0.0
    return len(left_words & right_words) / len(union)


def render_raw_text(resume: TailoredResume) -> str:
    lines: list[str] = []
    if resume.summary:
        lines.extend(["SUMMARY", resume.summary, ""])
    if resume.skills:
        lines.extend(["SKILLS", " • ".join(resume.skills), ""])
    lines.append("EXPERIENCE")
    for exp in resume.experiences:
        lines.append(f"{exp.title} | {exp.company}" if exp.company else exp.title)
        if exp.date_range:
            lines.append(exp.date_range)
        lines.extend(f"• {bullet}" for bullet in exp.bullets)
        lines.append("")
    if resume.education:
        lines.append("EDUCATION")
        lines.extend(resume.education)
    return "\n".join(lines).strip()


def original_structure(resume: ResumeProfile) -> TailoredResume:
    return TailoredResume(
        summary=resume.summary or "",
        skills=[skill.name for skill in resume.skills],
        experiences=[
            TailoredExperience(
                title=exp.title,
                company=exp.company,
                date_range=exp.date_range,
                bullets=[bullet.text for bullet in exp.bullets],
            )
            for exp in resume.experiences
        ],
        education=[edu.original_text for edu in resume.education],
        raw_text=resume.raw_text,
    )


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def _original_bullets_for(resume: ResumeProfile, title: str, company: str) -> list[str]:
    for exp in resume.experiences:
        if exp.title.lower() == title.lower() and (not company or exp.company.lower() == company.lower()):
            return [bullet.text for bullet in exp.bullets]
    return []


def build_tailored_resume(
    data: dict[str, Any], resume: ResumeProfile, *, similarity_floor: float
) -> TailoredResume:
    """Validate a formatter reply against the original résumé.

    Bullets that drift too far from every original bullet are dropped; an
    experience left with no bullets gets its original bullets back.
    """
    originals = [bullet.text for exp in resume.experiences for bullet in exp.bullets]
    experiences: list[TailoredExperience] = []
    proposed_experiences = data.get("experiences")
    if not isinstance(proposed_experiences, list):
        proposed_experiences = []
    for item in proposed_experiences:
        if not isinstance(item, dict):
            continue
        title = str(item.get("title") or "").strip()
        company = str(item.get("company") or "").strip()
        proposed = _string_list(item.get("bullets"))
        kept = [
            bullet
            for bullet in proposed
            if any(jaccard_similarity(bullet, original) >= similarity_floor for original in originals)
        ]
        if proposed and not kept:
            kept = _original_bullets_for(resume, title, company)
        date_range = item.get("dateRange", item.get("date_range"))
        experiences.append(
            TailoredExperience(
                title=title,
                company=company,
                date_range=str(date_range).strip() if date_range else None,
                bullets=kept,
            )
        )

    if not experiences and resume.experiences:
        experiences = original_structure(resume).experiences

    skills = _string_list(data.get("skills")) or [skill.name for skill in resume.skills]
    summary = data.get("summary")
    draft = TailoredResume(
        summary=str(summary).strip() if isinstance(summary, str) else (resume.summary or ""),
        skills=skills,
        experiences=experiences,
        education=[edu.original_text for edu in resume.education],
    )
    return draft.model_copy(update={"raw_text": render_raw_text(draft)})


def build_format_prompt(
    resume: ResumeProfile,
    matched: Sequence[MatchRecord],
    requirements: RequirementSet,
    cfg: GenerationTuning,
) -> str:
    bullets = prioritize_bullets(resume, matched)[: cfg.format_bullet_limit]
    bullet_lines = "\n".join(f"{i}. [{item.experience}] {item.text}" for i, item in enumerate(bullets, start=1))
    return (
        FORMAT_PROMPT.replace("{JOB_TITLE}", requirements.title)
        .replace("{KEYWORDS}", ", ".join(requirements.keywords[: cfg.format_keyword_limit]))
        .replace("{BULLETS}", bullet_lines)
    )


async def format_tailored_resume(
    resume: ResumeProfile,
    matched: Sequence[MatchRecord],
    requirements: RequirementSet,
    *,
    client: ModelClient,
    tuning: GenerationTuning | None = None,
) -> TailoredResume:
    cfg = tuning or get_tuning().generation
    reply = await client.call(
        build_format_prompt(resume, matched, requirements, cfg),
        json_mode=True,
        max_tokens=cfg.format_max_tokens,
        temperature=cfg.format_temperature,
    )
    try:
        data = json.loads(reply)
    except json.JSONDecodeError:
        logger.warning("resume_format_fallback reason=invalid_json")
        return original_structure(resume)
    if not isinstance(data, dict):
        logger.warning("resume_format_fallback reason=not_an_object")
        return original_structure(resume)
    return build_tailored_resume(data, resume, similarity_floor=cfg.bullet_similarity_floor)
