from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import assert_never

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
from app.services.prompts import cover_letter_prompt, humanized_cover_letter_prompt

PLACEHOLDER_NAME = "[Your Name]"
_MIN_EVIDENCE_CHARS = 20
_MIN_FALLBACK_BULLET_CHARS = 30

_CODE_FENCE_RE = re.compile(r"```[\s\S]*?```")
_HEADING_RE = re.compile(r"^#+\s", re.MULTILINE)
_GREETING_RE = re.compile(r"^(Hi|Hello|Hey|Dear)\b", re.IGNORECASE | re.MULTILINE)
_SIGN_OFF_RE = re.compile(r"^(best|thanks|cheers|sincerely|regards),?\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class EvidencePoint:
    requirement: str
    evidence: str


def _candidate_name(resume: ResumeProfile) -> str:
    if resume.contact and resume.contact.name:
        return resume.contact.name
    return PLACEHOLDER_NAME


def select_evidence(
    matched: Sequence[MatchRecord], resume: ResumeProfile, cfg: GenerationTuning
) -> list[EvidencePoint]:
    points = [
        EvidencePoint(requirement=record.requirement.text, evidence=record.evidence_text)
        for record in matched
        if record.score >= cfg.cover_letter_min_evidence_score and len(record.evidence_text) > _MIN_EVIDENCE_CHARS
    ][: cfg.cover_letter_max_evidence]

    if len(points) < 2:
        for exp in resume.experiences[:2]:
            for bullet in exp.bullets[:2]:
                if len(bullet.text) > _MIN_FALLBACK_BULLET_CHARS:
                    points.append(EvidencePoint(requirement="relevant experience", evidence=bullet.text))
    return points


def clean_cover_letter(text: str, name: str) -> str:
    cleaned = _CODE_FENCE_RE.sub("", text.strip())
    cleaned = _HEADING_RE.sub("", cleaned).replace("**", "").replace("*", "").strip()

    greeting = _GREETING_RE.search(cleaned)
    if greeting and greeting.start() > 0:
        cleaned = cleaned[greeting.start():]

    lines = cleaned.split("\n")
    lowered_name = name.lower()
    cutoff = len(lines)
    for index in range(len(lines) - 1, -1, -1):
        line = lines[index].strip()
        if lowered_name in line.lower() or _SIGN_OFF_RE.match(line):
            cutoff = index + 1
            if index < len(lines) - 1 and lowered_name in lines[index + 1].lower():
                cutoff = index + 2
            break
    cleaned = "\n".join(lines[:cutoff]).strip()

    if lowered_name not in cleaned.lower():
        cleaned = f"{cleaned}\n\n{name}"
    return cleaned


async def generate_cover_letter(
    matched: Sequence[MatchRecord],
    requirements: RequirementSet,
    resume: ResumeProfile,
    *,
    client: ModelClient,
    humanize: bool = False,
    tuning: GenerationTuning | None = None,
) -> str:
    """Write a cover letter grounded only in matched evidence.

    ``humanize`` switches to the stricter "sound human" prompt and a higher
    temperature; it is used for the single regeneration after detection.
    """
    cfg = tuning or get_tuning().generation
    name = _candidate_name(resume)
    company = requirements.company or "your company"
    evidence = "\n".join(
        f'• For "{point.requirement}": {point.evidence}' for point in select_evidence(matched, resume, cfg)
    )
    build = humanized_cover_letter_prompt if humanize else cover_letter_prompt
    reply = await client.call(
        build(name, requirements.title, company, evidence),
        json_mode=False,
        max_tokens=cfg.cover_letter_max_tokens,
        temperature=cfg.humanized_temperature if humanize else cfg.cover_letter_temperature,
    )
    return clean_cover_letter(reply, name)


def _quick_phrase(record: MatchRecord) -> str | None:
    evidence = record.evidence
    if isinstance(evidence, BulletEvidence):
        return evidence.bullet.text
    if isinstance(evidence, SkillEvidence):
        return evidence.skill.name
    if isinstance(evidence, ExperienceEvidence):
        if evidence.title:
            return f"my time as {evidence.title}"
        return None
    if isinstance(evidence, EducationEvidence):
        return evidence.education.degree
    if isinstance(evidence, NoEvidence):
        return None
    assert_never(evidence)


def generate_quick_cover_letter(
    matched: Sequence[MatchRecord], requirements: RequirementSet, resume: ResumeProfile
) -> str:
    name = _candidate_name(resume)
    phrases = [phrase for phrase in (_quick_phrase(record) for record in matched) if phrase]

    opening = f"I saw the {requirements.title} role and wanted to reach out."
    if phrases:
        opening += (
            f" My experience with {phrases[0][:80].rstrip('. ').lower()} maps pretty directly"
            " to what you're looking for."
        )
    if len(phrases) > 1:
        follow_up = (
            f"I've also done work around {phrases[1][:60].rstrip('. ').lower()}."
            " Happy to share more specifics if helpful."
        )
    else:
        follow_up = "I'd be glad to walk through my background in more detail if you're interested."

    return f"Hi,\n\n{opening}\n\n{follow_up}\n\nThanks for reading.\n\n{name}"


def _matched_experience_keys(matched: Sequence[MatchRecord]) -> set[tuple[str, str]]:
    keys: set[tuple[str, str]] = set()
    for record in matched:
        evidence = record.evidence
        if isinstance(evidence, BulletEvidence):
            keys.add((evidence.experience_title, evidence.experience_company))
        elif isinstance(evidence, ExperienceEvidence):
            if evidence.title:
                keys.add((evidence.title, evidence.company))
        elif isinstance(evidence, (SkillEvidence, EducationEvidence, NoEvidence)):
            continue
        else:
            assert_never(evidence)
    return keys


def quick_tailored_resume(resume: ResumeProfile, matched: Sequence[MatchRecord]) -> TailoredResume:
    """Template résumé: experiences backed by matched evidence move to the top."""
    keys = _matched_experience_keys(matched)
    ordered = sorted(resume.experiences, key=lambda exp: (exp.title, exp.company) not in keys)
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
            for exp in ordered
        ],
        education=[edu.original_text for edu in resume.education],
        raw_text=resume.raw_text,
    )
