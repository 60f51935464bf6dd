from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import assert_never

from app.schemas.tailoring import (
    BulletEvidence,
    EducationEvidence,
    Evidence,
    ExperienceEvidence,
    MatchRecord,
    NoEvidence,
    RequirementSet,
    ResumeProfile,
    SkillEvidence,
)

logger = logging.getLogger("app.tailoring.debug")

_PREVIEW_CHARS = 60


def _preview(text: str, limit: int = _PREVIEW_CHARS) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


def describe_evidence(evidence: Evidence) -> str:
    if isinstance(evidence, SkillEvidence):
        return f"skill:{evidence.skill.name}"
    if isinstance(evidence, BulletEvidence):
        return f"bullet:{evidence.experience_title}:{_preview(evidence.bullet.text, 40)}"
    if isinstance(evidence, EducationEvidence):
        return f"education:{_preview(evidence.education.degree, 40)}"
    if isinstance(evidence, ExperienceEvidence):
        if evidence.years is not None:
            return f"tenure:{evidence.years}y/{evidence.positions}"
        return f"position:{evidence.title}"
    if isinstance(evidence, NoEvidence):
        return "none"
    assert_never(evidence)


def log_resume(resume: ResumeProfile) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(
        json.dumps(
            {
                "event": "resume_parsed",
                "skills": [f"{skill.name} ({skill.category})" for skill in resume.skills],
                "experiences": [
                    {
                        "title": exp.title,
                        "company": exp.company,
                        "bullets": len(exp.bullets),
                        "preview": [_preview(bullet.text) for bullet in exp.bullets[:2]],
                    }
                    for exp in resume.experiences
                ],
                "education": [edu.degree for edu in resume.education],
            },
            ensure_ascii=False,
        )
    )


def log_requirements(requirements: RequirementSet) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(
        json.dumps(
            {
                "event": "requirements_extracted",
                "title": requirements.title,
                "company": requirements.company,
                "required": [f"[{req.importance}] {req.text}" for req in requirements.required],
                "preferred": [f"[{req.importance}] {req.text}" for req in requirements.preferred],
                "keywords": requirements.keywords,
            },
            ensure_ascii=False,
        )
    )


def log_matches(matched: Sequence[MatchRecord], missing: Sequence[MatchRecord], score: int) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(
        json.dumps(
            {
                "event": "requirements_matched",
                "score": score,
                "matched": [
                    {
                        "score": record.score,
                        "type": record.match_type,
                        "requirement": _preview(record.requirement.text, 50),
                        "evidence": describe_evidence(record.evidence),
                    }
                    for record in matched
                ],
                "missing": [
                    {"score": record.score, "requirement": _preview(record.requirement.text, 50)}
                    for record in missing[:5]
                ],
                "missing_total": len(missing),
            },
            ensure_ascii=False,
        )
    )
