from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .requirements import Requirement
from .resume import Bullet, Education, Skill

MatchType = Literal["exact", "semantic", "partial", "missing"]


class SkillEvidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["skill"] = "skill"
    skill: Skill


class BulletEvidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["bullet"] = "bullet"
    bullet: Bullet
    experience_title: str
    experience_company: str = ""


class EducationEvidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["education"] = "education"
    education: Education


class ExperienceEvidence(BaseModel):
    """A whole position (title match) or the candidate's tenure (``years`` set)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["experience"] = "experience"
    title: str = ""
    company: str = ""
    date_range: str | None = None
    years: int | None = None
    positions: int | None = None


class NoEvidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


Evidence = Annotated[
    Union[SkillEvidence, BulletEvidence, EducationEvidence, ExperienceEvidence, NoEvidence],
    Field(discriminator="kind"),
]


class MatchRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    requirement: Requirement
    evidence: Evidence = Field(default_factory=NoEvidence)
    score: int = Field(default=0, ge=0, le=100)
    match_type: MatchType = "missing"
    evidence_text: str = ""


class MatchOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    matched: list[MatchRecord] = Field(default_factory=list)
    missing: list[MatchRecord] = Field(default_factory=list)
    has_domain_mismatch: bool = False
