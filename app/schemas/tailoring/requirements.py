from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RequirementType = Literal["skill", "experience", "education", "certification", "other"]
Importance = Literal["critical", "high", "medium", "low"]
SeniorityLevel = Literal["entry", "mid", "senior", "lead", "executive"]
WorkStyle = Literal["remote", "hybrid", "onsite"]
CompanyType = Literal["startup", "mid-size", "enterprise", "agency"]

REQUIREMENT_TYPES: tuple[str, ...] = ("skill", "experience", "education", "certification", "other")
IMPORTANCE_LEVELS: tuple[str, ...] = ("critical", "high", "medium", "low")
SENIORITY_LEVELS: tuple[str, ...] = ("entry", "mid", "senior", "lead", "executive")
WORK_STYLES: tuple[str, ...] = ("remote", "hybrid", "onsite")
COMPANY_TYPES: tuple[str, ...] = ("startup", "mid-size", "enterprise", "agency")


class Requirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    type: RequirementType = "other"
    importance: Importance = "medium"


class JDContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    industry: str | None = None
    seniority_level: SeniorityLevel | None = None
    work_style: WorkStyle | None = None
    company_type: CompanyType | None = None
    team_size: str | None = None


class RequirementSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = "Position"
    company: str | None = None
    required: list[Requirement] = Field(default_factory=list)
    preferred: list[Requirement] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    context: JDContext = Field(default_factory=JDContext)

    def all_requirements(self) -> list[Requirement]:
        return [*self.required, *self.preferred]
