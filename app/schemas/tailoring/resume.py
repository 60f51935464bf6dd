from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SkillCategory = Literal["technical", "soft", "tool", "language", "other"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Metric(_Frozen):
    value: str
    context: str = ""
    original_text: str = ""


class Bullet(_Frozen):
    text: str
    metrics: list[Metric] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)


class Skill(_Frozen):
    name: str
    category: SkillCategory = "other"
    original_text: str = ""


class Experience(_Frozen):
    title: str
    company: str = ""
    date_range: str | None = None
    bullets: list[Bullet] = Field(default_factory=list)
    original_text: str = ""


class Education(_Frozen):
    degree: str
    institution: str = ""
    year: str | None = None
    gpa: str | None = None
    original_text: str = ""


class ContactInfo(_Frozen):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    location: str | None = None


class ResumeProfile(_Frozen):
    raw_text: str
    skills: list[Skill] = Field(default_factory=list)
    experiences: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    contact: ContactInfo | None = None
    summary: str | None = None


class TailoredExperience(_Frozen):
    title: str
    company: str = ""
    date_range: str | None = None
    bullets: list[str] = Field(default_factory=list)


class TailoredResume(_Frozen):
    summary: str = ""
    skills: list[str] = Field(default_factory=list)
    experiences: list[TailoredExperience] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    raw_text: str = ""
