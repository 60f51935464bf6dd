from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .match import MatchRecord
from .resume import TailoredResume

ProgressStep = Literal[
    "parsing",
    "analyzing",
    "matching",
    "formatting",
    "cover_letter",
    "ai_check",
    "complete",
]


class ProgressEvent(BaseModel):
    step: ProgressStep
    progress: int = Field(ge=0, le=100)
    message: str


class DetectionInfo(BaseModel):
    score: int = Field(ge=0, le=100)
    is_human_passing: bool
    feedback: str
    regenerated: bool = False
    initial_score: int | None = None


class TailoringOutcome(BaseModel):
    resume: TailoredResume
    cover_letter: str
    match_score: int = Field(ge=0, le=100)
    matched_items: list[MatchRecord] = Field(default_factory=list)
    missing_items: list[MatchRecord] = Field(default_factory=list)
    has_domain_mismatch: bool = False
    processing_time_ms: int = 0
    detection: DetectionInfo | None = None
