from __future__ import annotations

from pydantic import BaseModel, Field

from .match import MatchOutcome
from .requirements import RequirementSet
from .resume import ResumeProfile

_MAX_TEXT = 120000


class ParseResumeRequest(BaseModel):
    resume_text: str = Field(min_length=1, max_length=_MAX_TEXT)


class AnalyzeRequest(BaseModel):
    jd_text: str = Field(min_length=1, max_length=_MAX_TEXT)


class MatchRequest(BaseModel):
    resume_text: str = Field(min_length=1, max_length=_MAX_TEXT)
    jd_text: str = Field(min_length=1, max_length=_MAX_TEXT)


class TailorRequest(BaseModel):
    resume_text: str = Field(min_length=1, max_length=_MAX_TEXT)
    jd_text: str = Field(min_length=1, max_length=_MAX_TEXT)


class MatchResponse(BaseModel):
    resume: ResumeProfile
    requirements: RequirementSet
    match: MatchOutcome
    match_score: int
