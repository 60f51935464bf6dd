from .api import AnalyzeRequest, MatchRequest, MatchResponse, ParseResumeRequest, TailorRequest
from .match import (
    BulletEvidence,
    EducationEvidence,
    Evidence,
    ExperienceEvidence,
    MatchOutcome,
    MatchRecord,
    MatchType,
    NoEvidence,
    SkillEvidence,
)
from .outcome import DetectionInfo, ProgressEvent, ProgressStep, TailoringOutcome
from .requirements import (
    COMPANY_TYPES,
    IMPORTANCE_LEVELS,
    REQUIREMENT_TYPES,
    SENIORITY_LEVELS,
    WORK_STYLES,
    Importance,
    JDContext,
    Requirement,
    RequirementSet,
    RequirementType,
)
from .resume import (
    Bullet,
    ContactInfo,
    Education,
    Experience,
    Metric,
    ResumeProfile,
    Skill,
    SkillCategory,
    TailoredExperience,
    TailoredResume,
)

__all__ = [
    "AnalyzeRequest",
    "Bullet",
    "BulletEvidence",
    "COMPANY_TYPES",
    "ContactInfo",
    "DetectionInfo",
    "Education",
    "EducationEvidence",
    "Evidence",
    "Experience",
    "ExperienceEvidence",
    "IMPORTANCE_LEVELS",
    "Importance",
    "JDContext",
    "MatchOutcome",
    "MatchRecord",
    "MatchRequest",
    "MatchResponse",
    "MatchType",
    "Metric",
    "NoEvidence",
    "ParseResumeRequest",
    "ProgressEvent",
    "ProgressStep",
    "REQUIREMENT_TYPES",
    "Requirement",
    "RequirementSet",
    "RequirementType",
    "ResumeProfile",
    "SENIORITY_LEVELS",
    "Skill",
    "SkillCategory",
    "SkillEvidence",
    "TailorRequest",
    "TailoredExperience",
    "TailoredResume",
    "TailoringOutcome",
    "WORK_STYLES",
]
