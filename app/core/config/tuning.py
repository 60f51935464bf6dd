"""Named thresholds, weights and bounds for matching, scoring and generation.

Defaults live on the models below; ``config/scoring.yaml`` (section
``tailoring``) overrides any subset of them.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, Field, model_validator

from .scoring import get_scoring_value


class DomainTuning(BaseModel):
    min_distinct_indicators: int = Field(default=2, ge=1)
    single_indicator_min_length: int = Field(default=14, ge=1)


class MatchThresholds(BaseModel):
    technical: int = Field(default=80, ge=0, le=100)
    general: int = Field(default=70, ge=0, le=100)


class MatchTypeTiers(BaseModel):
    exact: int = 90
    semantic: int = 70
    partial: int = 40


class SkillScores(BaseModel):
    contained: int = 95
    synonym: int = 90
    overlap_base: int = 55
    overlap_step: int = 10
    overlap_bonus_cap: int = 25


class BulletScores(BaseModel):
    word_overlap_weight: float = 50.0
    min_overlap_words: int = 2
    min_word_length: int = 4
    keyword_min_length: int = 5
    keyword_step: int = 8
    keyword_cap: int = 24
    synonym_bonus: int = 30
    metric_bonus: int = 8
    cap: int = 90


class TitleScores(BaseModel):
    senior_match: int = 85
    lead_match: int = 80
    seniority_for_experience: int = 70
    role_group: int = 75


class EducationScores(BaseModel):
    same_level: int = 95
    higher_level: int = 90
    field_match: int = 85
    any_degree: int = 70


class ExperienceScores(BaseModel):
    meets: int = 90
    close: int = 70
    close_ratio: float = 0.8
    partial: int = 50
    partial_ratio: float = 0.6
    some: int = 35
    none: int = 15
    senior_title_floor_years: int = 5
    default_position_years: int = 1


class MatchingTuning(BaseModel):
    thresholds: MatchThresholds = Field(default_factory=MatchThresholds)
    match_types: MatchTypeTiers = Field(default_factory=MatchTypeTiers)
    domain_mismatch_ceiling: int = Field(default=30, ge=0, le=100)
    widen_related_domains: bool = True
    raw_text_score: int = 45
    skill: SkillScores = Field(default_factory=SkillScores)
    bullet: BulletScores = Field(default_factory=BulletScores)
    title: TitleScores = Field(default_factory=TitleScores)
    education: EducationScores = Field(default_factory=EducationScores)
    experience: ExperienceScores = Field(default_factory=ExperienceScores)


class PenaltyTier(BaseModel):
    below: float = Field(ge=0.0, le=1.0)
    multiplier: float = Field(ge=0.0, le=1.0)


def _default_importance_weights() -> dict[str, float]:
    return {"critical": 4.0, "high": 2.5, "medium": 1.5, "low": 0.5}


def _default_penalty_tiers() -> list[PenaltyTier]:
    return [
        PenaltyTier(below=0.15, multiplier=0.25),
        PenaltyTier(below=0.3, multiplier=0.4),
        PenaltyTier(below=0.5, multiplier=0.55),
        PenaltyTier(below=0.7, multiplier=0.75),
    ]


class AggregationTuning(BaseModel):
    importance_weights: dict[str, float] = Field(default_factory=_default_importance_weights)
    technical_matched_multiplier: float = 1.5
    technical_missing_multiplier: float = 2.0
    technical_penalty_tiers: list[PenaltyTier] = Field(default_factory=_default_penalty_tiers)
    critical_miss_multiplier: float = 0.6
    domain_mismatch_ceiling: int = Field(default=45, ge=0, le=100)
    score_floor: int = Field(default=15, ge=0, le=100)
    score_ceiling: int = Field(default=95, ge=0, le=100)

    @model_validator(mode="after")
    def _check_bounds(self) -> "AggregationTuning":
        if self.score_floor >= self.score_ceiling:
            raise ValueError("score_floor must be lower than score_ceiling")
        missing = {"critical", "high", "medium", "low"} - set(self.importance_weights)
        if missing:
            raise ValueError(f"importance_weights missing levels: {sorted(missing)}")
        self.technical_penalty_tiers = sorted(self.technical_penalty_tiers, key=lambda tier: tier.below)
        return self


class DetectionTuning(BaseModel):
    humanize_threshold: int = Field(default=50, ge=0, le=100)
    passing_below: int = Field(default=50, ge=0, le=100)
    min_text_chars: int = Field(default=100, ge=0)


class GenerationTuning(BaseModel):
    jd_max_tokens: int = 1500
    jd_temperature: float = 0.7
    format_max_tokens: int = 2000
    format_temperature: float = 0.7
    format_bullet_limit: int = 20
    format_keyword_limit: int = 10
    bullet_similarity_floor: float = 0.7
    cover_letter_max_tokens: int = 600
    cover_letter_temperature: float = 0.8
    humanized_temperature: float = 0.95
    cover_letter_min_evidence_score: int = 50
    cover_letter_max_evidence: int = 4


class ScoringTuning(BaseModel):
    domains: DomainTuning = Field(default_factory=DomainTuning)
    matching: MatchingTuning = Field(default_factory=MatchingTuning)
    aggregation: AggregationTuning = Field(default_factory=AggregationTuning)
    detection: DetectionTuning = Field(default_factory=DetectionTuning)
    generation: GenerationTuning = Field(default_factory=GenerationTuning)


@lru_cache(maxsize=1)
def get_tuning() -> ScoringTuning:
    overrides = get_scoring_value("tailoring", {}) or {}
    if not isinstance(overrides, dict):
        raise RuntimeError("Scoring config section 'tailoring' must be a mapping.")
    return ScoringTuning.model_validate(overrides)
