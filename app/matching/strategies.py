"""Per-evidence scoring strategies. Every function returns an int in [0, 100]."""

from __future__ import annotations

import re
from dataclasses import dataclass

from app.core.config.tuning import (
    BulletScores,
    EducationScores,
    ExperienceScores,
    MatchTypeTiers,
    SkillScores,
    TitleScores,
)
from app.features.domain_classifier import (
    detect_domains,
    domains_overlap,
    experience_text,
    resume_domains,
)
from app.features.lexicons import (
    DEGREE_LEVELS,
    GENERIC_WORDS,
    RAW_TEXT_TERMS,
    ROLE_GROUPS,
    STOPWORDS,
    STUDY_FIELDS,
    TECHNICAL_INDICATORS,
    TECHNICAL_SYNONYM_GROUPS,
)
from app.normalize.utils import contains_any_term, contains_term, words
from app.schemas.tailoring import Bullet, Education, MatchType, ResumeProfile

_YEARS_RE = re.compile(r"(\d+)\+?\s*years?", re.IGNORECASE)
_SENIOR_REQ_RE = re.compile(r"senior|lead|principal|staff", re.IGNORECASE)
_MID_REQ_RE = re.compile(r"mid-?level|intermediate", re.IGNORECASE)
_JUNIOR_REQ_RE = re.compile(r"junior|entry", re.IGNORECASE)
_SENIOR_TITLE_RE = re.compile(r"senior|lead|principal|staff|manager|director", re.IGNORECASE)
_FOUR_DIGIT_YEAR_RE = re.compile(r"\d{4}")
_ONGOING_RE = re.compile(r"present|current|now", re.IGNORECASE)


def clamp_score(value: float) -> int:
    return max(0, min(100, int(round(value))))


def match_type_for(score: int, tiers: MatchTypeTiers) -> MatchType:
    if score >= tiers.exact:
        return "exact"
    if score >= tiers.semantic:
        return "semantic"
    if score >= tiers.partial:
        return "partial"
    return "missing"


def is_technical_requirement(text: str) -> bool:
    return contains_any_term(text, TECHNICAL_INDICATORS)


def _significant_words(text: str) -> list[str]:
    return [
        word
        for word in words(text)
        if len(word) > 2 and word not in STOPWORDS and word not in GENERIC_WORDS
    ]


def _words_related(left: str, right: str) -> bool:
    if left == right:
        return True
    shorter, longer = sorted((left, right), key=len)
    return len(shorter) >= 4 and shorter in longer


def score_skill(
    requirement_text: str,
    skill_name: str,
    *,
    requirement_groups: frozenset[str],
    skill_groups: frozenset[str],
    cfg: SkillScores,
) -> int:
    req = requirement_text.lower()
    skill = skill_name.lower().strip()
    if not skill:
        return 0
    if contains_term(req, skill) or contains_term(skill, req.strip()):
        return cfg.contained
    if requirement_groups & skill_groups:
        return cfg.synonym

    skill_words = _significant_words(skill)
    overlap = [
        word for word in _significant_words(req) if any(_words_related(word, other) for other in skill_words)
    ]
    if overlap:
        return clamp_score(cfg.overlap_base + min(len(overlap) * cfg.overlap_step, cfg.overlap_bonus_cap))
    return 0


def score_bullet(
    requirement_text: str,
    bullet: Bullet,
    keywords: list[str],
    *,
    requirement_groups: frozenset[str],
    bullet_groups: frozenset[str],
    cfg: BulletScores,
) -> int:
    req = requirement_text.lower()
    text = bullet.text.lower()
    score = 0.0

    req_words = [
        word for word in dict.fromkeys(words(req)) if len(word) >= cfg.min_word_length and word not in STOPWORDS
    ]
    matched_words = [word for word in req_words if word in text]
    if len(matched_words) >= cfg.min_overlap_words:
        score += len(matched_words) / max(len(req_words), 1) * cfg.word_overlap_weight

    keyword_hits = sum(
        1 for keyword in keywords if len(keyword) >= cfg.keyword_min_length and contains_term(text, keyword)
    )
    score += min(keyword_hits * cfg.keyword_step, cfg.keyword_cap)

    if requirement_groups & bullet_groups & TECHNICAL_SYNONYM_GROUPS:
        score += cfg.synonym_bonus

    if bullet.metrics:
        score += cfg.metric_bonus

    return min(clamp_score(score), cfg.cap)


def score_title(requirement_text: str, title: str, cfg: TitleScores) -> int:
    req = requirement_text.lower()
    role = title.lower()
    if not role:
        return 0
    if contains_term(req, "senior") and contains_term(role, "senior"):
        return cfg.senior_match
    if contains_term(req, "lead") and (contains_term(role, "lead") or contains_term(role, "senior")):
        return cfg.lead_match
    if "experience" in req and (contains_term(role, "senior") or contains_term(role, "lead")):
        return cfg.seniority_for_experience
    for group in ROLE_GROUPS:
        if contains_any_term(req, group) and contains_any_term(role, group):
            return cfg.role_group
    return 0


def degree_levels(text: str) -> set[int]:
    lowered = text.lower()
    return {level for level, names in DEGREE_LEVELS if contains_any_term(lowered, names)}


def score_education(requirement_text: str, education: Education, cfg: EducationScores) -> int:
    req = requirement_text.lower()
    edu_text = f"{education.degree} {education.institution}".lower()

    required_levels = degree_levels(req)
    held_levels = degree_levels(edu_text)
    if required_levels and held_levels:
        if required_levels & held_levels:
            return cfg.same_level
        if max(held_levels) > min(required_levels):
            return cfg.higher_level

    for field in STUDY_FIELDS:
        if contains_term(req, field) and contains_term(edu_text, field):
            return cfg.field_match

    if contains_term(req, "degree") and education.degree.strip():
        return cfg.any_degree
    return 0


def required_years(requirement_text: str) -> int:
    match = _YEARS_RE.search(requirement_text)
    if match:
        return int(match.group(1))
    if _SENIOR_REQ_RE.search(requirement_text):
        return 5
    if _MID_REQ_RE.search(requirement_text):
        return 3
    if _JUNIOR_REQ_RE.search(requirement_text):
        return 1
    return 0


def years_in_range(date_range: str | None, current_year: int, default: int = 1) -> int:
    if not date_range:
        return default
    years = _FOUR_DIGIT_YEAR_RE.findall(date_range)
    if not years:
        return default
    start = int(years[0])
    if _ONGOING_RE.search(date_range):
        end = current_year
    else:
        end = int(years[1]) if len(years) > 1 else start
    return max(1, end - start)


@dataclass(slots=True)
class TenureScore:
    score: int
    relevant_years: int
    positions: int


def score_experience_years(
    requirement_text: str,
    resume: ResumeProfile,
    *,
    requirement_domains: frozenset[str],
    current_year: int,
    cfg: ExperienceScores,
    resume_domain_tags: frozenset[str] | None = None,
) -> TenureScore:
    """Score tenure from positions in the requirement's domain.

    A position whose own text is too thin to classify inherits the résumé's
    domains; when those are empty too, the position counts.
    """
    needed = required_years(requirement_text)
    if needed <= 0:
        return TenureScore(score=0, relevant_years=0, positions=0)

    fallback = resume_domains(resume) if resume_domain_tags is None else resume_domain_tags
    position_tags = [
        detect_domains(experience_text(experience)) or fallback for experience in resume.experiences
    ]

    relevant_years = 0
    relevant_positions = 0
    for experience, tags in zip(resume.experiences, position_tags):
        if domains_overlap(requirement_domains, tags, widen_related=True):
            relevant_years += years_in_range(experience.date_range, current_year, cfg.default_position_years)
            relevant_positions += 1

    if requirement_domains and relevant_years == 0:
        return TenureScore(score=cfg.none, relevant_years=0, positions=0)

    has_senior_relevant_title = any(
        _SENIOR_TITLE_RE.search(experience.title)
        and domains_overlap(
            requirement_domains,
            detect_domains(f"{experience.title} {experience.company}") or tags,
            widen_related=True,
        )
        for experience, tags in zip(resume.experiences, position_tags)
    )
    if has_senior_relevant_title:
        relevant_years = max(relevant_years, cfg.senior_title_floor_years)

    if relevant_years >= needed:
        score = cfg.meets
    elif relevant_years >= needed * cfg.close_ratio:
        score = cfg.close
    elif relevant_years >= needed * cfg.partial_ratio:
        score = cfg.partial
    elif relevant_years > 0:
        score = cfg.some
    else:
        score = cfg.none
    return TenureScore(score=score, relevant_years=relevant_years, positions=relevant_positions)


def score_raw_text(requirement_text: str, raw_text: str, score: int) -> int:
    req = requirement_text.lower()
    text = raw_text.lower()
    for term in RAW_TEXT_TERMS:
        if contains_term(req, term) and contains_term(text, term):
            return score
    return 0
