from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from app.core.config.tuning import MatchingTuning, ScoringTuning, get_tuning
from app.features.domain_classifier import (
    detect_domains,
    domains_overlap,
    requirement_set_domains,
    resume_domains,
)
from app.features.lexicons import EDUCATION_TERMS
from app.normalize.utils import contains_any_term
from app.schemas.tailoring import (
    BulletEvidence,
    EducationEvidence,
    Evidence,
    ExperienceEvidence,
    MatchOutcome,
    MatchRecord,
    NoEvidence,
    Requirement,
    RequirementSet,
    ResumeProfile,
    SkillEvidence,
)
from app.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .strategies import (
    is_technical_requirement,
    match_type_for,
    score_bullet,
    score_education,
    score_experience_years,
    score_raw_text,
    score_skill,
    score_title,
)

_IMPORTANCE_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}


@dataclass(slots=True)
class _ResumeIndex:
    """Per-request lookups computed once and shared by every requirement."""

    resume: ResumeProfile
    domains: frozenset[str]
    skill_groups: list[frozenset[str]]
    bullet_groups: dict[int, frozenset[str]]
    current_year: int


@dataclass(slots=True)
class _Best:
    score: int = 0
    evidence: Evidence | None = None
    evidence_text: str = ""

    def offer(self, score: int, evidence: Evidence, evidence_text: str) -> None:
        if score > self.score:
            self.score = score
            self.evidence = evidence
            self.evidence_text = evidence_text


def _index_resume(
    resume: ResumeProfile, taxonomy: TaxonomyProvider, tuning: ScoringTuning, current_year: int
) -> _ResumeIndex:
    bullet_groups: dict[int, frozenset[str]] = {}
    for experience in resume.experiences:
        for bullet in experience.bullets:
            bullet_groups[id(bullet)] = taxonomy.groups_containing(bullet.text)
    return _ResumeIndex(
        resume=resume,
        domains=resume_domains(resume, tuning=tuning.domains),
        skill_groups=[taxonomy.groups_containing(skill.name) for skill in resume.skills],
        bullet_groups=bullet_groups,
        current_year=current_year,
    )


def match_requirement(
    requirement: Requirement,
    index: _ResumeIndex,
    keywords: list[str],
    *,
    taxonomy: TaxonomyProvider,
    tuning: ScoringTuning,
) -> MatchRecord:
    cfg: MatchingTuning = tuning.matching
    resume = index.resume
    text = requirement.text
    lowered = text.lower()

    req_domains = detect_domains(text, tuning=tuning.domains)
    mismatch = bool(req_domains) and not domains_overlap(
        req_domains, index.domains, widen_related=cfg.widen_related_domains
    )
    names_degree = contains_any_term(lowered, EDUCATION_TERMS)

    def capped(score: int, *, exempt: bool = False) -> int:
        if mismatch and not exempt:
            return min(score, cfg.domain_mismatch_ceiling)
        return score

    req_groups = taxonomy.groups_containing(text)
    best = _Best()

    if "year" in lowered or "experience" in lowered:
        tenure = score_experience_years(
            text,
            resume,
            requirement_domains=req_domains,
            current_year=index.current_year,
            cfg=cfg.experience,
            resume_domain_tags=index.domains,
        )
        best.offer(
            capped(tenure.score),
            ExperienceEvidence(years=tenure.relevant_years, positions=tenure.positions),
            f"{tenure.relevant_years} years of relevant experience across {tenure.positions} positions",
        )

    for skill, skill_groups in zip(resume.skills, index.skill_groups):
        score = score_skill(
            text, skill.name, requirement_groups=req_groups, skill_groups=skill_groups, cfg=cfg.skill
        )
        best.offer(capped(score), SkillEvidence(skill=skill), skill.original_text or skill.name)

    for experience in resume.experiences:
        for bullet in experience.bullets:
            score = score_bullet(
                text,
                bullet,
                keywords,
                requirement_groups=req_groups,
                bullet_groups=index.bullet_groups.get(id(bullet), frozenset()),
                cfg=cfg.bullet,
            )
            best.offer(
                capped(score),
                BulletEvidence(
                    bullet=bullet,
                    experience_title=experience.title,
                    experience_company=experience.company,
                ),
                bullet.text,
            )

        title_score = score_title(text, experience.title, cfg.title)
        label = f"{experience.title} at {experience.company}" if experience.company else experience.title
        best.offer(
            capped(title_score),
            ExperienceEvidence(
                title=experience.title,
                company=experience.company,
                date_range=experience.date_range,
            ),
            label,
        )

    for education in resume.education:
        score = score_education(text, education, cfg.education)
        best.offer(
            capped(score, exempt=names_degree),
            EducationEvidence(education=education),
            education.original_text or education.degree,
        )

    raw_score = score_raw_text(text, resume.raw_text, cfg.raw_text_score)
    best.offer(capped(raw_score), NoEvidence(), "Found in resume content")

    return MatchRecord(
        requirement=requirement,
        evidence=best.evidence or NoEvidence(),
        score=best.score,
        match_type=match_type_for(best.score, cfg.match_types),
        evidence_text=best.evidence_text,
    )


def match_resume(
    resume: ResumeProfile,
    requirements: RequirementSet,
    *,
    tuning: ScoringTuning | None = None,
    taxonomy: TaxonomyProvider | None = None,
    today: date | None = None,
) -> MatchOutcome:
    """Best-evidence match for every requirement, partitioned by threshold."""
    tuning = tuning or get_tuning()
    taxonomy = taxonomy or get_default_taxonomy_provider()
    current_year = (today or date.today()).year
    index = _index_resume(resume, taxonomy, tuning, current_year)
    thresholds = tuning.matching.thresholds

    jd_domains = requirement_set_domains(requirements, tuning=tuning.domains)
    has_domain_mismatch = bool(jd_domains) and not domains_overlap(jd_domains, index.domains)

    matched: list[MatchRecord] = []
    missing: list[MatchRecord] = []
    for requirement in requirements.all_requirements():
        record = match_requirement(
            requirement, index, requirements.keywords, taxonomy=taxonomy, tuning=tuning
        )
        threshold = thresholds.technical if is_technical_requirement(requirement.text) else thresholds.general
        if record.score >= threshold:
            matched.append(record)
        else:
            missing.append(record)

    matched.sort(key=lambda record: record.score, reverse=True)
    missing.sort(key=lambda record: _IMPORTANCE_ORDER[record.requirement.importance])
    return MatchOutcome(matched=matched, missing=missing, has_domain_mismatch=has_domain_mismatch)
