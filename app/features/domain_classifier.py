from __future__ import annotations

from collections.abc import Iterable

from app.core.config.tuning import DomainTuning, get_tuning
from app.features.lexicons import DOMAIN_INDICATORS, RELATED_DOMAINS
from app.schemas.tailoring import Experience, Requirement, RequirementSet, ResumeProfile


def _related_index() -> dict[str, frozenset[str]]:
    index: dict[str, set[str]] = {}
    for left, right in RELATED_DOMAINS:
        index.setdefault(left, set()).add(right)
        index.setdefault(right, set()).add(left)
    return {domain: frozenset(peers) for domain, peers in index.items()}


_RELATED = _related_index()


def detect_domains(text: str, *, tuning: DomainTuning | None = None) -> frozenset[str]:
    """Return the domain tags whose indicators appear in ``text``.

    A tag needs at least ``min_distinct_indicators`` distinct hits, or a single
    hit on an indicator long enough to be unambiguous on its own.
    """
    cfg = tuning or get_tuning().domains
    lowered = (text or "").lower()
    if not lowered.strip():
        return frozenset()

    detected: set[str] = set()
    for domain, indicators in DOMAIN_INDICATORS.items():
        hits = [indicator for indicator in indicators if indicator in lowered]
        if len(hits) >= cfg.min_distinct_indicators:
            detected.add(domain)
        elif any(len(hit) >= cfg.single_indicator_min_length for hit in hits):
            detected.add(domain)
    return frozenset(detected)


def widen(domains: Iterable[str]) -> frozenset[str]:
    widened = set(domains)
    for domain in list(widened):
        widened.update(_RELATED.get(domain, ()))
    return frozenset(widened)


def domains_overlap(
    required: Iterable[str],
    available: Iterable[str],
    *,
    widen_related: bool = False,
    permissive_unclassified: bool = True,
) -> bool:
    required_set = frozenset(required)
    available_set = frozenset(available)
    if not required_set:
        return True
    if not available_set:
        return permissive_unclassified
    if widen_related:
        available_set = widen(available_set)
    return bool(required_set & available_set)


def experience_text(experience: Experience) -> str:
    bullets = " ".join(bullet.text for bullet in experience.bullets)
    return f"{experience.title} {experience.company} {bullets}"


def resume_domains(resume: ResumeProfile, *, tuning: DomainTuning | None = None) -> frozenset[str]:
    chunks: list[str] = [skill.name for skill in resume.skills]
    chunks.extend(f"{exp.title} {exp.company}" for exp in resume.experiences)
    chunks.extend(bullet.text for exp in resume.experiences for bullet in exp.bullets)
    text = " ".join(chunk for chunk in chunks if chunk.strip())
    if not text:
        # Nothing was segmented; classify the whole document instead.
        text = resume.raw_text
    return detect_domains(text, tuning=tuning)


def requirement_domains(requirement: Requirement, *, tuning: DomainTuning | None = None) -> frozenset[str]:
    return detect_domains(requirement.text, tuning=tuning)


def requirement_set_domains(requirements: RequirementSet, *, tuning: DomainTuning | None = None) -> frozenset[str]:
    text = " ".join([requirements.title, *(req.text for req in requirements.all_requirements())])
    return detect_domains(text, tuning=tuning)
