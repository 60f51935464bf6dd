from __future__ import annotations

from collections.abc import Sequence

from app.core.config.tuning import AggregationTuning, get_tuning
from app.schemas.tailoring import MatchRecord

from .strategies import is_technical_requirement


def _technical_multiplier(rate: float, cfg: AggregationTuning) -> float:
    for tier in cfg.technical_penalty_tiers:
        if rate < tier.below:
            return tier.multiplier
    return 1.0


def calculate_match_score(
    matched: Sequence[MatchRecord],
    missing: Sequence[MatchRecord],
    has_domain_mismatch: bool = False,
    *,
    tuning: AggregationTuning | None = None,
) -> int:
    """Weighted requirement coverage, penalized and clamped to [floor, ceiling].

    Technical requirements weigh more when matched and more still when missing;
    a low technical match rate and a majority of missed critical requirements
    each scale the base score down. A job-level domain mismatch caps the result.
    """
    cfg = tuning or get_tuning().aggregation
    if not matched and not missing:
        return cfg.score_floor

    weighted_matched = 0.0
    total_weight = 0.0
    technical_matches = technical_total = 0
    critical_matches = critical_misses = 0

    for record in matched:
        weight = cfg.importance_weights[record.requirement.importance]
        if is_technical_requirement(record.requirement.text):
            weight *= cfg.technical_matched_multiplier
            technical_matches += 1
            technical_total += 1
        if record.requirement.importance == "critical":
            critical_matches += 1
        weighted_matched += record.score / 100 * weight
        total_weight += weight

    for record in missing:
        weight = cfg.importance_weights[record.requirement.importance]
        if is_technical_requirement(record.requirement.text):
            weight *= cfg.technical_missing_multiplier
            technical_total += 1
        if record.requirement.importance == "critical":
            critical_misses += 1
        total_weight += weight

    score = round(weighted_matched / total_weight * 100) if total_weight > 0 else 0

    if technical_total:
        score = round(score * _technical_multiplier(technical_matches / technical_total, cfg))

    if critical_misses > critical_matches:
        score = round(score * cfg.critical_miss_multiplier)

    if has_domain_mismatch:
        score = min(score, cfg.domain_mismatch_ceiling)

    return int(max(cfg.score_floor, min(score, cfg.score_ceiling)))
