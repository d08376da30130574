"""
Scoring Pipeline

profile → base score + record adjustment → clamped score → tier
        → confidence, contributing factors, insights, warnings
"""
from __future__ import annotations

from typing import Iterable

from .aggregator import calculate_base_score
from .base import ClinicalProfile, RiskAssessment, SupplementaryRecord
from .catalog import DEFAULT_CATALOG, ConditionCatalog
from .classifier import classify_tier, combine_scores, estimate_confidence
from .factors import rank_contributing_factors
from .narrative import generate_insights, identify_warnings
from .records import analyze_records


def assess(
    profile: ClinicalProfile,
    records: Iterable[SupplementaryRecord] = (),
    catalog: ConditionCatalog = DEFAULT_CATALOG,
) -> RiskAssessment:
    """
    Score one profile. Pure: identical inputs give identical output.

    Args:
        profile: Structured clinical inputs.
        records: Optional supplementary clinical records.
        catalog: Condition weight table used for the base score.

    Returns:
        A fresh RiskAssessment.
    """
    records = tuple(records)

    base_score = calculate_base_score(profile, catalog)
    adjustment = analyze_records(records)
    final_score = combine_scores(base_score, adjustment)
    tier = classify_tier(final_score)

    return RiskAssessment(
        score=final_score,
        tier=tier,
        confidence=estimate_confidence(profile, len(records)),
        contributing_factors=tuple(rank_contributing_factors(profile)),
        insights=tuple(generate_insights(profile, tier)),
        warnings=tuple(identify_warnings(profile)),
        base_score=base_score,
        record_adjustment=adjustment,
    )
