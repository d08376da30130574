"""
Base Score Aggregator

Combines the categorical and count inputs of a ClinicalProfile into a raw
frailty score. The raw score is unbounded above; the engine clamps it once,
after the supplementary record adjustment has been added.
"""
from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .base import ClinicalProfile
from .catalog import (
    ADL_MAX,
    ADL_PER_POINT,
    COGNITIVE_WEIGHTS,
    DEFAULT_CATALOG,
    HOSPITALIZATION_PER_EVENT,
    HOSPITALIZATION_TIERS,
    MEDICATION_PER_UNIT,
    MEDICATION_TIERS,
    MOBILITY_WEIGHTS,
    ConditionCatalog,
)


def _tiered_weight(count: int, tiers: Sequence[Tuple[int, float]], per_unit: float) -> float:
    """Flat weight of the highest tier reached, else a linear per-unit weight."""
    for minimum, weight in tiers:
        if count >= minimum:
            return weight
    return count * per_unit


def condition_weight(profile: ClinicalProfile, catalog: ConditionCatalog = DEFAULT_CATALOG) -> float:
    total = 0.0
    for condition in profile.chronic_conditions:
        total += catalog.weight_for(condition)
    return total


def medication_weight(medications_count: int) -> float:
    return _tiered_weight(medications_count, MEDICATION_TIERS, MEDICATION_PER_UNIT)


def hospitalization_weight(recent_hospitalizations: int) -> float:
    return _tiered_weight(recent_hospitalizations, HOSPITALIZATION_TIERS, HOSPITALIZATION_PER_EVENT)


def adl_weight(adl_score: int) -> float:
    return max(0, ADL_MAX - adl_score) * ADL_PER_POINT


def base_score_components(
    profile: ClinicalProfile,
    catalog: ConditionCatalog = DEFAULT_CATALOG,
) -> Dict[str, float]:
    """
    Per-input contributions to the raw score, in summation order.

    Example output:
    {
        "conditions": 0.14,
        "medications": 0.10,
        "hospitalizations": 0.10,
        "mobility": 0.25,
        "cognition": 0.12,
        "adl": 0.24,
    }
    """
    return {
        "conditions":       condition_weight(profile, catalog),
        "medications":      medication_weight(profile.medications_count),
        "hospitalizations": hospitalization_weight(profile.recent_hospitalizations),
        "mobility":         MOBILITY_WEIGHTS[profile.mobility_level],
        "cognition":        COGNITIVE_WEIGHTS[profile.cognitive_status],
        "adl":              adl_weight(profile.adl_score),
    }


def calculate_base_score(profile: ClinicalProfile, catalog: ConditionCatalog = DEFAULT_CATALOG) -> float:
    """Raw (unclamped) base score for ``profile``."""
    score = 0.0
    for contribution in base_score_components(profile, catalog).values():
        score += contribution
    return score
