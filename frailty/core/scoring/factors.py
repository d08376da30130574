"""
Contributing-Factor Ranker

Each rule inspects the profile and returns a ContributingFactor when its
trigger is met, or None. Rules run in emission order; the result is
stable-sorted by descending impact so equal impacts keep that order.

Triggers:
    1. Multiple Chronic Conditions: 3+ conditions
    2. Polypharmacy: 5+ medications
    3. Recent Hospitalizations: 2+ hospitalizations
    4. Mobility Limitations: limited or dependent mobility
    5. Cognitive Impairment: any impairment
    6. Activities of Daily Living: ADL below 7
"""
from __future__ import annotations

from typing import List, Optional

from .base import ClinicalProfile, CognitiveStatus, ContributingFactor, MobilityLevel
from .catalog import ADL_MAX, ADL_PER_POINT, COGNITIVE_WEIGHTS, MOBILITY_WEIGHTS

# ── Triggers ──────────────────────────────────────────────────────────────────

MULTIMORBIDITY_MIN_CONDITIONS = 3
POLYPHARMACY_MIN_MEDICATIONS  = 5
HOSPITALIZATION_MIN_EVENTS    = 2
ADL_FACTOR_BELOW              = 7

# ── Impact multipliers ────────────────────────────────────────────────────────

IMPACT_PER_CONDITION       = 0.08
IMPACT_PER_MEDICATION      = 0.05
IMPACT_PER_HOSPITALIZATION = 0.15


def factor_multiple_conditions(profile: ClinicalProfile) -> Optional[ContributingFactor]:
    count = profile.condition_count
    if count < MULTIMORBIDITY_MIN_CONDITIONS:
        return None
    return ContributingFactor(
        label="Multiple Chronic Conditions",
        impact=count * IMPACT_PER_CONDITION,
        description=(
            f"You have {count} documented chronic conditions, "
            "which significantly impacts frailty risk."
        ),
    )


def factor_polypharmacy(profile: ClinicalProfile) -> Optional[ContributingFactor]:
    count = profile.medications_count
    if count < POLYPHARMACY_MIN_MEDICATIONS:
        return None
    return ContributingFactor(
        label="Polypharmacy",
        impact=count * IMPACT_PER_MEDICATION,
        description=f"Taking {count} medications increases risk of adverse effects and frailty.",
    )


def factor_hospitalizations(profile: ClinicalProfile) -> Optional[ContributingFactor]:
    count = profile.recent_hospitalizations
    if count < HOSPITALIZATION_MIN_EVENTS:
        return None
    return ContributingFactor(
        label="Recent Hospitalizations",
        impact=count * IMPACT_PER_HOSPITALIZATION,
        description=(
            f"{count} recent hospitalizations indicate acute health events "
            "that contribute to frailty."
        ),
    )


def factor_mobility(profile: ClinicalProfile) -> Optional[ContributingFactor]:
    if profile.mobility_level == MobilityLevel.INDEPENDENT:
        return None
    dependent = profile.mobility_level == MobilityLevel.DEPENDENT
    return ContributingFactor(
        label="Mobility Limitations",
        impact=MOBILITY_WEIGHTS[profile.mobility_level],
        description=f"{'Dependent' if dependent else 'Limited'} mobility is a strong indicator of frailty.",
    )


def factor_cognition(profile: ClinicalProfile) -> Optional[ContributingFactor]:
    if profile.cognitive_status == CognitiveStatus.NORMAL:
        return None
    readable = profile.cognitive_status.value.replace("_", " ")
    return ContributingFactor(
        label="Cognitive Impairment",
        impact=COGNITIVE_WEIGHTS[profile.cognitive_status],
        description=f"Cognitive status shows {readable}, affecting daily functioning.",
    )


def factor_adl(profile: ClinicalProfile) -> Optional[ContributingFactor]:
    adl = profile.adl_score
    if adl >= ADL_FACTOR_BELOW:
        return None
    return ContributingFactor(
        label="Activities of Daily Living",
        impact=(ADL_MAX - adl) * ADL_PER_POINT,
        description=f"ADL score of {adl}/10 indicates difficulty with daily activities.",
    )


# All factor rules in emission order.
FACTOR_RULES = [
    factor_multiple_conditions,
    factor_polypharmacy,
    factor_hospitalizations,
    factor_mobility,
    factor_cognition,
    factor_adl,
]


def rank_contributing_factors(profile: ClinicalProfile) -> List[ContributingFactor]:
    """
    Evaluate all factor rules and rank the ones that fired.

    Returns:
        Factors sorted by descending impact; ties keep emission order.
        Empty for a profile with no significant drivers.
    """
    factors = []
    for rule in FACTOR_RULES:
        factor = rule(profile)
        if factor is not None:
            factors.append(factor)
    # list.sort is stable
    factors.sort(key=lambda f: f.impact, reverse=True)
    return factors
