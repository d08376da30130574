"""
Narrative Generator

Plain-language insights and warning flags for a scored profile.

Insights: tier statements first, then care-coordination, medication
management and hospitalization statements in that fixed order.

Warnings are independent triggers. The prefixes "CRITICAL", "HIGH RISK"
and "ALERT" are matched on by downstream consumers and must stay verbatim.
"""
from __future__ import annotations

from typing import List

from .base import ClinicalProfile, CognitiveStatus, MobilityLevel, RiskTier
from .catalog import SERIOUS_CONDITIONS

# ── Insight texts ─────────────────────────────────────────────────────────────

TIER_INSIGHTS = {
    RiskTier.HIGH: (
        "Your frailty assessment indicates you likely meet Indiana Medicaid's medical frailty criteria.",
        "Medical frailty exemption can provide access to comprehensive health services and support.",
    ),
    RiskTier.MODERATE: (
        "You show moderate frailty indicators that may qualify you for enhanced Medicaid services.",
        "Consider discussing preventive interventions with your healthcare provider to avoid progression.",
    ),
    RiskTier.LOW: (
        "Your current frailty assessment shows low risk, but continued monitoring is recommended.",
    ),
}

INSIGHT_MULTIMORBIDITY = (
    "Managing multiple chronic conditions requires coordinated care - "
    "consider a care management program."
)
INSIGHT_MEDICATIONS = (
    "High medication count increases risk of interactions - "
    "medication therapy management may be beneficial."
)
INSIGHT_HOSPITALIZATIONS = (
    "Frequent hospitalizations suggest need for better care coordination and preventive services."
)

# ── Warning texts ─────────────────────────────────────────────────────────────

WARNING_HOSPITALIZATIONS = (
    "CRITICAL: Three or more recent hospitalizations - immediate care coordination needed"
)
WARNING_MOBILITY_COGNITION = (
    "HIGH RISK: Combined mobility and cognitive impairment requires comprehensive support"
)
WARNING_MEDICATIONS = (
    "ALERT: Very high medication count - urgent medication review recommended"
)
WARNING_ADL = (
    "CRITICAL: Severe limitations in daily activities - immediate assistance needed"
)
WARNING_SERIOUS_CONDITIONS = (
    "HIGH RISK: Multiple serious chronic conditions require specialized care management"
)

# ── Thresholds ────────────────────────────────────────────────────────────────

INSIGHT_MIN_CONDITIONS       = 3
INSIGHT_MIN_MEDICATIONS      = 7
INSIGHT_MIN_HOSPITALIZATIONS = 2

WARNING_MIN_HOSPITALIZATIONS = 3
WARNING_MIN_MEDICATIONS      = 10
WARNING_MAX_ADL              = 3
WARNING_MIN_CONDITIONS       = 3


def has_serious_condition(profile: ClinicalProfile) -> bool:
    return any(
        serious in condition.lower()
        for condition in profile.chronic_conditions
        for serious in SERIOUS_CONDITIONS
    )


def generate_insights(profile: ClinicalProfile, tier: RiskTier) -> List[str]:
    insights = list(TIER_INSIGHTS[tier])

    if profile.condition_count >= INSIGHT_MIN_CONDITIONS:
        insights.append(INSIGHT_MULTIMORBIDITY)
    if profile.medications_count >= INSIGHT_MIN_MEDICATIONS:
        insights.append(INSIGHT_MEDICATIONS)
    if profile.recent_hospitalizations >= INSIGHT_MIN_HOSPITALIZATIONS:
        insights.append(INSIGHT_HOSPITALIZATIONS)

    return insights


def identify_warnings(profile: ClinicalProfile) -> List[str]:
    warnings = []

    if profile.recent_hospitalizations >= WARNING_MIN_HOSPITALIZATIONS:
        warnings.append(WARNING_HOSPITALIZATIONS)

    if (profile.mobility_level == MobilityLevel.DEPENDENT
            and profile.cognitive_status != CognitiveStatus.NORMAL):
        warnings.append(WARNING_MOBILITY_COGNITION)

    if profile.medications_count >= WARNING_MIN_MEDICATIONS:
        warnings.append(WARNING_MEDICATIONS)

    if profile.adl_score <= WARNING_MAX_ADL:
        warnings.append(WARNING_ADL)

    if profile.condition_count >= WARNING_MIN_CONDITIONS and has_serious_condition(profile):
        warnings.append(WARNING_SERIOUS_CONDITIONS)

    return warnings
