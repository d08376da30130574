"""
Risk Classifier and Confidence Estimator

Tier thresholds are fixed; a score sitting exactly on a threshold belongs
to the higher tier.
"""
from __future__ import annotations

import math

from .base import ClinicalProfile, RiskTier

HIGH_THRESHOLD     = 0.65
MODERATE_THRESHOLD = 0.35

BASE_CONFIDENCE            = 0.5
CONFIDENCE_CONDITIONS      = 0.1
CONFIDENCE_MEDICATIONS     = 0.1
CONFIDENCE_PER_RECORD      = 0.05
CONFIDENCE_RECORDS_CAP     = 0.3


def clamp_score(value: float) -> float:
    """Clamp into [0, 1]; NaN maps to 0."""
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def combine_scores(base_score: float, adjustment: float) -> float:
    return clamp_score(base_score + adjustment)


def classify_tier(score: float) -> RiskTier:
    if score >= HIGH_THRESHOLD:
        return RiskTier.HIGH
    if score >= MODERATE_THRESHOLD:
        return RiskTier.MODERATE
    return RiskTier.LOW


def estimate_confidence(profile: ClinicalProfile, record_count: int = 0) -> float:
    """
    How much corroborating data backed the assessment.

    0.5 baseline, +0.1 for documented conditions, +0.1 for a medication
    count, +0.05 per supplementary record (at most +0.3).
    """
    confidence = BASE_CONFIDENCE
    if profile.chronic_conditions:
        confidence += CONFIDENCE_CONDITIONS
    if profile.medications_count > 0:
        confidence += CONFIDENCE_MEDICATIONS
    if record_count > 0:
        confidence += min(record_count * CONFIDENCE_PER_RECORD, CONFIDENCE_RECORDS_CAP)
    return min(confidence, 1.0)
