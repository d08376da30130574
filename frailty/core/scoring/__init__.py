"""
Frailty Scoring Layer

Turns a ClinicalProfile (plus optional supplementary records) into a
RiskAssessment.

Usage:
    from frailty.core.scoring import ClinicalProfile, MobilityLevel, assess

    profile = ClinicalProfile(
        chronic_conditions=("diabetes", "copd"),
        medications_count=6,
        mobility_level=MobilityLevel.LIMITED,
        adl_score=7,
    )
    assessment = assess(profile)
    print(assessment.score, assessment.tier)
"""
from .base import (
    ClinicalProfile,
    CognitiveStatus,
    ContributingFactor,
    DiagnosisDetails,
    LabResult,
    MobilityLevel,
    RecordKind,
    RiskAssessment,
    RiskTier,
    SupplementaryRecord,
    VitalSigns,
)
from .catalog import DEFAULT_CATALOG, ConditionCatalog, load_catalog
from .classifier import classify_tier
from .pipeline import assess

__all__ = [
    "ClinicalProfile",
    "CognitiveStatus",
    "ContributingFactor",
    "DiagnosisDetails",
    "LabResult",
    "MobilityLevel",
    "RecordKind",
    "RiskAssessment",
    "RiskTier",
    "SupplementaryRecord",
    "VitalSigns",
    "DEFAULT_CATALOG",
    "ConditionCatalog",
    "load_catalog",
    "classify_tier",
    "assess",
]
