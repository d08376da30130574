"""
Pytest Configuration and Fixtures

Shared profiles, records and guidance resources for the frailty engine tests.
"""
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from frailty.core.engine import FrailtyRiskEngine
from frailty.core.eligibility import GuidanceResource
from frailty.core.scoring.base import (
    ClinicalProfile,
    CognitiveStatus,
    MobilityLevel,
    RecordKind,
    RiskAssessment,
    RiskTier,
    SupplementaryRecord,
    VitalSigns,
)


@pytest.fixture
def engine() -> FrailtyRiskEngine:
    return FrailtyRiskEngine()


@pytest.fixture
def healthy_profile() -> ClinicalProfile:
    """No conditions, no medications, fully independent."""
    return ClinicalProfile()


@pytest.fixture
def frail_profile() -> ClinicalProfile:
    """Severely frail: four conditions including dementia, 12 medications."""
    return ClinicalProfile(
        chronic_conditions=("dementia", "diabetes", "heart disease", "copd"),
        medications_count=12,
        recent_hospitalizations=3,
        mobility_level=MobilityLevel.DEPENDENT,
        cognitive_status=CognitiveStatus.MODERATE_IMPAIRMENT,
        adl_score=3,
    )


@pytest.fixture
def moderate_profile() -> ClinicalProfile:
    """Base score 0.46: two conditions, polypharmacy threshold, one admission."""
    return ClinicalProfile(
        chronic_conditions=("diabetes", "arthritis"),
        medications_count=5,
        recent_hospitalizations=1,
        mobility_level=MobilityLevel.INDEPENDENT,
        cognitive_status=CognitiveStatus.NORMAL,
        adl_score=8,
    )


@pytest.fixture
def abnormal_vitals_record() -> SupplementaryRecord:
    """Hypertensive and hypoxic reading (+0.03 and +0.05)."""
    return SupplementaryRecord(
        record_kind=RecordKind.VITAL_SIGNS,
        title="Clinic visit",
        vital_signs=VitalSigns(blood_pressure_systolic=180, oxygen_saturation=88),
    )


def make_assessment(score: float, tier: RiskTier, confidence: float = 0.5) -> RiskAssessment:
    return RiskAssessment(score=score, tier=tier, confidence=confidence)


@pytest.fixture
def high_assessment() -> RiskAssessment:
    return make_assessment(0.8, RiskTier.HIGH)


@pytest.fixture
def low_assessment() -> RiskAssessment:
    return make_assessment(0.1, RiskTier.LOW)


@pytest.fixture
def guidance_catalog():
    return [
        GuidanceResource(id=1, category="general", title="Understanding Medical Frailty", priority=10),
        GuidanceResource(
            id=2, category="exemption", title="Applying for a Frailty Exemption",
            applicability_criteria=("risk_level = high",), priority=20,
        ),
        GuidanceResource(
            id=3, category="services", title="Home Health Services",
            applicability_criteria=("mobility_level = dependent", "frailty_score >= 0.5"), priority=15,
        ),
        GuidanceResource(
            id=4, category="services", title="Chronic Care Management",
            applicability_criteria=("chronic_conditions",), priority=15,
        ),
        GuidanceResource(
            id=5, category="general", title="Staying Active",
            applicability_criteria=("risk_level = low",), priority=5,
        ),
    ]
