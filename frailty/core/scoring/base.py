"""
Frailty Scoring Base Types

Defines the immutable inputs the engine consumes (clinical profile and
supplementary records) and the RiskAssessment value it returns.
These are transport-agnostic; callers decide how to persist or render them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class MobilityLevel(str, Enum):
    """How much help the person needs to move around."""
    INDEPENDENT = "independent"
    LIMITED     = "limited"
    DEPENDENT   = "dependent"


class CognitiveStatus(str, Enum):
    """Degree of cognitive impairment."""
    NORMAL              = "normal"
    MILD_IMPAIRMENT     = "mild_impairment"
    MODERATE_IMPAIRMENT = "moderate_impairment"
    SEVERE_IMPAIRMENT   = "severe_impairment"


class RiskTier(str, Enum):
    """
    Discrete frailty risk classification.

    LOW      – score < 0.35
    MODERATE – 0.35 <= score < 0.65
    HIGH     – score >= 0.65
    """
    LOW      = "low"
    MODERATE = "moderate"
    HIGH     = "high"


class RecordKind(str, Enum):
    """Kind tag of a supplementary clinical record."""
    VITAL_SIGNS  = "vital_signs"
    LAB_RESULT   = "lab_result"
    MEDICATION   = "medication"
    DIAGNOSIS    = "diagnosis"
    PROCEDURE    = "procedure"
    IMMUNIZATION = "immunization"
    ALLERGY      = "allergy"
    OTHER        = "other"


# ── Inputs ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ClinicalProfile:
    """
    Structured clinical inputs for one assessment.

    Counts are assumed non-negative and the ADL score within 0-10; range
    checks belong to the schema layer in ``frailty.models``.
    """
    chronic_conditions: Tuple[str, ...] = ()
    medications_count: int = 0
    recent_hospitalizations: int = 0
    mobility_level: MobilityLevel = MobilityLevel.INDEPENDENT
    cognitive_status: CognitiveStatus = CognitiveStatus.NORMAL
    adl_score: int = 10              # 10 = fully independent

    def __post_init__(self):
        # A bare string is one condition; lists become tuples so the profile stays hashable
        if isinstance(self.chronic_conditions, str):
            object.__setattr__(self, "chronic_conditions", (self.chronic_conditions,))
        elif not isinstance(self.chronic_conditions, tuple):
            object.__setattr__(self, "chronic_conditions", tuple(self.chronic_conditions))

    @property
    def condition_count(self) -> int:
        return len(self.chronic_conditions)


@dataclass(frozen=True)
class VitalSigns:
    """Vital readings; any reading may be absent."""
    blood_pressure_systolic: Optional[float] = None
    blood_pressure_diastolic: Optional[float] = None
    heart_rate: Optional[float] = None
    temperature: Optional[float] = None
    respiratory_rate: Optional[float] = None
    oxygen_saturation: Optional[float] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    bmi: Optional[float] = None


@dataclass(frozen=True)
class LabResult:
    test_name: str
    value: str = ""
    unit: Optional[str] = None
    reference_range: Optional[str] = None
    abnormal_flag: Optional[bool] = None


@dataclass(frozen=True)
class DiagnosisDetails:
    condition: str
    icd_code: Optional[str] = None
    severity: Optional[str] = None
    status: Optional[str] = None     # active | resolved | chronic


@dataclass(frozen=True)
class SupplementaryRecord:
    """
    One optional clinical record.

    Only the payload matching ``record_kind`` is read by the analyzer;
    the others are ignored even when populated.
    """
    record_kind: RecordKind
    title: str = ""
    vital_signs: Optional[VitalSigns] = None
    lab_results: Tuple[LabResult, ...] = ()
    diagnosis: Optional[DiagnosisDetails] = None

    def __post_init__(self):
        if not isinstance(self.lab_results, tuple):
            object.__setattr__(self, "lab_results", tuple(self.lab_results))


# ── Outputs ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ContributingFactor:
    """A named, ranked explanation of what drove the score."""
    label: str               # e.g. "Polypharmacy"
    impact: float            # display / ranking magnitude
    description: str         # plain-language explanation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "factor": self.label,
            "impact": self.impact,
            "description": self.description,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """
    Result of scoring one ClinicalProfile.

    A pure value: produced fresh on every call, never mutated.
    """
    # ── Score ─────────────────────────────────────────────────────────────
    score: float                     # always within [0, 1]
    tier: RiskTier
    confidence: float                # always within [0, 1]

    # ── Explanation ───────────────────────────────────────────────────────
    contributing_factors: Tuple[ContributingFactor, ...] = ()
    insights: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    # ── Breakdown (audit only) ────────────────────────────────────────────
    base_score: float = 0.0
    record_adjustment: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frailty_score": self.score,
            "risk_level": self.tier.value,
            "confidence_score": self.confidence,
            "contributing_factors": [f.to_dict() for f in self.contributing_factors],
            "insights": list(self.insights),
            "warning_flags": list(self.warnings),
        }

    @property
    def factor_labels(self) -> List[str]:
        return [f.label for f in self.contributing_factors]
