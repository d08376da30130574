"""
Medical Frailty Eligibility Evaluator

Runs a fixed six-criterion checklist against a profile, independent of the
predicate grammar. A person qualifies when at least three criteria are met
and the assessment tier is high.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from frailty.core.scoring.base import (
    ClinicalProfile,
    CognitiveStatus,
    MobilityLevel,
    RiskAssessment,
    RiskTier,
)

MIN_CRITERIA_MET = 3


@dataclass(frozen=True)
class EligibilityCriterion:
    name: str
    check: Callable[[ClinicalProfile], bool]
    describe: Callable[[ClinicalProfile], str]


# Checklist, in report order
ELIGIBILITY_CRITERIA: Tuple[EligibilityCriterion, ...] = (
    EligibilityCriterion(
        name="Two or more chronic conditions",
        check=lambda p: p.condition_count >= 2,
        describe=lambda p: f"{p.condition_count} chronic condition(s)",
    ),
    EligibilityCriterion(
        name="Five or more medications",
        check=lambda p: p.medications_count >= 5,
        describe=lambda p: f"{p.medications_count} medication(s)",
    ),
    EligibilityCriterion(
        name="Two or more recent hospitalizations",
        check=lambda p: p.recent_hospitalizations >= 2,
        describe=lambda p: f"{p.recent_hospitalizations} hospitalization(s)",
    ),
    EligibilityCriterion(
        name="Mobility limitation",
        check=lambda p: p.mobility_level != MobilityLevel.INDEPENDENT,
        describe=lambda p: f"mobility {p.mobility_level.value}",
    ),
    EligibilityCriterion(
        name="Cognitive impairment",
        check=lambda p: p.cognitive_status != CognitiveStatus.NORMAL,
        describe=lambda p: f"cognition {p.cognitive_status.value.replace('_', ' ')}",
    ),
    EligibilityCriterion(
        name="Difficulty with daily activities (ADL 6 or below)",
        check=lambda p: p.adl_score <= 6,
        describe=lambda p: f"ADL {p.adl_score}/10",
    ),
)


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of the eligibility checklist."""
    qualifies: bool
    met_count: int
    total_criteria: int
    details: Tuple[str, ...] = ()
    met_criteria: Tuple[str, ...] = ()
    unmet_criteria: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "qualifies": self.qualifies,
            "met_count": self.met_count,
            "total_criteria": self.total_criteria,
            "details": list(self.details),
        }


def evaluate_eligibility(assessment: RiskAssessment, profile: ClinicalProfile) -> EligibilityResult:
    """
    Evaluate the medical frailty checklist.

    ``details`` holds one line per criterion, in checklist order, e.g.
    "✅ Five or more medications (12 medication(s))".
    """
    details: List[str] = []
    met: List[str] = []
    unmet: List[str] = []

    for criterion in ELIGIBILITY_CRITERIA:
        if criterion.check(profile):
            met.append(criterion.name)
            details.append(f"✅ {criterion.name} ({criterion.describe(profile)})")
        else:
            unmet.append(criterion.name)
            details.append(f"❌ {criterion.name} ({criterion.describe(profile)})")

    qualifies = len(met) >= MIN_CRITERIA_MET and assessment.tier == RiskTier.HIGH

    return EligibilityResult(
        qualifies=qualifies,
        met_count=len(met),
        total_criteria=len(ELIGIBILITY_CRITERIA),
        details=tuple(details),
        met_criteria=tuple(met),
        unmet_criteria=tuple(unmet),
    )
