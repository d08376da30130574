"""
Frailty Assessment Report Content

Builds the text content of a medical frailty assessment report: a summary
paragraph, recommendations and next steps. Rendering (PDF, HTML) and
persistence belong to the caller.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import uuid

from frailty.core.scoring.base import (
    ClinicalProfile,
    CognitiveStatus,
    MobilityLevel,
    RiskAssessment,
    RiskTier,
)
from frailty.core.eligibility.evaluator import EligibilityResult, evaluate_eligibility
from frailty.utils import get_logger

logger = get_logger(__name__)

REPORT_TYPE = "frailty_assessment"
REPORT_TITLE = "Medical Frailty Assessment Report"

RISK_DESCRIPTIONS = {
    RiskTier.HIGH: (
        "Your assessment indicates a high level of medical frailty. This means you likely "
        "meet the criteria for medical frailty exemptions under Indiana Medicaid."
    ),
    RiskTier.MODERATE: (
        "Your assessment shows moderate indicators of medical frailty. You may qualify for "
        "additional support services and should discuss options with your healthcare provider."
    ),
    RiskTier.LOW: (
        "Your assessment indicates low medical frailty at this time. Continue to monitor your "
        "health and maintain regular check-ups."
    ),
}


@dataclass
class FrailtyReport:
    """Data container for a generated report."""
    report_id: str
    generated_at: datetime
    report_type: str = REPORT_TYPE
    title: str = REPORT_TITLE

    summary: str = ""
    recommendations: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)

    # Filled when the checklist was evaluated alongside the report
    eligibility: Optional[EligibilityResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_id": self.report_id,
            "generated_at": self.generated_at.isoformat(),
            "report_type": self.report_type,
            "title": self.title,
            "summary": self.summary,
            "recommendations": list(self.recommendations),
            "next_steps": list(self.next_steps),
            "eligibility": self.eligibility.to_dict() if self.eligibility else None,
        }


def build_summary(assessment: RiskAssessment) -> str:
    return (
        f"Based on your health assessment, your frailty score is {assessment.score * 100:.1f}%. "
        f"{RISK_DESCRIPTIONS[assessment.tier]} "
        "This assessment considers your chronic conditions, medications, recent hospitalizations, "
        "mobility, cognitive status, and daily living activities."
    )


def build_recommendations(assessment: RiskAssessment, profile: ClinicalProfile) -> List[str]:
    recs = []

    if assessment.tier == RiskTier.HIGH:
        recs.append("Schedule an appointment with your primary care physician to discuss medical frailty exemption documentation")
        recs.append("Request a comprehensive medical evaluation to support your Medicaid application")
        recs.append("Consider applying for home health services if you have mobility limitations")

    if profile.condition_count >= 3:
        recs.append("Ensure all chronic conditions are properly documented in your medical records")
        recs.append("Work with your healthcare team to develop a comprehensive care management plan")

    if profile.medications_count >= 5:
        recs.append("Request a medication review with your pharmacist to optimize your treatment plan")

    if profile.recent_hospitalizations >= 2:
        recs.append("Discuss strategies with your doctor to prevent future hospitalizations")

    if profile.mobility_level != MobilityLevel.INDEPENDENT:
        recs.append("Explore mobility assistance programs and adaptive equipment options")

    if profile.cognitive_status != CognitiveStatus.NORMAL:
        recs.append("Consider a cognitive assessment to determine if additional support services are needed")

    return recs


def build_next_steps(assessment: RiskAssessment) -> List[str]:
    steps = [
        "Review this report with your healthcare provider",
        "Gather all relevant medical documentation",
    ]

    if assessment.tier in (RiskTier.HIGH, RiskTier.MODERATE):
        steps.append("Contact Indiana Medicaid to discuss your eligibility for medical frailty exemptions")
        steps.append("Keep copies of all medical records and assessment reports for your application")

    steps.append("Schedule a follow-up assessment in 6 months to track any changes")
    return steps


def generate_report_content(
    assessment: RiskAssessment,
    profile: ClinicalProfile,
    include_eligibility: bool = True,
) -> FrailtyReport:
    """
    Build report content for one assessment.

    Args:
        assessment: The scored assessment.
        profile: The profile that produced it.
        include_eligibility: Attach the eligibility checklist result.

    Returns:
        FrailtyReport with a fresh id and UTC timestamp.
    """
    report = FrailtyReport(
        report_id=f"FR-{uuid.uuid4().hex[:12].upper()}",
        generated_at=datetime.now(timezone.utc),
        summary=build_summary(assessment),
        recommendations=build_recommendations(assessment, profile),
        next_steps=build_next_steps(assessment),
        eligibility=evaluate_eligibility(assessment, profile) if include_eligibility else None,
    )
    logger.debug(
        f"Report {report.report_id}: tier={assessment.tier.value}, "
        f"{len(report.recommendations)} recommendation(s)"
    )
    return report
