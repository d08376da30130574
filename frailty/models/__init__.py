"""
Request schemas validated ahead of the engine.
"""
from .assessment import (
    ClinicalProfileIn,
    DiagnosisDetailsIn,
    LabResultIn,
    SupplementaryRecordIn,
    VitalSignsIn,
    parse_profile,
    parse_records,
)

__all__ = [
    "ClinicalProfileIn",
    "DiagnosisDetailsIn",
    "LabResultIn",
    "SupplementaryRecordIn",
    "VitalSignsIn",
    "parse_profile",
    "parse_records",
]
