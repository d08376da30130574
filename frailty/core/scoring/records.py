"""
Supplementary Record Analyzer

Scans optional clinical records and turns abnormal readings into a small
additive adjustment to the base score.

Rules (each independent, summed, then capped at MAX_RECORD_ADJUSTMENT):
    vital_signs   systolic > 160           +0.03
                  systolic < 90            +0.04
                  heart rate > 100 or < 50 +0.02
                  SpO2 < 92                +0.05
                  BMI < 18.5 or > 35       +0.03
    lab_result    each abnormal entry      +0.01
    diagnosis     severe or chronic        +0.02

Missing readings contribute nothing. Every vital-signs record is evaluated
on its own, so repeated abnormal readings accumulate.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from .base import DiagnosisDetails, LabResult, RecordKind, SupplementaryRecord, VitalSigns

# ── Thresholds ────────────────────────────────────────────────────────────────

SBP_HIGH          = 160    # mmHg
SBP_LOW           = 90     # mmHg
HR_HIGH           = 100    # bpm
HR_LOW            = 50     # bpm
SPO2_LOW          = 92     # %
BMI_LOW           = 18.5
BMI_HIGH          = 35

# ── Deltas ────────────────────────────────────────────────────────────────────

DELTA_SBP_HIGH    = 0.03
DELTA_SBP_LOW     = 0.04
DELTA_HR          = 0.02
DELTA_SPO2        = 0.05
DELTA_BMI         = 0.03
DELTA_ABNORMAL_LAB = 0.01
DELTA_DIAGNOSIS   = 0.02

MAX_RECORD_ADJUSTMENT = 0.3


def _present(value: Optional[float]) -> bool:
    # Zero readings count as absent
    return value is not None and value != 0


def vital_signs_delta(vs: VitalSigns) -> float:
    delta = 0.0

    sbp = vs.blood_pressure_systolic
    if _present(sbp) and sbp > SBP_HIGH:
        delta += DELTA_SBP_HIGH
    if _present(sbp) and sbp < SBP_LOW:
        delta += DELTA_SBP_LOW

    hr = vs.heart_rate
    if _present(hr) and (hr > HR_HIGH or hr < HR_LOW):
        delta += DELTA_HR

    spo2 = vs.oxygen_saturation
    if _present(spo2) and spo2 < SPO2_LOW:
        delta += DELTA_SPO2

    bmi = vs.bmi
    if _present(bmi) and (bmi < BMI_LOW or bmi > BMI_HIGH):
        delta += DELTA_BMI

    return delta


def lab_results_delta(labs: Iterable[LabResult]) -> float:
    delta = 0.0
    for lab in labs:
        if lab.abnormal_flag:
            delta += DELTA_ABNORMAL_LAB
    return delta


def diagnosis_delta(dx: DiagnosisDetails) -> float:
    if dx.severity == "severe" or dx.status == "chronic":
        return DELTA_DIAGNOSIS
    return 0.0


def _vital_record(record: SupplementaryRecord) -> float:
    return vital_signs_delta(record.vital_signs) if record.vital_signs is not None else 0.0


def _lab_record(record: SupplementaryRecord) -> float:
    return lab_results_delta(record.lab_results)


def _diagnosis_record(record: SupplementaryRecord) -> float:
    return diagnosis_delta(record.diagnosis) if record.diagnosis is not None else 0.0


# ── Registry: record kind → analyzer ─────────────────────────────────────────
_RECORD_ANALYZERS: Dict[RecordKind, Callable[[SupplementaryRecord], float]] = {
    RecordKind.VITAL_SIGNS: _vital_record,
    RecordKind.LAB_RESULT:  _lab_record,
    RecordKind.DIAGNOSIS:   _diagnosis_record,
}


def analyze_records(records: Iterable[SupplementaryRecord]) -> float:
    """
    Total adjustment contributed by ``records``, within [0, 0.3].

    Vital-signs records are summed first, then lab results, then
    diagnoses.
    """
    records = list(records)
    adjustment = 0.0
    for kind in (RecordKind.VITAL_SIGNS, RecordKind.LAB_RESULT, RecordKind.DIAGNOSIS):
        analyzer = _RECORD_ANALYZERS[kind]
        for record in records:
            if record.record_kind == kind:
                adjustment += analyzer(record)
    return min(adjustment, MAX_RECORD_ADJUSTMENT)
