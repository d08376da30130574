"""
Assessment Request Schemas

Pydantic models validating caller payloads before they reach the engine.
Both snake_case and the camelCase names used by the web client are
accepted. ``to_domain()`` converts to the immutable engine types.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from frailty.core.scoring.base import (
    ClinicalProfile,
    CognitiveStatus,
    DiagnosisDetails,
    LabResult,
    MobilityLevel,
    RecordKind,
    SupplementaryRecord,
    VitalSigns,
)
from frailty.utils import ProfileValidationError


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ClinicalProfileIn(_Schema):
    """Request body for creating an assessment."""
    chronic_conditions: List[str] = Field(default_factory=list)
    medications_count: int = Field(0, ge=0)
    recent_hospitalizations: int = Field(0, ge=0)
    mobility_level: MobilityLevel = MobilityLevel.INDEPENDENT
    cognitive_status: CognitiveStatus = CognitiveStatus.NORMAL
    activities_daily_living_score: int = Field(10, ge=0, le=10)

    @field_validator("chronic_conditions")
    @classmethod
    def _strip_conditions(cls, v: List[str]) -> List[str]:
        return [c.strip() for c in v if c and c.strip()]

    def to_domain(self) -> ClinicalProfile:
        return ClinicalProfile(
            chronic_conditions=tuple(self.chronic_conditions),
            medications_count=self.medications_count,
            recent_hospitalizations=self.recent_hospitalizations,
            mobility_level=self.mobility_level,
            cognitive_status=self.cognitive_status,
            adl_score=self.activities_daily_living_score,
        )


class VitalSignsIn(_Schema):
    blood_pressure_systolic: Optional[float] = Field(None, gt=0)
    blood_pressure_diastolic: Optional[float] = Field(None, gt=0)
    heart_rate: Optional[float] = Field(None, gt=0)
    temperature: Optional[float] = None
    respiratory_rate: Optional[float] = Field(None, ge=0)
    oxygen_saturation: Optional[float] = Field(None, ge=0, le=100)
    weight: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    bmi: Optional[float] = Field(None, gt=0)

    def to_domain(self) -> VitalSigns:
        return VitalSigns(**self.model_dump())


class LabResultIn(_Schema):
    test_name: str
    value: str = ""
    unit: Optional[str] = None
    reference_range: Optional[str] = None
    abnormal_flag: Optional[bool] = None

    def to_domain(self) -> LabResult:
        return LabResult(**self.model_dump())


class DiagnosisDetailsIn(_Schema):
    condition: str
    icd_code: Optional[str] = None
    severity: Optional[str] = None
    status: Optional[str] = Field(None, pattern="^(active|resolved|chronic)$")

    def to_domain(self) -> DiagnosisDetails:
        return DiagnosisDetails(**self.model_dump())


class SupplementaryRecordIn(_Schema):
    """A stored health record, as supplied alongside an assessment."""
    record_type: RecordKind = RecordKind.OTHER
    title: str = ""
    vital_signs: Optional[VitalSignsIn] = None
    lab_results: List[LabResultIn] = Field(default_factory=list)
    diagnosis_details: Optional[DiagnosisDetailsIn] = None

    def to_domain(self) -> SupplementaryRecord:
        return SupplementaryRecord(
            record_kind=self.record_type,
            title=self.title,
            vital_signs=self.vital_signs.to_domain() if self.vital_signs else None,
            lab_results=tuple(lab.to_domain() for lab in self.lab_results),
            diagnosis=self.diagnosis_details.to_domain() if self.diagnosis_details else None,
        )


def _errors(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def parse_profile(payload: Mapping[str, Any]) -> ClinicalProfile:
    """
    Validate a profile payload and convert it to a ClinicalProfile.

    Raises:
        ProfileValidationError: with one entry per failing field.
    """
    try:
        return ClinicalProfileIn.model_validate(payload).to_domain()
    except ValidationError as exc:
        raise ProfileValidationError("Invalid clinical profile", errors=_errors(exc)) from exc


def parse_records(payloads: Iterable[Mapping[str, Any]]) -> List[SupplementaryRecord]:
    """Validate supplementary record payloads; raises ProfileValidationError."""
    records = []
    for index, payload in enumerate(payloads):
        try:
            records.append(SupplementaryRecordIn.model_validate(payload).to_domain())
        except ValidationError as exc:
            raise ProfileValidationError(
                f"Invalid supplementary record #{index}",
                errors=_errors(exc),
                details={"index": index},
            ) from exc
    return records
