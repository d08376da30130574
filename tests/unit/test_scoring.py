"""
Unit Tests for the Scoring Layer

Catalog lookup, base score aggregation, tier classification, confidence
and the end-to-end scoring pipeline.
"""
import json
import math

import pytest

from frailty.core.scoring import ConditionCatalog, load_catalog
from frailty.core.scoring.aggregator import (
    adl_weight,
    base_score_components,
    calculate_base_score,
    hospitalization_weight,
    medication_weight,
)
from frailty.core.scoring.base import (
    ClinicalProfile,
    CognitiveStatus,
    MobilityLevel,
    RecordKind,
    RiskTier,
    SupplementaryRecord,
    VitalSigns,
)
from frailty.core.scoring.catalog import DEFAULT_CATALOG, DEFAULT_CONDITION_WEIGHT
from frailty.core.scoring.classifier import (
    HIGH_THRESHOLD,
    MODERATE_THRESHOLD,
    clamp_score,
    classify_tier,
    estimate_confidence,
)
from frailty.core.scoring.pipeline import assess
from frailty.utils import CatalogError


class TestConditionCatalog:
    """Tests for ConditionCatalog lookups."""

    def test_case_insensitive_substring_match(self):
        assert DEFAULT_CATALOG.weight_for("Vascular Dementia") == 0.18
        assert DEFAULT_CATALOG.weight_for("Type 2 DIABETES") == 0.08

    def test_unknown_condition_gets_default_weight(self):
        assert DEFAULT_CATALOG.weight_for("gout") == DEFAULT_CONDITION_WEIGHT
        assert DEFAULT_CATALOG.weight_for("heart failure") == DEFAULT_CONDITION_WEIGHT

    def test_first_match_in_catalog_order_wins(self):
        # "diabetes" precedes "heart disease" in the default catalog
        assert DEFAULT_CATALOG.weight_for("heart disease with diabetes") == 0.08

        reordered = ConditionCatalog([("heart disease", 0.12), ("diabetes", 0.08)])
        assert reordered.weight_for("heart disease with diabetes") == 0.12

    def test_match_returns_entry(self):
        assert DEFAULT_CATALOG.match("Stage 3 Chronic Kidney Disease") == ("chronic kidney disease", 0.15)
        assert DEFAULT_CATALOG.match("gout") is None

    def test_default_catalog_order(self):
        keys = [key for key, _ in DEFAULT_CATALOG]
        assert keys[:3] == ["diabetes", "heart disease", "copd"]
        assert len(DEFAULT_CATALOG) == 10

    def test_keys_are_lowercased(self):
        catalog = ConditionCatalog([("COPD", 0.1)])
        assert catalog.entries == (("copd", 0.1),)
        assert catalog.weight_for("copd exacerbation") == 0.1

    @pytest.mark.parametrize("entries", [
        [("dementia", 1.5)],
        [("dementia", -0.1)],
        [("", 0.1)],
        [(3, 0.1)],
        [("dementia",)],
        [("dementia", "heavy")],
        [("dementia", float("nan"))],
    ])
    def test_invalid_entries_rejected(self, entries):
        with pytest.raises(CatalogError) as exc_info:
            ConditionCatalog(entries)
        assert exc_info.value.code == "CATALOG_ERROR"

    def test_catalogs_compare_by_content(self):
        assert ConditionCatalog() == DEFAULT_CATALOG
        assert hash(ConditionCatalog()) == hash(DEFAULT_CATALOG)
        assert ConditionCatalog([("stroke", 0.14)]) != DEFAULT_CATALOG


class TestLoadCatalog:
    """Tests for loading catalogs from JSON files."""

    def test_load_list_form(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([["parkinson", 0.16], ["dementia", 0.18]]))

        catalog = load_catalog(path)

        assert catalog.entries == (("parkinson", 0.16), ("dementia", 0.18))
        assert catalog.default_weight == DEFAULT_CONDITION_WEIGHT

    def test_load_object_form_with_default(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"default_weight": 0.04, "conditions": [["stroke", 0.14]]}))

        catalog = load_catalog(str(path))

        assert catalog.weight_for("gout") == 0.04
        assert catalog.weight_for("prior stroke") == 0.14

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("[[\"stroke\", 0.14")

        with pytest.raises(CatalogError) as exc_info:
            load_catalog(path)
        assert exc_info.value.details["source"] == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_catalog(tmp_path / "absent.json")

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"stroke": 0.14}))
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_bad_entry_reports_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([["stroke", 2]]))
        with pytest.raises(CatalogError) as exc_info:
            load_catalog(path)
        assert exc_info.value.source == str(path)


class TestBaseScoreAggregator:
    """Tests for the weight table."""

    @pytest.mark.parametrize("count,expected", [
        (0, 0.0), (1, 0.02), (4, 0.08), (5, 0.10), (6, 0.10), (7, 0.15), (9, 0.15), (10, 0.20), (25, 0.20),
    ])
    def test_medication_tiers(self, count, expected):
        assert medication_weight(count) == pytest.approx(expected)

    @pytest.mark.parametrize("count,expected", [
        (0, 0.0), (1, 0.10), (2, 0.18), (3, 0.25), (8, 0.25),
    ])
    def test_hospitalization_tiers(self, count, expected):
        assert hospitalization_weight(count) == pytest.approx(expected)

    def test_adl_weight(self):
        assert adl_weight(10) == 0.0
        assert adl_weight(6) == pytest.approx(0.24)
        assert adl_weight(0) == pytest.approx(0.60)

    def test_single_condition_string(self):
        profile = ClinicalProfile(chronic_conditions="dementia")
        assert profile.chronic_conditions == ("dementia",)
        assert profile.condition_count == 1
        assert calculate_base_score(profile) == pytest.approx(0.18)

    def test_condition_list_becomes_tuple(self):
        assert ClinicalProfile(chronic_conditions=["copd", "stroke"]).chronic_conditions == ("copd", "stroke")

    def test_empty_profile_scores_zero(self, healthy_profile):
        assert calculate_base_score(healthy_profile) == 0.0

    def test_components(self, moderate_profile):
        components = base_score_components(moderate_profile)

        assert list(components) == ["conditions", "medications", "hospitalizations", "mobility", "cognition", "adl"]
        assert components["conditions"] == pytest.approx(0.14)
        assert components["medications"] == pytest.approx(0.10)
        assert components["hospitalizations"] == pytest.approx(0.10)
        assert components["mobility"] == 0.0
        assert components["cognition"] == 0.0
        assert components["adl"] == pytest.approx(0.12)
        assert calculate_base_score(moderate_profile) == pytest.approx(0.46)

    def test_mobility_and_cognition_weights(self):
        profile = ClinicalProfile(
            mobility_level=MobilityLevel.DEPENDENT,
            cognitive_status=CognitiveStatus.SEVERE_IMPAIRMENT,
        )
        assert calculate_base_score(profile) == pytest.approx(0.85)

    def test_raw_score_is_unbounded(self, frail_profile):
        assert calculate_base_score(frail_profile) > 1.0

    def test_injected_catalog_changes_condition_weight(self):
        profile = ClinicalProfile(chronic_conditions=("parkinson disease",))
        catalog = ConditionCatalog([("parkinson", 0.16)])

        assert calculate_base_score(profile) == pytest.approx(0.05)
        assert calculate_base_score(profile, catalog) == pytest.approx(0.16)

    def test_monotonic_in_medications(self):
        scores = [calculate_base_score(ClinicalProfile(medications_count=n)) for n in range(0, 16)]
        assert all(a <= b for a, b in zip(scores, scores[1:]))

    def test_monotonic_in_hospitalizations(self):
        scores = [calculate_base_score(ClinicalProfile(recent_hospitalizations=n)) for n in range(0, 8)]
        assert all(a <= b for a, b in zip(scores, scores[1:]))

    def test_monotonic_in_conditions(self):
        labels = ["gout", "dementia", "arthritis", "copd", "glaucoma", "stroke"]
        scores = [
            calculate_base_score(ClinicalProfile(chronic_conditions=tuple(labels[:n])))
            for n in range(len(labels) + 1)
        ]
        assert all(a <= b for a, b in zip(scores, scores[1:]))


class TestRiskClassifier:
    """Tests for tier thresholds and clamping."""

    def test_boundaries_belong_to_higher_tier(self):
        assert classify_tier(0.65) == RiskTier.HIGH
        assert classify_tier(0.35) == RiskTier.MODERATE
        assert classify_tier(0.349999) == RiskTier.LOW

    def test_partition(self):
        assert classify_tier(0.0) == RiskTier.LOW
        assert classify_tier(0.64999) == RiskTier.MODERATE
        assert classify_tier(1.0) == RiskTier.HIGH
        assert HIGH_THRESHOLD > MODERATE_THRESHOLD

    def test_clamp(self):
        assert clamp_score(2.05) == 1.0
        assert clamp_score(-0.2) == 0.0
        assert clamp_score(float("nan")) == 0.0
        assert clamp_score(0.42) == 0.42


class TestConfidenceEstimator:
    """Tests for confidence scoring."""

    def test_baseline(self, healthy_profile):
        assert estimate_confidence(healthy_profile) == 0.5

    def test_conditions_and_medications(self, moderate_profile):
        assert estimate_confidence(moderate_profile) == pytest.approx(0.7)

    def test_records_add_up_to_cap(self, healthy_profile):
        assert estimate_confidence(healthy_profile, 1) == pytest.approx(0.55)
        assert estimate_confidence(healthy_profile, 6) == pytest.approx(0.8)
        assert estimate_confidence(healthy_profile, 40) == pytest.approx(0.8)

    def test_never_exceeds_one(self, moderate_profile):
        assert estimate_confidence(moderate_profile, 100) <= 1.0


class TestAssess:
    """End-to-end scoring scenarios."""

    def test_healthy_profile_is_low_risk(self, healthy_profile):
        result = assess(healthy_profile)

        assert result.tier == RiskTier.LOW
        assert result.score < 0.35
        assert result.confidence == 0.5
        assert result.contributing_factors == ()
        assert result.warnings == ()
        assert len(result.insights) == 1

    def test_frail_profile_is_high_risk(self, frail_profile):
        result = assess(frail_profile)

        assert result.tier == RiskTier.HIGH
        assert result.score > 0.65
        assert result.score == 1.0
        assert any("CRITICAL" in w for w in result.warnings)
        assert len(result.contributing_factors) == 6

    def test_moderate_profile(self, moderate_profile):
        result = assess(moderate_profile)

        assert result.tier == RiskTier.MODERATE
        assert 0.35 <= result.score < 0.65
        assert result.score == pytest.approx(0.46)

    def test_limited_mobility_with_mild_impairment_reaches_high_tier(self):
        # 0.14 + 0.10 + 0.10 + 0.25 + 0.12 + 0.24 under the fixed weight table
        profile = ClinicalProfile(
            chronic_conditions=("diabetes", "arthritis"),
            medications_count=5,
            recent_hospitalizations=1,
            mobility_level=MobilityLevel.LIMITED,
            cognitive_status=CognitiveStatus.MILD_IMPAIRMENT,
            adl_score=6,
        )
        result = assess(profile)

        assert result.score == pytest.approx(0.95)
        assert result.tier == RiskTier.HIGH

    def test_abnormal_vitals_increase_score(self, moderate_profile, abnormal_vitals_record):
        without = assess(moderate_profile)
        with_record = assess(moderate_profile, [abnormal_vitals_record])

        assert with_record.score > without.score
        assert with_record.record_adjustment == pytest.approx(0.08)
        assert with_record.score == pytest.approx(0.54)

    def test_record_adjustment_is_capped(self, moderate_profile):
        bad = SupplementaryRecord(
            record_kind=RecordKind.VITAL_SIGNS,
            vital_signs=VitalSigns(blood_pressure_systolic=80, heart_rate=40, oxygen_saturation=85, bmi=16),
        )
        result = assess(moderate_profile, [bad] * 10)

        assert result.record_adjustment == pytest.approx(0.3)
        assert result.score == pytest.approx(0.76)

    def test_records_increase_confidence(self, moderate_profile, abnormal_vitals_record):
        without = assess(moderate_profile)
        with_records = assess(moderate_profile, [abnormal_vitals_record] * 3)

        assert with_records.confidence > without.confidence
        assert with_records.confidence == pytest.approx(0.85)

    def test_idempotent(self, frail_profile, abnormal_vitals_record):
        first = assess(frail_profile, [abnormal_vitals_record])
        second = assess(frail_profile, [abnormal_vitals_record])

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_scores_stay_in_range_for_extreme_inputs(self):
        profile = ClinicalProfile(
            chronic_conditions=tuple(f"dementia {i}" for i in range(200)),
            medications_count=10_000,
            recent_hospitalizations=10_000,
            mobility_level=MobilityLevel.DEPENDENT,
            cognitive_status=CognitiveStatus.SEVERE_IMPAIRMENT,
            adl_score=0,
        )
        result = assess(profile)

        assert 0.0 <= result.score <= 1.0
        assert 0.0 <= result.confidence <= 1.0
        assert not math.isnan(result.score)

    def test_to_dict(self, frail_profile):
        data = assess(frail_profile).to_dict()

        assert data["risk_level"] == "high"
        assert data["frailty_score"] == 1.0
        assert set(data) == {
            "frailty_score", "risk_level", "confidence_score",
            "contributing_factors", "insights", "warning_flags",
        }
        assert data["contributing_factors"][0].keys() == {"factor", "impact", "description"}

    def test_profile_accepts_list_conditions(self):
        profile = ClinicalProfile(chronic_conditions=["copd", "stroke"])
        assert profile.chronic_conditions == ("copd", "stroke")
        assert hash(profile)
