"""
Frailty Risk Engine

Entry point for collaborators. Holds the (immutable) condition catalog and
exposes scoring, guidance matching, eligibility and report content.

Usage:
    from frailty.core.engine import FrailtyRiskEngine

    engine = FrailtyRiskEngine()
    assessment = engine.score(profile, records)
    resources = engine.match_resources(catalog_rows, assessment, profile)
    eligibility = engine.evaluate_eligibility(assessment, profile)
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from frailty.config import DEFAULT_BATCH_WORKERS, EngineConfig
from frailty.core.eligibility import evaluator, matcher
from frailty.core.eligibility.evaluator import EligibilityResult
from frailty.core.reports import FrailtyReport, generate_report_content
from frailty.core.scoring.base import ClinicalProfile, RiskAssessment, SupplementaryRecord
from frailty.core.scoring.catalog import DEFAULT_CATALOG, ConditionCatalog, load_catalog
from frailty.core.scoring.pipeline import assess
from frailty.utils import get_logger

logger = get_logger(__name__)

R = TypeVar("R")

ScoreRequest = Tuple[ClinicalProfile, Sequence[SupplementaryRecord]]


class FrailtyRiskEngine:
    """
    Scores clinical profiles and filters guidance against the result.

    Stateless apart from the read-only catalog, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        catalog: ConditionCatalog = DEFAULT_CATALOG,
        batch_workers: int = DEFAULT_BATCH_WORKERS,
    ):
        self._catalog = catalog
        self._batch_workers = max(1, batch_workers)
        logger.info(f"FrailtyRiskEngine initialized ({catalog!r})")

    @classmethod
    def from_config(cls, config: Optional[EngineConfig] = None) -> "FrailtyRiskEngine":
        """Build an engine, loading a replacement catalog if one is configured."""
        config = config or EngineConfig()
        catalog = DEFAULT_CATALOG
        if config.condition_catalog_path:
            catalog = load_catalog(config.condition_catalog_path)
        return cls(catalog=catalog, batch_workers=config.batch_workers)

    @property
    def catalog(self) -> ConditionCatalog:
        return self._catalog

    # ── Scoring ───────────────────────────────────────────────────────────

    def score(
        self,
        profile: ClinicalProfile,
        records: Iterable[SupplementaryRecord] = (),
    ) -> RiskAssessment:
        """
        Assess one profile.

        Args:
            profile: Structured clinical inputs.
            records: Optional supplementary records (vitals, labs, diagnoses).

        Returns:
            RiskAssessment with score and confidence in [0, 1].
        """
        assessment = assess(profile, records, self._catalog)
        logger.debug(
            f"FrailtyRiskEngine: score={assessment.score:.3f} "
            f"(base={assessment.base_score:.3f}, records=+{assessment.record_adjustment:.2f}) "
            f"tier={assessment.tier.value}, {len(assessment.warnings)} warning(s)"
        )
        return assessment

    def score_many(
        self,
        requests: Iterable[ScoreRequest],
        max_workers: Optional[int] = None,
    ) -> List[RiskAssessment]:
        """
        Score independent (profile, records) pairs on a thread pool.

        Results are returned in input order. A failure in one request
        propagates to the caller.
        """
        requests = list(requests)
        if not requests:
            return []
        workers = min(max_workers or self._batch_workers, len(requests))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda req: self.score(req[0], req[1]), requests))
        logger.info(f"FrailtyRiskEngine: scored batch of {len(results)} on {workers} worker(s)")
        return results

    # ── Guidance & eligibility ────────────────────────────────────────────

    @staticmethod
    def match_resources(
        resources: Iterable[R],
        assessment: RiskAssessment,
        profile: ClinicalProfile,
    ) -> List[R]:
        return matcher.match_resources(resources, assessment, profile)

    @staticmethod
    def personalize_resources(
        resources: Iterable[R],
        assessment: Optional[RiskAssessment] = None,
        profile: Optional[ClinicalProfile] = None,
    ) -> List[R]:
        return matcher.personalize_resources(resources, assessment, profile)

    @staticmethod
    def evaluate_eligibility(assessment: RiskAssessment, profile: ClinicalProfile) -> EligibilityResult:
        return evaluator.evaluate_eligibility(assessment, profile)

    @staticmethod
    def generate_report(assessment: RiskAssessment, profile: ClinicalProfile) -> FrailtyReport:
        return generate_report_content(assessment, profile)
