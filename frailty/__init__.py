"""
Frailty Risk Scoring & Eligibility Engine

Usage:
    import frailty
    from frailty.core.scoring import ClinicalProfile, MobilityLevel

    profile = ClinicalProfile(chronic_conditions=("copd",), medications_count=3)
    assessment = frailty.score(profile)
    guidance = frailty.match_resources(resources, assessment, profile)
    eligibility = frailty.evaluate_eligibility(assessment, profile)
"""
import threading
from typing import Iterable, List, Optional, TypeVar

from frailty.config import EngineConfig, load_config
from frailty.core.engine import FrailtyRiskEngine
from frailty.core.eligibility.evaluator import EligibilityResult
from frailty.core.scoring.base import ClinicalProfile, RiskAssessment, SupplementaryRecord
from frailty.utils import setup_logging

__version__ = "0.1.0"

R = TypeVar("R")

_default_engine: Optional[FrailtyRiskEngine] = None
_engine_lock = threading.Lock()


def configure(config: Optional[EngineConfig] = None) -> FrailtyRiskEngine:
    """
    Application setup: load .env, configure logging and (re)build the
    default engine. Call once from the embedding application's entry point.
    """
    global _default_engine
    config = config or load_config()
    setup_logging(config.log_level, config.log_file)
    engine = FrailtyRiskEngine.from_config(config)
    with _engine_lock:
        _default_engine = engine
    return engine


def get_engine() -> FrailtyRiskEngine:
    """
    Default engine. Built from the current environment on first use,
    leaving logging handlers and os.environ untouched.
    """
    global _default_engine
    with _engine_lock:
        if _default_engine is None:
            _default_engine = FrailtyRiskEngine.from_config(EngineConfig())
        return _default_engine


def score(profile: ClinicalProfile, records: Iterable[SupplementaryRecord] = ()) -> RiskAssessment:
    return get_engine().score(profile, records)


def match_resources(resources: Iterable[R], assessment: RiskAssessment, profile: ClinicalProfile) -> List[R]:
    return get_engine().match_resources(resources, assessment, profile)


def evaluate_eligibility(assessment: RiskAssessment, profile: ClinicalProfile) -> EligibilityResult:
    return get_engine().evaluate_eligibility(assessment, profile)


__all__ = [
    "EngineConfig",
    "FrailtyRiskEngine",
    "configure",
    "get_engine",
    "score",
    "match_resources",
    "evaluate_eligibility",
]
