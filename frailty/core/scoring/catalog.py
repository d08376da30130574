"""
Factor Catalog

Static weight tables used by the base score aggregator and the factor
ranker. Everything here is read-only configuration: the condition catalog
is an ordered tuple of (substring, weight) pairs that is injected into the
engine, the remaining tables are module constants.

Condition lookup is first-match in catalog order. Entries can overlap
(e.g. a label containing both "diabetes" and "chronic kidney disease"),
so the order of DEFAULT_CONDITION_WEIGHTS is observable and must not be
re-sorted.
"""
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

from frailty.utils import CatalogError, get_logger
from .base import CognitiveStatus, MobilityLevel

logger = get_logger(__name__)

# ── Chronic conditions ────────────────────────────────────────────────────────

DEFAULT_CONDITION_WEIGHT = 0.05

DEFAULT_CONDITION_WEIGHTS: Tuple[Tuple[str, float], ...] = (
    ("diabetes",               0.08),
    ("heart disease",          0.12),
    ("copd",                   0.10),
    ("chronic kidney disease", 0.15),
    ("dementia",               0.18),
    ("stroke",                 0.14),
    ("cancer",                 0.13),
    ("arthritis",              0.06),
    ("osteoporosis",           0.08),
    ("depression",             0.07),
)

# Matched by substring for the specialised-care warning
SERIOUS_CONDITIONS: Tuple[str, ...] = (
    "dementia",
    "chronic kidney disease",
    "heart failure",
    "copd",
)

# ── Medications (tiered) ──────────────────────────────────────────────────────
# (minimum count, flat weight), highest tier first
MEDICATION_TIERS: Tuple[Tuple[int, float], ...] = (
    (10, 0.20),
    (7,  0.15),
    (5,  0.10),
)
MEDICATION_PER_UNIT = 0.02

# ── Hospitalizations (tiered) ─────────────────────────────────────────────────
HOSPITALIZATION_TIERS: Tuple[Tuple[int, float], ...] = (
    (3, 0.25),
    (2, 0.18),
)
HOSPITALIZATION_PER_EVENT = 0.10

# ── Function ──────────────────────────────────────────────────────────────────

MOBILITY_WEIGHTS = {
    MobilityLevel.INDEPENDENT: 0.0,
    MobilityLevel.LIMITED:     0.25,
    MobilityLevel.DEPENDENT:   0.45,
}

COGNITIVE_WEIGHTS = {
    CognitiveStatus.NORMAL:              0.0,
    CognitiveStatus.MILD_IMPAIRMENT:     0.12,
    CognitiveStatus.MODERATE_IMPAIRMENT: 0.25,
    CognitiveStatus.SEVERE_IMPAIRMENT:   0.40,
}

ADL_MAX = 10
ADL_PER_POINT = 0.06


class ConditionCatalog:
    """
    Immutable, ordered condition → weight table.

    Usage:
        catalog = ConditionCatalog([("dementia", 0.18), ("stroke", 0.14)])
        catalog.weight_for("Vascular Dementia")   # 0.18
        catalog.weight_for("gout")                # default weight
    """

    __slots__ = ("_entries", "_default_weight")

    def __init__(
        self,
        entries: Iterable[Tuple[str, float]] = DEFAULT_CONDITION_WEIGHTS,
        default_weight: float = DEFAULT_CONDITION_WEIGHT,
    ):
        self._entries: Tuple[Tuple[str, float], ...] = tuple(
            _validate_entry(entry, index) for index, entry in enumerate(entries)
        )
        self._default_weight = _validate_weight(default_weight, "default_weight")

    @property
    def entries(self) -> Tuple[Tuple[str, float], ...]:
        return self._entries

    @property
    def default_weight(self) -> float:
        return self._default_weight

    def match(self, condition: str) -> Optional[Tuple[str, float]]:
        """Return the first entry whose key occurs in ``condition``, if any."""
        label = condition.lower()
        for key, weight in self._entries:
            if key in label:
                return key, weight
        return None

    def weight_for(self, condition: str) -> float:
        entry = self.match(condition)
        return entry[1] if entry is not None else self._default_weight

    def __iter__(self) -> Iterator[Tuple[str, float]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConditionCatalog):
            return NotImplemented
        return (self._entries, self._default_weight) == (other._entries, other._default_weight)

    def __hash__(self) -> int:
        return hash((self._entries, self._default_weight))

    def __repr__(self) -> str:
        return f"ConditionCatalog({len(self._entries)} entries, default={self._default_weight})"


def _validate_weight(weight, where: str) -> float:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise CatalogError(f"Weight for {where} is not a number: {weight!r}")
    weight = float(weight)
    if math.isnan(weight) or not 0.0 <= weight <= 1.0:
        raise CatalogError(f"Weight for {where} must be within [0, 1], got {weight}")
    return weight


def _validate_entry(entry: Sequence, index: int) -> Tuple[str, float]:
    try:
        key, weight = entry
    except (TypeError, ValueError):
        raise CatalogError(f"Catalog entry #{index} is not a (substring, weight) pair: {entry!r}")
    if not isinstance(key, str) or not key.strip():
        raise CatalogError(f"Catalog entry #{index} has an empty or non-string key: {key!r}")
    return key.lower(), _validate_weight(weight, f"'{key}'")


DEFAULT_CATALOG = ConditionCatalog()


def load_catalog(path: Union[str, Path]) -> ConditionCatalog:
    """
    Load a condition catalog from JSON.

    Accepted shapes:
        [["dementia", 0.18], ["stroke", 0.14]]
        {"default_weight": 0.05, "conditions": [["dementia", 0.18], ...]}

    Raises:
        CatalogError: file missing, invalid JSON or invalid entries.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"Cannot read condition catalog: {exc}", source=str(path)) from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(
            f"Condition catalog is not valid JSON: {exc.msg}",
            source=str(path),
            details={"line": exc.lineno, "column": exc.colno},
        ) from exc

    default_weight = DEFAULT_CONDITION_WEIGHT
    if isinstance(raw, dict):
        default_weight = raw.get("default_weight", DEFAULT_CONDITION_WEIGHT)
        raw = raw.get("conditions")
    if not isinstance(raw, list):
        raise CatalogError("Condition catalog must be a list of [substring, weight] pairs", source=str(path))

    try:
        catalog = ConditionCatalog(raw, default_weight=default_weight)
    except CatalogError as exc:
        exc.source = exc.details["source"] = str(path)
        raise

    logger.info(f"Loaded condition catalog from {path} ({len(catalog)} entries)")
    return catalog
