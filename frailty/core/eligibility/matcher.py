"""
Guidance Resource Matcher

Filters a guidance catalog against the latest assessment. A resource
applies when any of its predicates holds; a resource without predicates
applies to everyone.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from frailty.core.scoring.base import ClinicalProfile, RiskAssessment
from frailty.utils import get_logger
from .predicates import evaluate_predicate

logger = get_logger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class GuidanceResource:
    """One entry of the guidance catalog."""
    id: int
    category: str
    title: str
    description: Optional[str] = None
    resource_url: Optional[str] = None
    applicability_criteria: Sequence[str] = field(default_factory=tuple)
    priority: int = 0

    def __post_init__(self):
        if isinstance(self.applicability_criteria, str):
            object.__setattr__(self, "applicability_criteria", criteria_of(self))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "resource_url": self.resource_url,
            "applicability_criteria": list(self.applicability_criteria),
            "priority": self.priority,
        }


def _get(resource: Any, *names: str, default=None):
    if isinstance(resource, Mapping):
        for name in names:
            if name in resource:
                return resource[name]
        return default
    for name in names:
        if hasattr(resource, name):
            return getattr(resource, name)
    return default


def criteria_of(resource: Any) -> Sequence[str]:
    """
    Predicate strings of a resource.

    Accepts GuidanceResource instances, other objects with an
    ``applicability_criteria`` attribute, or mappings keyed by
    ``applicability_criteria`` / ``applicabilityCriteria``. A single string
    is one predicate.
    """
    criteria = _get(resource, "applicability_criteria", "applicabilityCriteria", default=())
    if isinstance(criteria, str):
        return (criteria,) if criteria else ()
    return criteria or ()


def is_applicable(resource: Any, assessment: RiskAssessment, profile: ClinicalProfile) -> bool:
    criteria = criteria_of(resource)
    if not criteria:
        return True
    return any(evaluate_predicate(c, assessment, profile) for c in criteria)


def match_resources(
    resources: Iterable[R],
    assessment: RiskAssessment,
    profile: ClinicalProfile,
) -> List[R]:
    """
    Keep the resources applicable to ``assessment`` / ``profile``.

    Input order is preserved and the resource objects are returned as-is.
    """
    resources = list(resources)
    matched = [r for r in resources if is_applicable(r, assessment, profile)]
    logger.debug(f"Guidance matcher: {len(matched)}/{len(resources)} resource(s) applicable")
    return matched


def _sort_key(resource: Any):
    return (-(_get(resource, "priority", default=0) or 0), _get(resource, "title", default="") or "")


def list_resources(resources: Iterable[R], category: Optional[str] = None) -> List[R]:
    """Optionally filter by category; order by priority (highest first), then title."""
    selected = [
        r for r in resources
        if category is None or _get(r, "category") == category
    ]
    return sorted(selected, key=_sort_key)


def personalize_resources(
    resources: Iterable[R],
    assessment: Optional[RiskAssessment] = None,
    profile: Optional[ClinicalProfile] = None,
) -> List[R]:
    """
    Guidance for a person's latest assessment, in catalog display order.

    Without an assessment (or profile) only universally applicable
    resources are returned.
    """
    ordered = list_resources(resources)
    if assessment is None or profile is None:
        return [r for r in ordered if not criteria_of(r)]
    return match_resources(ordered, assessment, profile)
