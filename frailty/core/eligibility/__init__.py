"""
Eligibility Layer

Declarative applicability predicates for guidance resources, plus the
fixed medical frailty eligibility checklist.

Usage:
    from frailty.core.eligibility import match_resources, evaluate_eligibility

    applicable = match_resources(resources, assessment, profile)
    result = evaluate_eligibility(assessment, profile)
"""
from .predicates import Operator, Predicate, PredicateField, evaluate_predicate, parse_predicate
from .matcher import GuidanceResource, list_resources, match_resources, personalize_resources
from .evaluator import ELIGIBILITY_CRITERIA, EligibilityResult, evaluate_eligibility

__all__ = [
    "Operator",
    "Predicate",
    "PredicateField",
    "evaluate_predicate",
    "parse_predicate",
    "GuidanceResource",
    "list_resources",
    "match_resources",
    "personalize_resources",
    "ELIGIBILITY_CRITERIA",
    "EligibilityResult",
    "evaluate_eligibility",
]
