"""
Applicability Predicates

A predicate is a single declarative rule string attached to a guidance
resource:

    frailty_score >= 0.65
    risk_level = high
    mobility_level = dependent
    chronic_conditions

Stored criteria are free text, so a comparison is found anywhere in the
string and text around it is ignored ("Applies when risk_level = high,"
reads as ``risk_level = high``). Fields are tried in the order above and
the first one that yields a comparison decides:

    frailty_score  <operator> <number>   operator: > >= < <= =
    risk_level     = <word>              lowercase tier token
    mobility_level = <word>              lowercase mobility token
    chronic_conditions                   true when any condition is listed

Evaluation fails closed: a predicate that does not parse is false.
"""
from __future__ import annotations

import operator as _op
import string
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterator, Optional, Tuple, Union

from frailty.core.scoring.base import ClinicalProfile, MobilityLevel, RiskAssessment, RiskTier
from frailty.utils import PredicateSyntaxError, get_logger

logger = get_logger(__name__)


class PredicateField(str, Enum):
    FRAILTY_SCORE      = "frailty_score"
    RISK_LEVEL         = "risk_level"
    MOBILITY_LEVEL     = "mobility_level"
    CHRONIC_CONDITIONS = "chronic_conditions"


class Operator(str, Enum):
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    EQ = "="


_COMPARATORS = {
    Operator.GT: _op.gt,
    Operator.GE: _op.ge,
    Operator.LT: _op.lt,
    Operator.LE: _op.le,
    Operator.EQ: _op.eq,
}

_OPERATOR_CHARS = frozenset("<>=")
_NUMBER_CHARS = frozenset("0123456789.")
_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")


@dataclass(frozen=True)
class Predicate:
    """Parsed form of one predicate string."""
    field: PredicateField
    operator: Optional[Operator] = None
    value: Union[float, RiskTier, MobilityLevel, None] = None

    def evaluate(self, assessment: RiskAssessment, profile: ClinicalProfile) -> bool:
        if self.field == PredicateField.CHRONIC_CONDITIONS:
            return profile.condition_count > 0
        if self.field == PredicateField.FRAILTY_SCORE:
            return _COMPARATORS[self.operator](assessment.score, self.value)
        if self.field == PredicateField.RISK_LEVEL:
            return assessment.tier == self.value
        if self.field == PredicateField.MOBILITY_LEVEL:
            return profile.mobility_level == self.value
        return False

    def __str__(self) -> str:
        if self.operator is None:
            return self.field.value
        value = self.value.value if isinstance(self.value, Enum) else self.value
        return f"{self.field.value} {self.operator.value} {value}"


# ── Parser ────────────────────────────────────────────────────────────────────

# Tried in this order; the first field that yields a comparison decides
_FIELD_ORDER: Tuple[PredicateField, ...] = (
    PredicateField.FRAILTY_SCORE,
    PredicateField.RISK_LEVEL,
    PredicateField.MOBILITY_LEVEL,
    PredicateField.CHRONIC_CONDITIONS,
)


def _take(text: str, start: int, chars: frozenset) -> Tuple[str, int]:
    end = start
    while end < len(text) and text[end] in chars:
        end += 1
    return text[start:end], end


def _skip_space(text: str, start: int) -> int:
    while start < len(text) and text[start].isspace():
        start += 1
    return start


def _occurrences(text: str, name: str) -> Iterator[int]:
    """Index just past each occurrence of ``name`` in ``text``."""
    start = text.find(name)
    while start != -1:
        yield start + len(name)
        start = text.find(name, start + 1)


def _scan_score(text: str) -> Optional[Tuple[str, str]]:
    """First ``frailty_score <operator run> <number run>`` as raw tokens."""
    for pos in _occurrences(text, PredicateField.FRAILTY_SCORE.value):
        symbol, pos = _take(text, _skip_space(text, pos), _OPERATOR_CHARS)
        number, _ = _take(text, _skip_space(text, pos), _NUMBER_CHARS)
        if symbol and number:
            return symbol, number
    return None


def _scan_token(text: str, field: PredicateField) -> Optional[str]:
    """Word token of the first ``<field> = <word>`` in ``text``."""
    for pos in _occurrences(text, field.value):
        pos = _skip_space(text, pos)
        if text[pos:pos + 1] != "=":
            continue
        token, _ = _take(text, _skip_space(text, pos + 1), _WORD_CHARS)
        if token:
            return token
    return None


def _parse_number(token: str, source: str) -> float:
    # digits up to a second decimal point, e.g. "1.2.3" reads as 1.2
    whole, dot, rest = token.partition(".")
    number = whole + dot + rest.split(".")[0]
    if not any(ch.isdigit() for ch in number):
        raise PredicateSyntaxError(f"Expected a number, got {token!r}", predicate=source)
    return float(number)


def _parse_token(token: str, enum_type, source: str):
    try:
        return enum_type(token)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise PredicateSyntaxError(
            f"Unknown value {token!r} (expected one of: {allowed})",
            predicate=source,
        )


@lru_cache(maxsize=512)
def parse_predicate(text: str) -> Predicate:
    """
    Parse one predicate string.

    Raises:
        PredicateSyntaxError: no recognised comparison, or a comparison
            whose value is not a number / known enum token.
    """
    if not isinstance(text, str):
        raise PredicateSyntaxError(f"Predicate must be a string, got {type(text).__name__}")

    for field in _FIELD_ORDER:
        if field.value not in text:
            continue

        if field == PredicateField.CHRONIC_CONDITIONS:
            return Predicate(field=field)

        if field == PredicateField.FRAILTY_SCORE:
            found = _scan_score(text)
            if found is None:
                continue
            symbol, number = found
            try:
                operator = Operator(symbol)
            except ValueError:
                # unknown operator run; later fields may still match
                continue
            return Predicate(field, operator, _parse_number(number, text))

        token = _scan_token(text, field)
        if token is None:
            continue
        enum_type = RiskTier if field == PredicateField.RISK_LEVEL else MobilityLevel
        return Predicate(field, Operator.EQ, _parse_token(token, enum_type, text))

    raise PredicateSyntaxError("No recognised predicate", predicate=text)


def evaluate_predicate(text: str, assessment: RiskAssessment, profile: ClinicalProfile) -> bool:
    """Parse and evaluate ``text``; malformed predicates are false."""
    try:
        predicate = parse_predicate(text)
    except PredicateSyntaxError as exc:
        logger.debug(f"Predicate {text!r} evaluates to false: {exc.message}")
        return False
    except TypeError:
        # unhashable input never reaches the parser cache
        logger.debug(f"Predicate {text!r} evaluates to false: not a string")
        return False
    return predicate.evaluate(assessment, profile)
