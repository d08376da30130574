"""
Custom Exception Hierarchy

Error types raised around the frailty engine, each carrying a stable
code and structured details for API responses.
"""
from typing import Optional, Dict, Any


class FrailtyEngineError(Exception):
    """Base exception for all frailty engine errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class CatalogError(FrailtyEngineError):
    """A condition catalog file or entry cannot be used."""

    def __init__(
        self,
        message: str,
        source: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="CATALOG_ERROR",
            details={"source": source, **(details or {})}
        )
        self.source = source


class ProfileValidationError(FrailtyEngineError):
    """A caller payload failed validation before reaching the engine."""

    def __init__(
        self,
        message: str,
        errors: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="PROFILE_VALIDATION_ERROR",
            details={"errors": errors or [], **(details or {})}
        )
        self.errors = errors or []


class PredicateSyntaxError(FrailtyEngineError):
    """An applicability predicate string could not be parsed."""

    def __init__(
        self,
        message: str,
        predicate: str = "",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="PREDICATE_SYNTAX_ERROR",
            details={"predicate": predicate, **(details or {})}
        )
        self.predicate = predicate
