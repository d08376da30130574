"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    FrailtyEngineError,
    CatalogError,
    ProfileValidationError,
    PredicateSyntaxError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "FrailtyEngineError",
    "CatalogError",
    "ProfileValidationError",
    "PredicateSyntaxError",
]
