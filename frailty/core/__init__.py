"""
Core frailty engine: scoring, eligibility and report content.
"""
from .engine import FrailtyRiskEngine

__all__ = ["FrailtyRiskEngine"]
