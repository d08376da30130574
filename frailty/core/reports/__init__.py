"""
Report Content Module

Builds the summary, recommendations and next steps of a frailty
assessment report.
"""
from .frailty_report import FrailtyReport, generate_report_content

__all__ = [
    "FrailtyReport",
    "generate_report_content",
]
