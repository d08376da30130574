"""
Frailty Engine Configuration
============================
Runtime settings for logging, catalog overrides and batch scoring.
Values come from the environment, optionally loaded from a project-level
.env file. Scoring thresholds and weights are fixed constants and are
not configurable.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_BATCH_WORKERS = 4


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(1, int(raw))
    except ValueError:
        return default


@dataclass
class EngineConfig:
    """Configuration for the frailty engine and its logging."""
    log_level: str = field(default_factory=lambda: os.getenv("FRAILTY_LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("FRAILTY_LOG_FILE") or None)

    # JSON file holding an ordered list of [substring, weight] pairs
    condition_catalog_path: Optional[str] = field(
        default_factory=lambda: os.getenv("FRAILTY_CONDITION_CATALOG") or None
    )

    batch_workers: int = field(
        default_factory=lambda: _env_int("FRAILTY_BATCH_WORKERS", DEFAULT_BATCH_WORKERS)
    )

    def __post_init__(self):
        self.log_level = (self.log_level or "INFO").upper()
        self.batch_workers = max(1, int(self.batch_workers))


def load_config(env_file: Optional[Path] = None) -> EngineConfig:
    """
    Load .env (if present) and build an EngineConfig from the environment.

    Variables already set in the process environment take precedence over
    the file.
    """
    load_dotenv(env_file or PROJECT_ROOT / ".env")
    return EngineConfig()
