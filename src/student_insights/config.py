"""
config.py — Central settings for the Student Insights engine
=============================================================
All configuration is loaded from environment variables / .env file.

Generation parameters (population size, attribute ranges, classifier
thresholds) are constants in the engine modules and are deliberately
not exposed here. Only run-level behaviour is configurable:

  STUDENT_INSIGHTS_SEED       integer seed for reproducible runs (blank = OS entropy)
  STUDENT_INSIGHTS_LOG_LEVEL  logging level name (default WARNING)
  STUDENT_INSIGHTS_STRICT     raise on guardrail BLOCK violations (default true)
"""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load .env into os.environ (no-op if already set, safe to call multiple times)
load_dotenv(override=False)


# ─── Helpers ────────────────────────────────────────────────────────────────

def _parse_seed(value: str) -> Optional[int]:
    """Return the seed as int, or None for blank / non-numeric values."""
    value = value.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


# ─── Settings ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    seed:      Optional[int]
    log_level: str
    strict:    bool

    @property
    def is_reproducible(self) -> bool:
        return self.seed is not None

    def make_rng(self) -> random.Random:
        """Build a fresh random source for one pipeline run."""
        return random.Random(self.seed)

    def status_summary(self) -> dict[str, str]:
        return {
            "Seed":      str(self.seed) if self.is_reproducible else "unseeded",
            "Log level": self.log_level,
            "Strict":    "on" if self.strict else "off",
        }


def get_settings() -> Settings:
    """Load all configuration from environment variables."""
    _str  = lambda k, d="": os.getenv(k, d).strip()
    _bool = lambda k, d=False: os.getenv(k, str(d)).lower() in ("1", "true", "yes")

    return Settings(
        seed      = _parse_seed(_str("STUDENT_INSIGHTS_SEED")),
        log_level = _str("STUDENT_INSIGHTS_LOG_LEVEL", "WARNING").upper() or "WARNING",
        strict    = _bool("STUDENT_INSIGHTS_STRICT", True),
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
