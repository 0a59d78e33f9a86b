"""Madness Index: deterministic power ratings and head-to-head breakdowns for tournament fields."""

from __future__ import annotations

from madness_index.config import ScoringConfig
from madness_index.engine import MadnessIndexEngine
from madness_index.errors import EmptyFieldError, EntrantNotFoundError, MadnessIndexError
from madness_index.ingest import Entrant, load_entrants_csv

__version__ = "3.2.0"

__all__ = [
    "EmptyFieldError",
    "Entrant",
    "EntrantNotFoundError",
    "MadnessIndexEngine",
    "MadnessIndexError",
    "ScoringConfig",
    "__version__",
    "load_entrants_csv",
]
