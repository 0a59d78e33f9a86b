"""Exception hierarchy for the Madness Index engine.

The scoring core never raises on missing per-entrant data; it degrades to
neutral values instead.  The conditions below are the only hard failures
surfaced to callers.
"""

from __future__ import annotations


class MadnessIndexError(Exception):
    """Base class for all package-specific errors."""


class EmptyFieldError(MadnessIndexError, ValueError):
    """Raised when field statistics or derived layers are requested with no entrants loaded."""


class EntrantNotFoundError(MadnessIndexError, KeyError):
    """Raised when a requested entrant name is not in the loaded field."""
