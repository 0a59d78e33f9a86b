"""Shared utilities module."""

from __future__ import annotations

from madness_index.utils.logger import (
    DEBUG,
    LEVELS,
    NORMAL,
    QUIET,
    VERBOSE,
    configure_logging,
    get_logger,
    resolve_level,
)

__all__ = [
    "DEBUG",
    "LEVELS",
    "NORMAL",
    "QUIET",
    "VERBOSE",
    "configure_logging",
    "get_logger",
    "resolve_level",
]
