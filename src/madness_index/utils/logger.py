"""Project-wide logging setup for the Madness Index engine.

Every module logs through ``logging.getLogger(__name__)``; since all
modules live under the ``madness_index`` package, their records roll up
to a single package logger that this module configures.

Verbosity names accepted by :func:`configure_logging`:

    ========  ==============  =====
    Name      Python level    Value
    ========  ==============  =====
    QUIET     WARNING          30
    NORMAL    INFO             20
    VERBOSE   VERBOSE (custom) 15
    DEBUG     DEBUG            10
    ========  ==============  =====

``VERBOSE`` is where per-comparison detail goes (one line per matchup
and per interaction category); ``DEBUG`` adds per-entrant layer detail
such as skipped profile-mark rules.

Resolution order for the level is: explicit argument, then the
``MADNESS_INDEX_LOG_LEVEL`` environment variable, then ``NORMAL``.

Example:
    >>> from madness_index.utils.logger import configure_logging, get_logger
    >>> configure_logging("VERBOSE")
    >>> get_logger("engine").info("Loaded %d entrants", 68)
"""

from __future__ import annotations

import logging
import os
import sys

VERBOSE: int = 15
"""Custom level between INFO and DEBUG for per-comparison detail."""

logging.addLevelName(VERBOSE, "VERBOSE")

QUIET: int = logging.WARNING
NORMAL: int = logging.INFO
DEBUG: int = logging.DEBUG

LEVELS: dict[str, int] = {
    "QUIET": QUIET,
    "NORMAL": NORMAL,
    "VERBOSE": VERBOSE,
    "DEBUG": DEBUG,
}

ENV_VAR: str = "MADNESS_INDEX_LOG_LEVEL"
_PACKAGE_LOGGER: str = "madness_index"
_LOG_FORMAT: str = "%(asctime)s | %(name)s | %(levelname)-8s | %(message)s"


def resolve_level(level: str | None = None) -> int:
    """Translate a verbosity name into a numeric logging level.

    Args:
        level: Verbosity name (case-insensitive) or ``None`` to fall back to
            ``MADNESS_INDEX_LOG_LEVEL`` and then ``"NORMAL"``.

    Returns:
        The numeric level.

    Raises:
        ValueError: If the resolved name is not one of :data:`LEVELS`.
    """
    name = level if level is not None else os.environ.get(ENV_VAR, "NORMAL")
    try:
        return LEVELS[name.upper()]
    except KeyError:
        msg = f"Unknown log level {name!r}. Valid levels: {', '.join(sorted(LEVELS))}"
        raise ValueError(msg) from None


def configure_logging(level: str | None = None) -> None:
    """Attach a single stderr handler to the ``madness_index`` logger.

    Safe to call repeatedly: previously attached handlers are removed first,
    and the package logger does not propagate to the Python root logger.

    Args:
        level: See :func:`resolve_level`.

    Raises:
        ValueError: If the level name is not recognised.
    """
    numeric_level = resolve_level(level)

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return ``madness_index.<name>``.

    Args:
        name: Dotted suffix, e.g. ``"cli"`` or ``"scoring.marks"``.
    """
    return logging.getLogger(f"{_PACKAGE_LOGGER}.{name}")
