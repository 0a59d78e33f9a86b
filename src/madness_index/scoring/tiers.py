"""Ordered threshold tables shared by every scoring layer.

Tiers are monotonic piecewise functions of a z-like score, so they are kept
as data: each table is a descending sequence of ``(lower_bound, value)``
pairs and the first bound the score meets wins.  The final entry's bound is
``-inf`` so every finite score resolves.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

_V = TypeVar("_V")

ELITE = "Elite"
STRONG = "Strong"
ABOVE_AVERAGE = "Above Average"
AVERAGE = "Average"
WEAK = "Weak"
FRAGILE = "Fragile"

#: z → tier label, used wherever the engine reports a tier.
TIER_LABELS: tuple[tuple[float, str], ...] = (
    (1.00, ELITE),
    (0.80, STRONG),
    (0.60, ABOVE_AVERAGE),
    (0.00, AVERAGE),
    (-0.80, WEAK),
    (-math.inf, FRAGILE),
)

#: z → explanatory tier points.  Display only; never feeds a score.
TIER_POINTS: tuple[tuple[float, float], ...] = (
    (1.00, 2.0),
    (0.80, 1.5),
    (0.60, 1.0),
    (0.00, 0.5),
    (-0.80, 0.0),
    (-math.inf, 0.0),
)

#: Minimum z for a metric to count as an above-average "hit".
HIT_THRESHOLD: float = 0.60


def lookup(table: Sequence[tuple[float, _V]], score: float) -> _V:
    """Return the value of the first row whose bound *score* meets.

    Args:
        table: Rows ordered by descending lower bound.
        score: Value to classify.

    Raises:
        ValueError: If *score* is NaN or below every bound.
    """
    for bound, value in table:
        if score >= bound:
            return value
    msg = f"Score {score!r} is not covered by the tier table"
    raise ValueError(msg)


def tier_label(z: float) -> str:
    """Tier label for *z* ("Elite" … "Fragile")."""
    return lookup(TIER_LABELS, z)


def tier_points(z: float) -> float:
    """Explanatory tier points for *z* (2.0 / 1.5 / 1.0 / 0.5 / 0 / 0)."""
    return lookup(TIER_POINTS, z)
