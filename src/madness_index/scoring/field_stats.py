"""Field statistics: population mean and SD for every tracked metric.

Every z-score in the engine is taken against a :class:`FieldStats` snapshot
built here from the full set of loaded entrants.  Means and standard
deviations are population statistics (``ddof=0``) over non-null values
only, so an entrant missing one metric still contributes to all others.

Two derived metrics are computed alongside the raw ones:

* ``wp`` — win percentage, ``w / (w + l)`` when both are present and sum to
  more than zero;
* ``P`` — schedule-hardness percentile, a min–max rescale of ``sos`` that
  maps the lowest (toughest) raw value to 1.0 and the highest to 0.0.  It
  is left unset for everyone when the field shares a single ``sos`` value.

Lookups never fail: a metric absent from the snapshot, a null entrant
value, or a zero SD all yield a z-score of 0.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import pandas as pd  # type: ignore[import-untyped]

from madness_index.errors import EmptyFieldError
from madness_index.ingest.schema import Entrant

logger = logging.getLogger(__name__)

#: Raw metrics that receive field statistics.
METRICS_FOR_Z: tuple[str, ...] = (
    "offeff",
    "defeff",
    "adjem",
    "ts",
    "efg",
    "tempo",
    "epr",
    "to",
    "threepr",
    "threepp",
    "pct_pts_3",
    "pct_pts_2",
    "pct_pts_ft",
    "opp_3pr",
    "opp_3pp",
    "ftr",
    "opp_ftr",
    "ft_pct",
    "nb2",
    "def_efg",
    "blk",
    "spp",
    "otpp",
    "opp_ast_poss",
    "orb",
    "drb",
    "scpg",
)

WIN_PCT = "wp"
SCHEDULE_PCT = "P"


@dataclass(frozen=True)
class MetricStats:
    """Population statistics of one metric across the field.

    Attributes:
        mean: Mean of the non-null values.
        sd: Population standard deviation (divide by N).
        count: Number of non-null values observed.
    """

    mean: float
    sd: float
    count: int


@dataclass(frozen=True)
class FieldStats:
    """Immutable field-statistics snapshot for one dataset load.

    Attributes:
        metrics: Metric key → :class:`MetricStats`.  Includes ``wp`` and ``P``
            when at least one entrant has them.
        win_pct: Entrant name → win percentage.
        schedule_pct: Entrant name → schedule-hardness percentile ``P``.
    """

    metrics: Mapping[str, MetricStats]
    win_pct: Mapping[str, float] = field(default_factory=dict)
    schedule_pct: Mapping[str, float] = field(default_factory=dict)

    def get(self, key: str) -> MetricStats | None:
        """Return the statistics for *key*, or ``None`` when nothing was observed."""
        return self.metrics.get(key)

    def has(self, *keys: str) -> bool:
        """``True`` when every key in *keys* has field statistics."""
        return all(key in self.metrics for key in keys)

    def value(self, entrant: Entrant, key: str) -> float | None:
        """Raw value of *key* for *entrant*, resolving the derived ``wp`` / ``P`` keys."""
        if key == WIN_PCT:
            return self.win_pct.get(entrant.name)
        if key == SCHEDULE_PCT:
            return self.schedule_pct.get(entrant.name)
        return entrant.metric(key)

    def z(self, entrant: Entrant, key: str, *, inverted: bool = False) -> float:
        """Field z-score of *entrant*'s *key*, oriented so higher is better.

        Inverted metrics (lower raw is better) are reflected about the field
        mean, ``2 * mean - value``, before z-scoring.

        Returns:
            The z-score, or ``0.0`` when the metric or value is missing or
            the field SD is zero.
        """
        stats = self.metrics.get(key)
        if stats is None:
            return 0.0
        raw = self.value(entrant, key)
        if raw is None:
            return 0.0
        oriented = 2.0 * stats.mean - raw if inverted else raw
        return z_score(oriented, stats.mean, stats.sd)


def z_score(value: float | None, mean: float, sd: float) -> float:
    """``(value - mean) / sd``, or ``0.0`` when *value* is missing or *sd* is zero."""
    if value is None or sd == 0:
        return 0.0
    return (value - mean) / sd


def win_percentage(entrant: Entrant) -> float | None:
    """``w / (w + l)``, or ``None`` without a usable record."""
    if entrant.w is None or entrant.l is None:
        return None
    total = entrant.w + entrant.l
    if total <= 0:
        return None
    return entrant.w / total


def _describe(values: pd.Series) -> MetricStats | None:
    present = values.dropna()
    if present.empty:
        return None
    return MetricStats(mean=float(present.mean()), sd=float(present.std(ddof=0)), count=int(present.size))


def compute_field_stats(entrants: Sequence[Entrant]) -> FieldStats:
    """Build the field-statistics snapshot for *entrants*.

    Args:
        entrants: The full loaded field.

    Returns:
        A new :class:`FieldStats`.

    Raises:
        EmptyFieldError: If *entrants* is empty.
    """
    if not entrants:
        msg = "Cannot compute field statistics: no entrants loaded"
        raise EmptyFieldError(msg)

    frame = pd.DataFrame(
        [{key: entrant.metric(key) for key in (*METRICS_FOR_Z, "sos")} for entrant in entrants],
        index=[entrant.name for entrant in entrants],
        dtype=float,
    )

    metrics: dict[str, MetricStats] = {}
    for key in METRICS_FOR_Z:
        stats = _describe(frame[key])
        if stats is not None:
            metrics[key] = stats

    win_pct: dict[str, float] = {}
    for entrant in entrants:
        wp = win_percentage(entrant)
        if wp is not None:
            win_pct[entrant.name] = wp

    schedule_pct: dict[str, float] = {}
    sos = frame["sos"].dropna()
    if not sos.empty:
        lo, hi = float(sos.min()), float(sos.max())
        if hi > lo:
            for name, raw in sos.items():
                schedule_pct[str(name)] = 1.0 - (float(raw) - lo) / (hi - lo)
        else:
            logger.debug("All entrants share sos=%s; schedule percentile left unset", lo)

    for key, derived in ((WIN_PCT, win_pct), (SCHEDULE_PCT, schedule_pct)):
        stats = _describe(pd.Series(list(derived.values()), dtype=float))
        if stats is not None:
            metrics[key] = stats

    logger.debug(
        "Field stats: %d entrants, %d/%d metrics observed",
        len(entrants),
        len(metrics),
        len(METRICS_FOR_Z) + 2,
    )
    return FieldStats(metrics=metrics, win_pct=win_pct, schedule_pct=schedule_pct)
