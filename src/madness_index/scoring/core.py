"""Core Trait layer: eight oriented efficiency z-scores and their composite.

The composite (``mibs``) weights the metrics in four lanes:

* 45% offensive / defensive efficiency, split evenly;
* 35% true shooting, effective FG and opponent effective FG, split evenly;
* 20% possession ratio and turnover rate, split evenly;
* a flat 10% stabilizer on efficiency margin.

Defensive efficiency, opponent eFG and turnover rate are inverted so that a
higher z is always better.  The per-metric :class:`CoreTraitRow` table is
explanatory only and has no effect on ``mibs``.
"""

from __future__ import annotations

from dataclasses import dataclass

from madness_index.ingest.schema import Entrant
from madness_index.scoring.field_stats import FieldStats
from madness_index.scoring.tiers import tier_label, tier_points

W_OFF_DEF: float = 0.45 / 2.0
W_SHOOTING: float = 0.35 / 3.0
W_POSSESSION: float = 0.20 / 2.0
W_MARGIN: float = 0.10


@dataclass(frozen=True)
class CoreMetric:
    """Definition of one core metric."""

    key: str
    label: str
    inverted: bool
    weight: float


#: Canonical core metrics in display order.
CORE_METRICS: tuple[CoreMetric, ...] = (
    CoreMetric("offeff", "Offensive Efficiency", False, W_OFF_DEF),
    CoreMetric("defeff", "Defensive Efficiency", True, W_OFF_DEF),
    CoreMetric("adjem", "Adj. Efficiency Margin", False, W_MARGIN),
    CoreMetric("ts", "True Shooting %", False, W_SHOOTING),
    CoreMetric("efg", "Effective FG %", False, W_SHOOTING),
    CoreMetric("def_efg", "Defensive eFG %", True, W_SHOOTING),
    CoreMetric("epr", "Effective Possession Ratio (EPR)", False, W_POSSESSION),
    CoreMetric("to", "Turnover %", True, W_POSSESSION),
)

CORE_KEYS: tuple[str, ...] = tuple(metric.key for metric in CORE_METRICS)


@dataclass(frozen=True)
class CoreTraitRow:
    """Explanatory row for one core metric.

    ``mean`` and ``sd`` are ``None`` when the field has no observations of
    the metric; ``points`` is the weighted contribution to ``mibs``.
    """

    key: str
    label: str
    mean: float | None
    sd: float | None
    value: float | None
    z: float
    weight: float
    points: float
    tier: str
    tier_points: float


@dataclass(frozen=True)
class CoreTraits:
    """Core layer output for one entrant.

    Attributes:
        z: Core key → oriented z-score.
        mibs: Weighted composite score.
        rows: Explanatory rows in :data:`CORE_METRICS` order.
    """

    z: dict[str, float]
    mibs: float
    rows: tuple[CoreTraitRow, ...]


def compute_core_traits(entrant: Entrant, field: FieldStats) -> CoreTraits:
    """Compute the oriented core z-scores and ``mibs`` composite for *entrant*."""
    z: dict[str, float] = {}
    rows: list[CoreTraitRow] = []
    mibs = 0.0
    for metric in CORE_METRICS:
        score = field.z(entrant, metric.key, inverted=metric.inverted)
        z[metric.key] = score
        points = metric.weight * score
        mibs += points
        stats = field.get(metric.key)
        rows.append(
            CoreTraitRow(
                key=metric.key,
                label=metric.label,
                mean=stats.mean if stats is not None else None,
                sd=stats.sd if stats is not None else None,
                value=entrant.metric(metric.key),
                z=score,
                weight=metric.weight,
                points=points,
                tier=tier_label(score),
                tier_points=tier_points(score),
            )
        )
    return CoreTraits(z=z, mibs=mibs, rows=tuple(rows))
