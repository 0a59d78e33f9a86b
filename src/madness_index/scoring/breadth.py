"""Breadth bonus: rewards statistical profiles that are strong in many places.

Each group counts how many of its member core z-scores reach the hit
threshold (0.60) and converts the count into a bonus:

=============  ==================================  ============
Group          Members                             Per hit
=============  ==================================  ============
Efficiency     offeff, defeff, adjem, def_efg      0.10 (≤0.40)
Shooting       ts, efg                             0.15 (≤0.30)
Possession     epr, to                             0.15 (≤0.30)
=============  ==================================  ============
"""

from __future__ import annotations

from dataclasses import dataclass

from madness_index.scoring.core import CoreTraits
from madness_index.scoring.tiers import HIT_THRESHOLD


@dataclass(frozen=True)
class BreadthGroup:
    """One breadth group: members and the bonus for 0..n hits."""

    name: str
    members: tuple[str, ...]
    bonus_by_hits: tuple[float, ...]


BREADTH_GROUPS: tuple[BreadthGroup, ...] = (
    BreadthGroup("efficiency", ("offeff", "defeff", "adjem", "def_efg"), (0.0, 0.10, 0.20, 0.30, 0.40)),
    BreadthGroup("shooting", ("ts", "efg"), (0.0, 0.15, 0.30)),
    BreadthGroup("possession", ("epr", "to"), (0.0, 0.15, 0.30)),
)


@dataclass(frozen=True)
class BreadthResult:
    """Breadth layer output.

    Attributes:
        efficiency_hits: Hits in the efficiency group (0–4).
        shooting_hits: Hits in the shooting group (0–2).
        possession_hits: Hits in the possession group (0–2).
        bonus: Total bonus, in ``[0, 1.00]``.
    """

    efficiency_hits: int
    shooting_hits: int
    possession_hits: int
    bonus: float

    @property
    def total_hits(self) -> int:
        return self.efficiency_hits + self.shooting_hits + self.possession_hits


def count_hits(z: dict[str, float], members: tuple[str, ...]) -> int:
    """Number of *members* whose z-score is at or above the hit threshold."""
    return sum(1 for key in members if z.get(key, 0.0) >= HIT_THRESHOLD)


def compute_breadth(core: CoreTraits) -> BreadthResult:
    """Score the breadth bonus from an entrant's core z-scores."""
    hits: dict[str, int] = {}
    bonus = 0.0
    for group in BREADTH_GROUPS:
        count = count_hits(core.z, group.members)
        hits[group.name] = count
        bonus += group.bonus_by_hits[count]
    return BreadthResult(
        efficiency_hits=hits["efficiency"],
        shooting_hits=hits["shooting"],
        possession_hits=hits["possession"],
        bonus=bonus,
    )
