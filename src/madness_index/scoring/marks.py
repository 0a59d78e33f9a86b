"""Profile marks: diagnostic flags for structural weaknesses.

Eight independent rules each fill one slot of :class:`ProfileMarks` with a
:class:`ProfileMark` (Moderate or Severe) or ``None``.  A rule whose inputs
(raw values or field statistics) are missing is skipped and leaves its slot
empty.  Marks never change MI_base; the only numeric consumer is the
Variance Sensitivity interaction, which reads the Unstable Perimeter and
Cold Arc slots.

Tempo Strain uses the additive formulation: tempo extremity ``|z tempo|``
plus possession fragility ``max(0, (-z epr - z_inv to) / 2)``, flagged at
0.60 (Moderate) and 1.00 (Severe).
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from madness_index.ingest.schema import Entrant
from madness_index.scoring.field_stats import FieldStats

logger = logging.getLogger(__name__)


class MarkCategory(enum.Enum):
    """The eight profile-mark rules, in evaluation order."""

    OFFENSIVE_RIGIDITY = "Offensive Rigidity"
    UNSTABLE_PERIMETER = "Unstable Perimeter Profile"
    COLD_ARC = "Cold Arc Team"
    UNDISCIPLINED_DEFENSE = "Undisciplined Defense"
    SOFT_INTERIOR = "Soft Interior"
    PERIMETER_LEAKAGE = "Perimeter Leakage"
    TEMPO_STRAIN = "Tempo Strain"
    TURNOVER_FRAGILITY = "Turnover Fragility"


class Severity(enum.Enum):
    MODERATE = "Moderate"
    SEVERE = "Severe"


@dataclass(frozen=True)
class ProfileMark:
    """One raised flag."""

    category: MarkCategory
    severity: Severity

    @property
    def label(self) -> str:
        """Display label, e.g. ``"Cold Arc Team — Severe"``."""
        return f"{self.category.value} — {self.severity.value}"


@dataclass(frozen=True)
class ProfileMarks:
    """One slot per :class:`MarkCategory`, ``None`` where no flag was raised."""

    slots: tuple[ProfileMark | None, ...]

    def __iter__(self) -> Iterator[ProfileMark]:
        return (mark for mark in self.slots if mark is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def get(self, category: MarkCategory) -> ProfileMark | None:
        return self.slots[list(MarkCategory).index(category)]

    def severity_of(self, category: MarkCategory) -> Severity | None:
        mark = self.get(category)
        return mark.severity if mark is not None else None

    def count(self, severity: Severity) -> int:
        return sum(1 for mark in self if mark.severity is severity)

    @property
    def labels(self) -> list[str]:
        return [mark.label for mark in self]


def _grade(value: float, *, severe: float, moderate: float) -> Severity | None:
    """Severity for "higher is worse" measures."""
    if value >= severe:
        return Severity.SEVERE
    if value >= moderate:
        return Severity.MODERATE
    return None


def _grade_below(value: float, *, severe: float, moderate: float) -> Severity | None:
    """Severity for "lower is worse" measures (strict inequalities)."""
    if value < severe:
        return Severity.SEVERE
    if value < moderate:
        return Severity.MODERATE
    return None


def _available(entrant: Entrant, field: FieldStats, *keys: str) -> bool:
    return field.has(*keys) and all(entrant.metric(key) is not None for key in keys)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

#: Dominant scoring source → the two shooting metrics that form its Plan B.
_PLAN_B: dict[str, tuple[str, str]] = {
    "pct_pts_2": ("threepp", "ft_pct"),
    "pct_pts_3": ("nb2", "ft_pct"),
    "pct_pts_ft": ("nb2", "threepp"),
}


def offensive_rigidity(entrant: Entrant, field: FieldStats) -> Severity | None:
    shares = {key: entrant.metric(key) for key in _PLAN_B}
    if any(share is None for share in shares.values()):
        return None
    # max() keeps the first key on ties: 2P, then 3P, then FT.
    primary = max(_PLAN_B, key=lambda key: shares[key] or 0.0)
    primary_share = shares[primary] or 0.0
    if primary_share < 0.50:
        return None
    first, second = _PLAN_B[primary]
    if not _available(entrant, field, first, second):
        return None
    plan_b = (field.z(entrant, first) + field.z(entrant, second)) / 2.0
    if primary_share >= 0.55 and plan_b <= -0.50:
        return Severity.SEVERE
    if plan_b <= -0.25:
        return Severity.MODERATE
    return None


def unstable_perimeter(entrant: Entrant, field: FieldStats) -> Severity | None:
    volume, accuracy = entrant.threepr, entrant.threepp
    if volume is None or accuracy is None or volume < 0.40:
        return None
    return _grade(abs(volume - accuracy), severe=0.10, moderate=0.06)


def cold_arc(entrant: Entrant, field: FieldStats) -> Severity | None:
    if not _available(entrant, field, "threepp"):
        return None
    return _grade_below(field.z(entrant, "threepp"), severe=-0.67, moderate=0.0)


def undisciplined_defense(entrant: Entrant, field: FieldStats) -> Severity | None:
    if not _available(entrant, field, "spp", "otpp", "opp_ftr"):
        return None
    pressure = field.z(entrant, "spp") + field.z(entrant, "otpp")
    discipline = -field.z(entrant, "opp_ftr")
    return _grade(pressure - discipline, severe=1.00, moderate=0.50)


def soft_interior(entrant: Entrant, field: FieldStats) -> Severity | None:
    if not _available(entrant, field, "def_efg", "blk"):
        return None
    resistance = (-field.z(entrant, "def_efg") + field.z(entrant, "blk")) / 2.0
    return _grade_below(resistance, severe=-0.75, moderate=-0.25)


def perimeter_leakage(entrant: Entrant, field: FieldStats) -> Severity | None:
    if not _available(entrant, field, "opp_3pr", "opp_3pp"):
        return None
    exposure = field.z(entrant, "opp_3pr") + field.z(entrant, "opp_3pp")
    return _grade(exposure, severe=1.00, moderate=0.50)


def tempo_strain(entrant: Entrant, field: FieldStats) -> Severity | None:
    if not _available(entrant, field, "tempo", "epr", "to"):
        return None
    extremity = abs(field.z(entrant, "tempo"))
    fragility = max(0.0, (-field.z(entrant, "epr") - field.z(entrant, "to", inverted=True)) / 2.0)
    return _grade(extremity + fragility, severe=1.00, moderate=0.60)


def turnover_fragility_index(entrant: Entrant, field: FieldStats) -> float:
    """Instability of ball security: ``-((-z to + z epr) / 2)``; 0 when inputs are missing."""
    stability = (-field.z(entrant, "to") + field.z(entrant, "epr")) / 2.0
    return -stability


def turnover_fragility(entrant: Entrant, field: FieldStats) -> Severity | None:
    if not _available(entrant, field, "to", "epr"):
        return None
    return _grade(turnover_fragility_index(entrant, field), severe=1.00, moderate=0.50)


MARK_RULES: dict[MarkCategory, Callable[[Entrant, FieldStats], Severity | None]] = {
    MarkCategory.OFFENSIVE_RIGIDITY: offensive_rigidity,
    MarkCategory.UNSTABLE_PERIMETER: unstable_perimeter,
    MarkCategory.COLD_ARC: cold_arc,
    MarkCategory.UNDISCIPLINED_DEFENSE: undisciplined_defense,
    MarkCategory.SOFT_INTERIOR: soft_interior,
    MarkCategory.PERIMETER_LEAKAGE: perimeter_leakage,
    MarkCategory.TEMPO_STRAIN: tempo_strain,
    MarkCategory.TURNOVER_FRAGILITY: turnover_fragility,
}


def evaluate_profile_marks(entrant: Entrant, field: FieldStats) -> ProfileMarks:
    """Run every rule for *entrant* and collect the results in category order."""
    slots: list[ProfileMark | None] = []
    for category in MarkCategory:
        severity = MARK_RULES[category](entrant, field)
        slots.append(ProfileMark(category, severity) if severity is not None else None)
    marks = ProfileMarks(slots=tuple(slots))
    if len(marks):
        logger.debug("%s: profile marks %s", entrant.name, marks.labels)
    return marks
