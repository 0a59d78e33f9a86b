"""Pairwise interaction engine.

Nine stylistic match-ups are scored for an ordered pair ``(a, b)``.  Each
category builds an "attack" composite and a "resistance" composite per side
from field z-scores, forms the two directional gaps

    gap_a = attack(a) - resistance(b)
    gap_b = attack(b) - resistance(a)

and lets the larger-magnitude gap decide.  The gap passes through
:func:`half_mirrored_adjust` (0 / 0.25 / 0.50) and the points are credited
to one side and debited from the other, so ``total_a == -total_b`` always.
A positive operative gap credits the attacking side; a negative one credits
the side that resisted.  When the two gaps have equal magnitude but favor
opposite sides they cancel and the category is a push.

Every call builds its own :class:`_Ledger`; nothing is shared between
comparisons.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from madness_index.ingest.schema import Entrant
from madness_index.scoring.field_stats import FieldStats
from madness_index.scoring.marks import (
    MarkCategory,
    ProfileMarks,
    Severity,
    evaluate_profile_marks,
    turnover_fragility_index,
)
from madness_index.scoring.resume import resume_index
from madness_index.utils.logger import VERBOSE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InteractionCategory:
    """Display metadata for one category."""

    tag: str
    label: str
    domain: str


CATEGORIES: tuple[InteractionCategory, ...] = (
    InteractionCategory("3pt", "3PT Tension", "Shooting"),
    InteractionCategory("ft", "FT Pressure", "Pressure"),
    InteractionCategory("paint", "Paint Tension", "Pressure"),
    InteractionCategory("to", "Turnover Pressure", "Pressure"),
    InteractionCategory("glass", "Glass Tension", "Glass"),
    InteractionCategory("resume", "Résumé Pressure", "Résumé"),
    InteractionCategory("phys", "Physicality / Contact Tolerance", "Physicality"),
    InteractionCategory("shotq", "Shot Quality / Discipline", "Shooting"),
    InteractionCategory("var", "Variance Sensitivity", "Variance"),
)
CATEGORY_TAGS: tuple[str, ...] = tuple(category.tag for category in CATEGORIES)

#: Variance bonus for a team already carrying a volatility mark.
_VARIANCE_MARK_BONUS: dict[Severity, float] = {Severity.SEVERE: 0.10, Severity.MODERATE: 0.05}


def half_mirrored_adjust(gap: float) -> float:
    """Tri-level capped award for a directional gap: 0, 0.25 or 0.50.

    ``|gap| < 0.50`` is noise, ``0.50 <= |gap| < 1.00`` earns a quarter point
    and anything larger half a point.
    """
    magnitude = abs(gap)
    if magnitude < 0.50:
        return 0.0
    if magnitude < 1.00:
        return 0.25
    return 0.50


def intensity_label(adjustment: float) -> str:
    """Intensity of an adjustment: "Major" (≥0.50), "Moderate" (≥0.25) or "Minor"."""
    magnitude = abs(adjustment)
    if magnitude >= 0.50:
        return "Major"
    if magnitude >= 0.25:
        return "Moderate"
    return "Minor"


# ---------------------------------------------------------------------------
# Accumulator
# ---------------------------------------------------------------------------


@dataclass
class _Ledger:
    """Running totals for one comparison; breakdown values are from A's side."""

    total_a: float = 0.0
    total_b: float = 0.0
    breakdown: dict[str, float] = field(default_factory=lambda: dict.fromkeys(CATEGORY_TAGS, 0.0))

    def credit_a(self, points: float, tag: str) -> None:
        if not points:
            return
        self.total_a += points
        self.total_b -= points
        self.breakdown[tag] += points

    def credit_b(self, points: float, tag: str) -> None:
        if not points:
            return
        self.total_b += points
        self.total_a -= points
        self.breakdown[tag] -= points

    def settle_dual_gap(self, tag: str, gap_a: float, gap_b: float) -> None:
        """Apply the larger-magnitude gap; ``gap_a > 0`` favors A, ``gap_b > 0`` favors B."""
        if abs(gap_a) == abs(gap_b) and (gap_a > 0) == (gap_b > 0):
            # Equal signals pointing at opposite sides cancel out.
            return
        if abs(gap_a) >= abs(gap_b):
            points = half_mirrored_adjust(gap_a)
            if gap_a > 0:
                self.credit_a(points, tag)
            else:
                self.credit_b(points, tag)
        else:
            points = half_mirrored_adjust(gap_b)
            if gap_b > 0:
                self.credit_b(points, tag)
            else:
                self.credit_a(points, tag)


@dataclass(frozen=True)
class InteractionEntry:
    """One category of a resolved interaction, ready for display."""

    tag: str
    label: str
    domain: str
    adjustment_a: float
    adjustment_b: float
    edge: str
    intensity: str


@dataclass(frozen=True)
class InteractionResult:
    """Output of :func:`compute_interactions`.

    Attributes:
        name_a: Name of side A.
        name_b: Name of side B.
        total_a: Net leverage for A.
        total_b: Net leverage for B (always ``-total_a``).
        breakdown: Category tag → adjustment from A's perspective.
    """

    name_a: str
    name_b: str
    total_a: float
    total_b: float
    breakdown: Mapping[str, float]

    def entries(self) -> list[InteractionEntry]:
        """All nine categories in canonical order, neutral ones included."""
        rows: list[InteractionEntry] = []
        for category in CATEGORIES:
            adj = self.breakdown.get(category.tag, 0.0)
            if adj > 0:
                edge = f"FAVORS {self.name_a}"
            elif adj < 0:
                edge = f"FAVORS {self.name_b}"
            else:
                edge = "EVEN"
            rows.append(
                InteractionEntry(
                    tag=category.tag,
                    label=category.label,
                    domain=category.domain,
                    adjustment_a=adj,
                    adjustment_b=-adj,
                    edge=edge,
                    intensity=intensity_label(adj),
                )
            )
        return rows

    @property
    def favored(self) -> str | None:
        """Name of the side with positive net leverage, ``None`` when even."""
        if self.total_a > self.total_b:
            return self.name_a
        if self.total_b > self.total_a:
            return self.name_b
        return None


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Side:
    entrant: Entrant
    marks: ProfileMarks


def _mean(*values: float) -> float:
    return sum(values) / len(values)


def _dual(
    ledger: _Ledger,
    tag: str,
    a: _Side,
    b: _Side,
    fs: FieldStats,
    attack: Callable[[Entrant, FieldStats], float],
    resist: Callable[[Entrant, FieldStats], float],
) -> None:
    gap_a = attack(a.entrant, fs) - resist(b.entrant, fs)
    gap_b = attack(b.entrant, fs) - resist(a.entrant, fs)
    ledger.settle_dual_gap(tag, gap_a, gap_b)


def _three_point_attack(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "threepr"), fs.z(t, "threepp"), fs.z(t, "pct_pts_3"))


def _perimeter_resistance(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "opp_3pr", inverted=True), fs.z(t, "opp_3pp", inverted=True))


def _free_throw_attack(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "ftr"), fs.z(t, "ft_pct"), fs.z(t, "pct_pts_ft"))


def _foul_discipline(t: Entrant, fs: FieldStats) -> float:
    return fs.z(t, "opp_ftr", inverted=True)


def _paint_attack(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "pct_pts_2"), fs.z(t, "nb2"))


def _rim_protection(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "def_efg", inverted=True), fs.z(t, "blk"))


def _ball_pressure(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "spp"), fs.z(t, "otpp"), fs.z(t, "opp_ast_poss", inverted=True))


def _ball_security(t: Entrant, fs: FieldStats) -> float:
    return fs.z(t, "to", inverted=True)


def _glass_attack(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "orb"), fs.z(t, "scpg"))


def _glass_denial(t: Entrant, fs: FieldStats) -> float:
    return fs.z(t, "drb")


def _physical_attack(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "ftr"), fs.z(t, "pct_pts_2"), fs.z(t, "nb2"))


def _contact_tolerance(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "blk"), fs.z(t, "def_efg", inverted=True), fs.z(t, "opp_ftr", inverted=True))


def _shot_quality(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "efg"), fs.z(t, "threepr"), fs.z(t, "nb2"))


def _shot_disruption(t: Entrant, fs: FieldStats) -> float:
    return _mean(fs.z(t, "def_efg", inverted=True), fs.z(t, "opp_ast_poss", inverted=True))


def _resume_pressure(ledger: _Ledger, a: _Side, b: _Side, fs: FieldStats) -> None:
    index_a = resume_index(a.entrant, fs)
    index_b = resume_index(b.entrant, fs)
    if index_a is None or index_b is None:
        return
    gap = index_a - index_b
    points = half_mirrored_adjust(gap)
    if gap > 0:
        ledger.credit_a(points, "resume")
    elif gap < 0:
        ledger.credit_b(points, "resume")


def variance_mark_bonus(marks: ProfileMarks) -> float:
    """Extra exposure for Unstable Perimeter / Cold Arc marks (Severe 0.10, Moderate 0.05 each)."""
    bonus = 0.0
    for category in (MarkCategory.UNSTABLE_PERIMETER, MarkCategory.COLD_ARC):
        severity = marks.severity_of(category)
        if severity is not None:
            bonus += _VARIANCE_MARK_BONUS[severity]
    return bonus


def variance_exposure_index(t: Entrant, fs: FieldStats, marks: ProfileMarks) -> float:
    """How volatile a team's style is (VEI)."""
    return (
        0.40 * fs.z(t, "threepr")
        + 0.20 * fs.z(t, "ftr", inverted=True)
        + 0.20 * fs.z(t, "orb", inverted=True)
        + 0.20 * turnover_fragility_index(t, fs)
        + variance_mark_bonus(marks)
    )


def opponent_stabilization_index(t: Entrant, fs: FieldStats) -> float:
    """How well a team punishes volatile opponents (OSI)."""
    return _mean(
        fs.z(t, "otpp"),
        fs.z(t, "drb"),
        fs.z(t, "opp_ftr", inverted=True),
        fs.z(t, "opp_3pp", inverted=True),
    )


def _variance(ledger: _Ledger, a: _Side, b: _Side, fs: FieldStats) -> None:
    risk_a = variance_exposure_index(a.entrant, fs, a.marks) - opponent_stabilization_index(b.entrant, fs)
    risk_b = variance_exposure_index(b.entrant, fs, b.marks) - opponent_stabilization_index(a.entrant, fs)
    # Exposure is a liability, so the less exposed side is credited.
    ledger.settle_dual_gap("var", -risk_a, -risk_b)


def compute_interactions(
    a: Entrant,
    b: Entrant,
    field_stats: FieldStats,
    *,
    marks_a: ProfileMarks | None = None,
    marks_b: ProfileMarks | None = None,
) -> InteractionResult:
    """Score all nine interaction categories for the ordered pair ``(a, b)``.

    Args:
        a: Side A.
        b: Side B.
        field_stats: Snapshot both entrants were scored against.
        marks_a: A's profile marks; evaluated on demand when omitted.
        marks_b: B's profile marks; evaluated on demand when omitted.

    Returns:
        Totals and per-category breakdown with ``total_a == -total_b``.
    """
    side_a = _Side(a, marks_a if marks_a is not None else evaluate_profile_marks(a, field_stats))
    side_b = _Side(b, marks_b if marks_b is not None else evaluate_profile_marks(b, field_stats))
    ledger = _Ledger()

    _dual(ledger, "3pt", side_a, side_b, field_stats, _three_point_attack, _perimeter_resistance)
    _dual(ledger, "ft", side_a, side_b, field_stats, _free_throw_attack, _foul_discipline)
    _dual(ledger, "paint", side_a, side_b, field_stats, _paint_attack, _rim_protection)
    _dual(ledger, "to", side_a, side_b, field_stats, _ball_pressure, _ball_security)
    _dual(ledger, "glass", side_a, side_b, field_stats, _glass_attack, _glass_denial)
    _resume_pressure(ledger, side_a, side_b, field_stats)
    _dual(ledger, "phys", side_a, side_b, field_stats, _physical_attack, _contact_tolerance)
    _dual(ledger, "shotq", side_a, side_b, field_stats, _shot_quality, _shot_disruption)
    _variance(ledger, side_a, side_b, field_stats)

    for tag, points in ledger.breakdown.items():
        if points:
            logger.log(VERBOSE, "%s vs %s: %s %+.2f", a.name, b.name, tag, points)

    return InteractionResult(
        name_a=a.name,
        name_b=b.name,
        total_a=ledger.total_a,
        total_b=ledger.total_b,
        breakdown=MappingProxyType(dict(ledger.breakdown)),
    )
