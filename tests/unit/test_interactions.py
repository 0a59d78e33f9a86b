"""Unit and property tests for the pairwise interaction engine."""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from madness_index.ingest.schema import Entrant
from madness_index.matchup.interactions import (
    CATEGORY_TAGS,
    _Ledger,
    compute_interactions,
    half_mirrored_adjust,
    intensity_label,
    variance_mark_bonus,
)
from madness_index.scoring.field_stats import FieldStats, MetricStats, compute_field_stats
from madness_index.scoring.marks import MarkCategory, ProfileMark, ProfileMarks, Severity

# ---------------------------------------------------------------------------
# Half-mirrored adjustment
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("gap", "points"),
    [(0.0, 0.0), (0.49, 0.0), (0.50, 0.25), (-0.75, 0.25), (0.999, 0.25), (1.0, 0.50), (-7.0, 0.50)],
)
def test_half_mirrored_adjust(gap: float, points: float) -> None:
    assert half_mirrored_adjust(gap) == points


@pytest.mark.property
@given(gap=st.floats(allow_nan=False, allow_infinity=False), bigger=st.floats(min_value=0.0, max_value=10.0))
def test_half_mirror_symmetric_capped_monotonic(gap: float, bigger: float) -> None:
    points = half_mirrored_adjust(gap)
    assert points in (0.0, 0.25, 0.50)
    assert half_mirrored_adjust(-gap) == points
    assert half_mirrored_adjust(abs(gap) + bigger) >= points


@pytest.mark.unit
@pytest.mark.parametrize(
    ("adjustment", "label"),
    [(0.5, "Major"), (-0.25, "Moderate"), (0.1, "Minor"), (0.0, "Minor")],
)
def test_intensity_label(adjustment: float, label: str) -> None:
    assert intensity_label(adjustment) == label


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestLedger:
    def test_larger_gap_decides(self) -> None:
        ledger = _Ledger()
        ledger.settle_dual_gap("3pt", 0.6, -1.2)
        # B's own gap is the larger signal and it is negative, so A resisted.
        assert ledger.breakdown["3pt"] == 0.50
        assert ledger.total_a == 0.50
        assert ledger.total_b == -0.50

    def test_positive_b_gap_credits_b(self) -> None:
        ledger = _Ledger()
        ledger.settle_dual_gap("ft", 0.2, 0.8)
        assert ledger.breakdown["ft"] == -0.25

    def test_equal_opposing_gaps_cancel(self) -> None:
        ledger = _Ledger()
        ledger.settle_dual_gap("paint", 0.9, 0.9)
        ledger.settle_dual_gap("glass", -1.4, -1.4)
        assert ledger.total_a == 0.0
        assert ledger.breakdown["paint"] == 0.0
        assert ledger.breakdown["glass"] == 0.0

    def test_equal_agreeing_gaps_award(self) -> None:
        ledger = _Ledger()
        ledger.settle_dual_gap("to", 0.7, -0.7)
        assert ledger.breakdown["to"] == 0.25

    def test_fresh_ledger_per_instance(self) -> None:
        first = _Ledger()
        first.credit_a(0.5, "var")
        assert _Ledger().breakdown["var"] == 0.0


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

PERIMETER_FIELD = FieldStats(
    metrics={
        "threepr": MetricStats(0.35, 0.02, 64),
        "threepp": MetricStats(0.34, 0.02, 64),
        "pct_pts_3": MetricStats(0.30, 0.03, 64),
        "opp_3pr": MetricStats(0.38, 0.02, 64),
        "opp_3pp": MetricStats(0.33, 0.02, 64),
    }
)


@pytest.mark.unit
class TestComputeInteractions:
    def test_shooter_wins_three_point_tension_but_carries_variance(self) -> None:
        shooter = Entrant(name="Shooter", threepr=0.39, threepp=0.38, pct_pts_3=0.36)
        average = Entrant(name="Average", threepr=0.35, threepp=0.34, pct_pts_3=0.30, opp_3pr=0.38, opp_3pp=0.33)
        result = compute_interactions(shooter, average, PERIMETER_FIELD)
        assert result.breakdown["3pt"] == 0.50
        assert result.breakdown["shotq"] == 0.25
        assert result.breakdown["var"] == -0.25
        assert result.total_a == 0.50
        assert result.total_b == -0.50
        assert result.favored == "Shooter"

    def test_resume_pressure_on_field(self, field_entrants: list[Entrant]) -> None:
        field = compute_field_stats(field_entrants)
        alpha, bravo = field_entrants[0], field_entrants[1]
        result = compute_interactions(alpha, bravo, field)
        assert result.breakdown["resume"] == 0.25

    def test_identical_entrants_are_all_zero(self, field_entrants: list[Entrant]) -> None:
        twin = field_entrants[0].model_copy(update={"name": "Alpha Twin"})
        field = compute_field_stats([*field_entrants, twin])
        result = compute_interactions(field_entrants[0], twin, field)
        assert all(points == 0.0 for points in result.breakdown.values())
        assert result.total_a == 0.0
        assert result.favored is None

    def test_entries_cover_every_category(self, field_entrants: list[Entrant]) -> None:
        field = compute_field_stats(field_entrants)
        result = compute_interactions(field_entrants[0], field_entrants[1], field)
        entries = result.entries()
        assert [entry.tag for entry in entries] == list(CATEGORY_TAGS)
        resume = entries[CATEGORY_TAGS.index("resume")]
        assert resume.edge == "FAVORS Alpha"
        assert resume.adjustment_b == -0.25
        assert resume.intensity == "Moderate"

    def test_breakdown_is_read_only(self, field_entrants: list[Entrant]) -> None:
        field = compute_field_stats(field_entrants)
        result = compute_interactions(field_entrants[0], field_entrants[1], field)
        with pytest.raises(TypeError):
            result.breakdown["3pt"] = 1.0  # type: ignore[index]

    def test_missing_data_degrades_to_zero(self) -> None:
        result = compute_interactions(Entrant(name="A"), Entrant(name="B"), FieldStats(metrics={}))
        assert result.total_a == 0.0
        assert set(result.breakdown) == set(CATEGORY_TAGS)


@pytest.mark.unit
def test_variance_mark_bonus() -> None:
    slots: list[ProfileMark | None] = [None] * len(MarkCategory)
    categories = list(MarkCategory)
    slots[categories.index(MarkCategory.UNSTABLE_PERIMETER)] = ProfileMark(
        MarkCategory.UNSTABLE_PERIMETER, Severity.SEVERE
    )
    slots[categories.index(MarkCategory.COLD_ARC)] = ProfileMark(MarkCategory.COLD_ARC, Severity.MODERATE)
    assert variance_mark_bonus(ProfileMarks(tuple(slots))) == pytest.approx(0.15)
    assert variance_mark_bonus(ProfileMarks((None,) * len(MarkCategory))) == 0.0


_metric = st.one_of(st.none(), st.floats(min_value=0.0, max_value=1.0, allow_nan=False))
_STYLE_KEYS = ("threepr", "threepp", "pct_pts_3", "ftr", "opp_ftr", "to", "epr", "orb", "drb", "def_efg", "blk", "otpp")


@pytest.mark.property
@given(
    a=st.fixed_dictionaries({key: _metric for key in _STYLE_KEYS}),
    b=st.fixed_dictionaries({key: _metric for key in _STYLE_KEYS}),
)
@settings(max_examples=60, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_interactions_are_antisymmetric(
    a: dict[str, float | None], b: dict[str, float | None], field_entrants: list[Entrant]
) -> None:
    """Swapping the sides negates every category, and totals always cancel."""
    side_a = Entrant(name="X", **a)
    side_b = Entrant(name="Y", **b)
    field = compute_field_stats([*field_entrants, side_a, side_b])
    forward = compute_interactions(side_a, side_b, field)
    backward = compute_interactions(side_b, side_a, field)
    assert forward.total_a == -forward.total_b
    assert forward.total_a == backward.total_b
    for tag in CATEGORY_TAGS:
        assert forward.breakdown[tag] == -backward.breakdown[tag]
