"""Unit tests for the per-entrant layers: tiers, core traits, breadth, résumé, baseline."""

from __future__ import annotations

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from madness_index.config import ScoringConfig
from madness_index.ingest.schema import Entrant
from madness_index.scoring.baseline import compute_mi_base
from madness_index.scoring.breadth import compute_breadth
from madness_index.scoring.core import CORE_KEYS, CoreTraits, compute_core_traits
from madness_index.scoring.field_stats import FieldStats, compute_field_stats
from madness_index.scoring.resume import NEUTRAL_RESUME, compute_resume_context, resume_index
from madness_index.scoring.tiers import lookup, tier_label, tier_points


@pytest.fixture
def field(field_entrants: list[Entrant]) -> FieldStats:
    return compute_field_stats(field_entrants)


def _by_name(entrants: list[Entrant], name: str) -> Entrant:
    return next(entrant for entrant in entrants if entrant.name == name)


# ---------------------------------------------------------------------------
# Tier tables
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestTiers:
    @pytest.mark.parametrize(
        ("z", "label", "points"),
        [
            (1.2, "Elite", 2.0),
            (1.0, "Elite", 2.0),
            (0.85, "Strong", 1.5),
            (0.6, "Above Average", 1.0),
            (0.0, "Average", 0.5),
            (-0.8, "Weak", 0.0),
            (-0.81, "Fragile", 0.0),
        ],
    )
    def test_boundaries(self, z: float, label: str, points: float) -> None:
        assert tier_label(z) == label
        assert tier_points(z) == points

    def test_nan_is_not_covered(self) -> None:
        with pytest.raises(ValueError, match="not covered"):
            lookup(((0.0, "x"),), math.nan)


# ---------------------------------------------------------------------------
# Core traits
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestCoreTraits:
    def test_hand_computed_composite(self, field: FieldStats, field_entrants: list[Entrant]) -> None:
        """Charlie: offeff -1, defeff +1, adjem -1, shooting (-1, +1, -1), possession (-1, +1)."""
        core = compute_core_traits(_by_name(field_entrants, "Charlie"), field)
        expected = -0.225 + 0.225 - 0.10 + (0.35 / 3) * (-1 + 1 - 1) + 0.10 * (-1 + 1)
        assert core.mibs == pytest.approx(expected, abs=1e-9)

    def test_inverted_metrics_orient_higher_is_better(self, field: FieldStats, field_entrants: list[Entrant]) -> None:
        core = compute_core_traits(_by_name(field_entrants, "Alpha"), field)
        for key in CORE_KEYS:
            assert core.z[key] == pytest.approx(1.0)
        assert core.mibs == pytest.approx(1.10)

    def test_rows_explain_composite(self, field: FieldStats, field_entrants: list[Entrant]) -> None:
        core = compute_core_traits(_by_name(field_entrants, "Delta"), field)
        assert [row.key for row in core.rows] == list(CORE_KEYS)
        assert sum(row.points for row in core.rows) == pytest.approx(core.mibs)
        offeff = core.rows[0]
        assert offeff.mean == pytest.approx(100.0)
        assert offeff.value == pytest.approx(99.0)
        assert offeff.tier == "Fragile"

    def test_missing_metrics_contribute_zero(self, field: FieldStats) -> None:
        core = compute_core_traits(Entrant(name="Blank"), field)
        assert core.mibs == 0.0
        assert all(z == 0.0 for z in core.z.values())


# ---------------------------------------------------------------------------
# Breadth
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestBreadth:
    @pytest.mark.parametrize(
        ("name", "bonus", "hits"),
        [("Alpha", 1.00, 8), ("Bravo", 0.10, 1), ("Charlie", 0.40, 3), ("Delta", 0.50, 4)],
    )
    def test_field_bonuses(
        self, field: FieldStats, field_entrants: list[Entrant], name: str, bonus: float, hits: int
    ) -> None:
        breadth = compute_breadth(compute_core_traits(_by_name(field_entrants, name), field))
        assert breadth.bonus == pytest.approx(bonus)
        assert breadth.total_hits == hits

    def test_threshold_is_inclusive(self) -> None:
        core = CoreTraits(z=dict.fromkeys(CORE_KEYS, 0.0) | {"ts": 0.60, "efg": 0.5999}, mibs=0.0, rows=())
        breadth = compute_breadth(core)
        assert breadth.shooting_hits == 1
        assert breadth.bonus == pytest.approx(0.15)


_z_values = st.floats(min_value=-4.0, max_value=4.0, allow_nan=False)


@pytest.mark.property
@given(z=st.fixed_dictionaries({key: _z_values for key in CORE_KEYS}), key=st.sampled_from(CORE_KEYS))
@settings(max_examples=100, deadline=None)
def test_breadth_bounded_and_monotonic(z: dict[str, float], key: str) -> None:
    """Bonus stays in [0, 1] and never drops when one more metric becomes a hit."""
    before = compute_breadth(CoreTraits(z=z, mibs=0.0, rows=()))
    after = compute_breadth(CoreTraits(z=z | {key: max(z[key], 0.60)}, mibs=0.0, rows=()))
    assert 0.0 <= before.bonus <= 1.0 + 1e-12
    assert after.bonus >= before.bonus
    assert after.total_hits >= before.total_hits


# ---------------------------------------------------------------------------
# Résumé
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestResume:
    @pytest.mark.parametrize(
        ("name", "tier", "adjustment"),
        [("Alpha", "Elite", 0.15), ("Bravo", "Average", 0.0), ("Charlie", "Weak", -0.05), ("Delta", "Fragile", -0.10)],
    )
    def test_field_tiers(
        self, field: FieldStats, field_entrants: list[Entrant], name: str, tier: str, adjustment: float
    ) -> None:
        context = compute_resume_context(_by_name(field_entrants, name), field)
        assert context.tier == tier
        assert context.adjustment == pytest.approx(adjustment)

    def test_index_is_mean_of_record_and_schedule(self, field: FieldStats, field_entrants: list[Entrant]) -> None:
        index = resume_index(_by_name(field_entrants, "Alpha"), field)
        assert index == pytest.approx(1.5 / math.sqrt(1.25))

    def test_later_revision_penalties_only_when_configured(
        self, field: FieldStats, field_entrants: list[Entrant]
    ) -> None:
        config = ScoringConfig(resume_weak_adjustment=-0.15, resume_fragile_adjustment=-0.25)
        delta = _by_name(field_entrants, "Delta")
        assert compute_resume_context(delta, field).adjustment == pytest.approx(-0.10)
        assert compute_resume_context(delta, field, config).adjustment == pytest.approx(-0.25)

    def test_missing_record_is_neutral(self, field: FieldStats) -> None:
        context = compute_resume_context(Entrant(name="Unknown", sos=2.0), field)
        assert context == NEUTRAL_RESUME
        assert context.is_neutral

    def test_field_without_sos_is_neutral(self) -> None:
        entrants = [Entrant(name="A", w=20, l=10), Entrant(name="B", w=10, l=20)]
        field = compute_field_stats(entrants)
        assert compute_resume_context(entrants[0], field) == NEUTRAL_RESUME


# ---------------------------------------------------------------------------
# Baseline
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "expected"),
    [("Alpha", 2.25), ("Bravo", -0.55), ("Charlie", 0.4 / 3), ("Delta", 0.5 / 3)],
)
def test_mi_base_sums_layers(field: FieldStats, field_entrants: list[Entrant], name: str, expected: float) -> None:
    entrant = _by_name(field_entrants, name)
    core = compute_core_traits(entrant, field)
    breadth = compute_breadth(core)
    resume = compute_resume_context(entrant, field)
    mi_base = compute_mi_base(core, breadth, resume)
    assert mi_base == core.mibs + breadth.bonus + resume.adjustment
    assert mi_base == pytest.approx(expected)
    assert compute_mi_base(core, breadth, resume) == mi_base
