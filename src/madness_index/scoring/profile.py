"""Per-entrant bundle of every derived scoring layer.

:func:`score_entrant` runs the matchup-independent layers for one entrant in
dependency order (core → breadth → résumé → marks → MI_base).  Identity
scores need the whole field and are attached afterwards with
:func:`attach_identity`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from madness_index.config import ScoringConfig
from madness_index.ingest.schema import Entrant
from madness_index.scoring.baseline import compute_mi_base
from madness_index.scoring.breadth import BreadthResult, compute_breadth
from madness_index.scoring.core import CoreTraitRow, CoreTraits, compute_core_traits
from madness_index.scoring.field_stats import SCHEDULE_PCT, WIN_PCT, FieldStats
from madness_index.scoring.identity import IdentityInput, IdentityScores
from madness_index.scoring.marks import ProfileMarks, Severity, evaluate_profile_marks
from madness_index.scoring.resume import ResumeContext, compute_resume_context


@dataclass(frozen=True)
class EntrantProfile:
    """Every derived value for one entrant in the current dataset.

    Attributes:
        entrant: The raw record.
        win_pct: ``w / (w + l)`` or ``None``.
        schedule_pct: Schedule-hardness percentile ``P`` or ``None``.
        core: Core trait z-scores, composite and explanatory rows.
        breadth: Breadth bonus and hit counts.
        resume: Résumé index, adjustment and tier.
        marks: Profile-mark slots.
        mi_base: Baseline rating.
        identity: CIS / FAS and cosmetic rating; ``None`` until the field
            pass has run.
    """

    entrant: Entrant
    win_pct: float | None
    schedule_pct: float | None
    core: CoreTraits
    breadth: BreadthResult
    resume: ResumeContext
    marks: ProfileMarks
    mi_base: float
    identity: IdentityScores | None = None

    @property
    def name(self) -> str:
        return self.entrant.name

    @property
    def seed(self) -> int | None:
        return self.entrant.seed

    @property
    def mibs(self) -> float:
        return self.core.mibs

    def identity_input(self) -> IdentityInput:
        return IdentityInput(
            name=self.name,
            seed=self.seed,
            mi_base=self.mi_base,
            core_z=self.core.z,
            resume_adjustment=self.resume.adjustment,
        )


@dataclass(frozen=True)
class EntrantSummary:
    """Headline facts for narrative collaborators.

    ``strongest`` / ``weakest`` are the core rows with the largest and
    smallest weighted contribution.
    """

    strongest: CoreTraitRow | None
    weakest: CoreTraitRow | None
    breadth_hits: int
    breadth_bonus: float
    resume_adjustment: float
    resume_tier: str
    severe_marks: int
    moderate_marks: int


def score_entrant(entrant: Entrant, field_stats: FieldStats, config: ScoringConfig | None = None) -> EntrantProfile:
    """Compute every matchup-independent layer for *entrant*."""
    core = compute_core_traits(entrant, field_stats)
    breadth = compute_breadth(core)
    resume = compute_resume_context(entrant, field_stats, config)
    return EntrantProfile(
        entrant=entrant,
        win_pct=field_stats.value(entrant, WIN_PCT),
        schedule_pct=field_stats.value(entrant, SCHEDULE_PCT),
        core=core,
        breadth=breadth,
        resume=resume,
        marks=evaluate_profile_marks(entrant, field_stats),
        mi_base=compute_mi_base(core, breadth, resume),
    )


def attach_identity(profile: EntrantProfile, identity: IdentityScores) -> EntrantProfile:
    return dataclasses.replace(profile, identity=identity)


def summarize_entrant(profile: EntrantProfile) -> EntrantSummary:
    rows = profile.core.rows
    return EntrantSummary(
        strongest=max(rows, key=lambda row: row.points) if rows else None,
        weakest=min(rows, key=lambda row: row.points) if rows else None,
        breadth_hits=profile.breadth.total_hits,
        breadth_bonus=profile.breadth.bonus,
        resume_adjustment=profile.resume.adjustment,
        resume_tier=profile.resume.tier,
        severe_marks=profile.marks.count(Severity.SEVERE),
        moderate_marks=profile.marks.count(Severity.MODERATE),
    )
