"""Per-entrant scoring layers: field stats, core traits, breadth, résumé, marks, baseline, identity."""

from __future__ import annotations

from madness_index.scoring.baseline import compute_mi_base
from madness_index.scoring.breadth import BREADTH_GROUPS, BreadthResult, compute_breadth
from madness_index.scoring.core import CORE_KEYS, CORE_METRICS, CoreTraitRow, CoreTraits, compute_core_traits
from madness_index.scoring.field_stats import (
    METRICS_FOR_Z,
    FieldStats,
    MetricStats,
    compute_field_stats,
    win_percentage,
    z_score,
)
from madness_index.scoring.identity import IdentityInput, IdentityScores, compute_static_identities
from madness_index.scoring.marks import (
    MarkCategory,
    ProfileMark,
    ProfileMarks,
    Severity,
    evaluate_profile_marks,
)
from madness_index.scoring.profile import (
    EntrantProfile,
    EntrantSummary,
    attach_identity,
    score_entrant,
    summarize_entrant,
)
from madness_index.scoring.resume import NEUTRAL_RESUME, ResumeContext, compute_resume_context
from madness_index.scoring.tiers import TIER_LABELS, TIER_POINTS, tier_label, tier_points

__all__ = [
    "EntrantProfile",
    "EntrantSummary",
    "attach_identity",
    "score_entrant",
    "summarize_entrant",
    "BREADTH_GROUPS",
    "CORE_KEYS",
    "CORE_METRICS",
    "METRICS_FOR_Z",
    "NEUTRAL_RESUME",
    "TIER_LABELS",
    "TIER_POINTS",
    "BreadthResult",
    "CoreTraitRow",
    "CoreTraits",
    "FieldStats",
    "IdentityInput",
    "IdentityScores",
    "MarkCategory",
    "MetricStats",
    "ProfileMark",
    "ProfileMarks",
    "ResumeContext",
    "Severity",
    "compute_breadth",
    "compute_core_traits",
    "compute_field_stats",
    "compute_mi_base",
    "compute_resume_context",
    "compute_static_identities",
    "evaluate_profile_marks",
    "tier_label",
    "tier_points",
    "win_percentage",
    "z_score",
]
