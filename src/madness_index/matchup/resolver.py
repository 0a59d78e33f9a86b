"""Matchup resolver: MI_base plus interaction leverage, winner, margin and lean."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from madness_index.config import ScoringConfig
from madness_index.matchup.bracket import SeedRoundMeta, get_seed_round_meta
from madness_index.matchup.interactions import InteractionResult, compute_interactions
from madness_index.matchup.roles import IdentityRole, get_identity_role
from madness_index.scoring.field_stats import FieldStats
from madness_index.scoring.profile import EntrantProfile
from madness_index.utils.logger import VERBOSE

logger = logging.getLogger(__name__)

#: Upper bounds (exclusive) of the lean bands on ``|margin|``.
LEAN_BANDS: tuple[tuple[float, str], ...] = (
    (0.10, "Toss-Up"),
    (0.25, "Very Slight Lean"),
    (0.50, "Lean"),
    (0.80, "Strong Lean"),
)
HEAVY_LEAN = "Heavy Lean"


class Outcome(enum.Enum):
    A = "A"
    B = "B"
    PUSH = "PUSH"


def get_lean_band(margin: float) -> str:
    """Classify ``|margin|`` into a lean band."""
    magnitude = abs(margin)
    for bound, label in LEAN_BANDS:
        if magnitude < bound:
            return label
    return HEAVY_LEAN


def active_identity_score(profile: EntrantProfile, role: IdentityRole) -> float | None:
    """FAS for a favorite, CIS for a Cinderella, nothing for a neutral side."""
    if profile.identity is None:
        return None
    if role is IdentityRole.FAVORITE:
        return profile.identity.fas
    if role is IdentityRole.CINDERELLA:
        return profile.identity.cis
    return None


@dataclass(frozen=True)
class MatchupResult:
    """Resolved head-to-head comparison of two profiles.

    Attributes:
        profile_a: Side A.
        profile_b: Side B.
        round_code: Round context, if any.
        seed_meta: Bracket compatibility of the two seeds; ``None`` when
            either seed is unknown.  Informational only.
        interactions: Full interaction output for ``(a, b)``.
        multiplier_a: Leverage factor applied to A's interaction total.
        multiplier_b: Leverage factor applied to B's interaction total.
        final_a: ``mi_base_a + multiplier_a * total_a``.
        final_b: ``mi_base_b + multiplier_b * total_b``.
        margin: ``final_a - final_b``.
        outcome: Which side wins, or ``PUSH``.
        winner: Winning entrant name, ``None`` on a push.
        lean: Lean band of ``|margin|``.
        role_a: A's identity role in this game.
        role_b: B's identity role in this game.
        identity_a: A's active identity score (FAS or CIS), if any.
        identity_b: B's active identity score (FAS or CIS), if any.
    """

    profile_a: EntrantProfile
    profile_b: EntrantProfile
    round_code: str | None
    seed_meta: SeedRoundMeta | None
    interactions: InteractionResult
    multiplier_a: float
    multiplier_b: float
    final_a: float
    final_b: float
    margin: float
    outcome: Outcome
    winner: str | None
    lean: str
    role_a: IdentityRole
    role_b: IdentityRole
    identity_a: float | None
    identity_b: float | None

    @property
    def is_push(self) -> bool:
        return self.outcome is Outcome.PUSH


def resolve_matchup(
    profile_a: EntrantProfile,
    profile_b: EntrantProfile,
    field_stats: FieldStats,
    round_code: str | None = None,
    config: ScoringConfig | None = None,
) -> MatchupResult:
    """Compare two scored entrants.

    Interactions are computed once for the ordered pair.  Each side's final
    score is its MI_base plus its interaction total scaled by the leverage
    multiplier of its résumé tier.  The round context and seed topology are
    attached for display and never change the result.

    Args:
        profile_a: Side A.
        profile_b: Side B.
        field_stats: Snapshot both profiles were scored against.
        round_code: Optional round context.
        config: Scoring configuration; v3.2 defaults when omitted.

    Returns:
        The resolved :class:`MatchupResult`.
    """
    cfg = config or ScoringConfig()
    interactions = compute_interactions(
        profile_a.entrant,
        profile_b.entrant,
        field_stats,
        marks_a=profile_a.marks,
        marks_b=profile_b.marks,
    )
    multiplier_a = cfg.leverage_multiplier(profile_a.resume.tier)
    multiplier_b = cfg.leverage_multiplier(profile_b.resume.tier)
    final_a = profile_a.mi_base + multiplier_a * interactions.total_a
    final_b = profile_b.mi_base + multiplier_b * interactions.total_b
    margin = final_a - final_b

    if final_a > final_b:
        outcome, winner = Outcome.A, profile_a.name
    elif final_b > final_a:
        outcome, winner = Outcome.B, profile_b.name
    else:
        outcome, winner = Outcome.PUSH, None

    seed_meta = None
    if profile_a.seed is not None and profile_b.seed is not None:
        seed_meta = get_seed_round_meta(profile_a.seed, profile_b.seed, round_code)
        if round_code is not None and not seed_meta.is_allowed:
            logger.info(
                "Seeds %d and %d cannot meet in %s (possible: %s)",
                profile_a.seed,
                profile_b.seed,
                round_code,
                ", ".join(seed_meta.possible),
            )

    role_a = get_identity_role(profile_a.seed, profile_b.seed, round_code)
    role_b = get_identity_role(profile_b.seed, profile_a.seed, round_code)

    logger.log(
        VERBOSE,
        "%s %.4f vs %s %.4f -> %s",
        profile_a.name,
        final_a,
        profile_b.name,
        final_b,
        winner or "push",
    )
    return MatchupResult(
        profile_a=profile_a,
        profile_b=profile_b,
        round_code=round_code,
        seed_meta=seed_meta,
        interactions=interactions,
        multiplier_a=multiplier_a,
        multiplier_b=multiplier_b,
        final_a=final_a,
        final_b=final_b,
        margin=margin,
        outcome=outcome,
        winner=winner,
        lean=get_lean_band(margin),
        role_a=role_a,
        role_b=role_b,
        identity_a=active_identity_score(profile_a, role_a),
        identity_b=active_identity_score(profile_b, role_b),
    )
