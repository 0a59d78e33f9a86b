"""Head-to-head layers: bracket topology, interactions, identity roles and the resolver."""

from __future__ import annotations

from madness_index.matchup.bracket import (
    ROUND_LABELS,
    ROUND_ORDER,
    SeedRoundMeta,
    get_intra_region_round,
    get_possible_rounds_for_seeds,
    get_round_label,
    get_seed_round_meta,
    is_round_possible_for_seeds,
    parse_round,
)
from madness_index.matchup.interactions import (
    CATEGORIES,
    CATEGORY_TAGS,
    InteractionEntry,
    InteractionResult,
    compute_interactions,
    half_mirrored_adjust,
)
from madness_index.matchup.resolver import MatchupResult, Outcome, get_lean_band, resolve_matchup
from madness_index.matchup.roles import IdentityRole, get_identity_role

__all__ = [
    "CATEGORIES",
    "CATEGORY_TAGS",
    "ROUND_LABELS",
    "ROUND_ORDER",
    "IdentityRole",
    "InteractionEntry",
    "InteractionResult",
    "MatchupResult",
    "Outcome",
    "SeedRoundMeta",
    "compute_interactions",
    "get_identity_role",
    "get_intra_region_round",
    "get_lean_band",
    "get_possible_rounds_for_seeds",
    "get_round_label",
    "get_seed_round_meta",
    "half_mirrored_adjust",
    "is_round_possible_for_seeds",
    "parse_round",
    "resolve_matchup",
]
