"""Favorite / Cinderella identity role of an entrant within one game.

The role decides which static identity index (FAS for a favorite, CIS for a
Cinderella) is the headline for that side.  It never affects the winner.
"""

from __future__ import annotations

import enum

from madness_index.matchup.bracket import CHAMP, E8, F4, R64, S16


class IdentityRole(enum.Enum):
    FAVORITE = "FAVORITE"
    CINDERELLA = "CINDERELLA"
    NEUTRAL = "NEUTRAL"


#: Canonical first-round pairs with a fixed role for the lower seed.
_R64_FAVORITE_PAIRS: frozenset[tuple[int, int]] = frozenset({(1, 16), (2, 15), (3, 14), (4, 13), (5, 12), (6, 11), (7, 10)})
_R64_NEUTRAL_PAIRS: frozenset[tuple[int, int]] = frozenset({(8, 9)})
_DEEP_ROUNDS: frozenset[str] = frozenset({S16, E8, F4, CHAMP})


def get_identity_role(seed: int | None, opponent_seed: int | None, round_code: str | None = None) -> IdentityRole:
    """Role of the entrant seeded *seed* against *opponent_seed*.

    Args:
        seed: The entrant's seed.
        opponent_seed: The opponent's seed.
        round_code: Round being played; defaults to ``R64``.

    Returns:
        ``NEUTRAL`` when either seed is unknown or the seeds are equal, the
        fixed role for canonical first-round pairs (8 vs 9 is neutral),
        otherwise ``FAVORITE`` for the lower seed and ``CINDERELLA`` for an
        underdog seeded 7 or worse, or a 6 seed in the Sweet Sixteen or
        later.
    """
    if seed is None or opponent_seed is None:
        return IdentityRole.NEUTRAL
    round_code = round_code or R64
    pair = (min(seed, opponent_seed), max(seed, opponent_seed))

    if round_code == R64:
        if pair in _R64_NEUTRAL_PAIRS:
            return IdentityRole.NEUTRAL
        if pair in _R64_FAVORITE_PAIRS:
            return IdentityRole.FAVORITE if seed == pair[0] else IdentityRole.CINDERELLA

    if seed == opponent_seed:
        return IdentityRole.NEUTRAL
    if seed < opponent_seed:
        return IdentityRole.FAVORITE
    if seed >= 7:
        return IdentityRole.CINDERELLA
    if seed == 6 and round_code in _DEEP_ROUNDS:
        return IdentityRole.CINDERELLA
    return IdentityRole.NEUTRAL
