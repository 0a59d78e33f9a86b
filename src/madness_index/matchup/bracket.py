"""Seed-pair bracket topology.

Within one region the sixteen seeds fall into four pods of four, two pods
per half:

    Pod A (top half):     1, 16, 8, 9
    Pod B (top half):     5, 12, 4, 13
    Pod C (bottom half):  6, 11, 3, 14
    Pod D (bottom half):  7, 10, 2, 15

Two distinct seeds placed in the same region meet in exactly one round:
R64 if they are a first-round pairing, R32 if they share a pod, S16 if
their pods share a half, E8 otherwise.  Any two entrants may also be drawn
into different regions, where they can only meet in the Final Four or the
Championship.  Equal seeds can never share a region.
"""

from __future__ import annotations

from dataclasses import dataclass

R64 = "R64"
R32 = "R32"
S16 = "S16"
E8 = "E8"
F4 = "F4"
CHAMP = "Champ"

#: Round codes in tournament order.
ROUND_ORDER: tuple[str, ...] = (R64, R32, S16, E8, F4, CHAMP)

ROUND_LABELS: dict[str, str] = {
    R64: "Round of 64",
    R32: "Round of 32",
    S16: "Sweet Sixteen",
    E8: "Elite Eight",
    F4: "Final Four",
    CHAMP: "Championship",
}

#: First-round seed pairings in bracket order.
R64_PAIRINGS: tuple[tuple[int, int], ...] = (
    (1, 16),
    (8, 9),
    (5, 12),
    (4, 13),
    (6, 11),
    (3, 14),
    (7, 10),
    (2, 15),
)

_POD_SEEDS: dict[str, tuple[int, ...]] = {
    "A": (1, 16, 8, 9),
    "B": (5, 12, 4, 13),
    "C": (6, 11, 3, 14),
    "D": (7, 10, 2, 15),
}
_SEED_POD: dict[int, str] = {seed: pod for pod, seeds in _POD_SEEDS.items() for seed in seeds}
_POD_HALF: dict[str, str] = {"A": "top", "B": "top", "C": "bottom", "D": "bottom"}
_FIRST_ROUND: frozenset[frozenset[int]] = frozenset(frozenset(pair) for pair in R64_PAIRINGS)
_CROSS_REGION: tuple[str, ...] = (F4, CHAMP)


@dataclass(frozen=True)
class SeedRoundMeta:
    """Bracket compatibility of a seed pair with a queried round.

    Attributes:
        seed_a: First seed.
        seed_b: Second seed.
        possible: Rounds in which the pair could meet, in tournament order.
        round_code: The queried round (``None`` when no round was given).
        is_allowed: ``True`` when *round_code* is in *possible*.
        earliest: Earliest possible round.
    """

    seed_a: int
    seed_b: int
    possible: tuple[str, ...]
    round_code: str | None
    is_allowed: bool
    earliest: str | None


def parse_round(code: str) -> str:
    """Return the canonical round code for *code* (case-insensitive).

    Raises:
        ValueError: If *code* is not a known round.
    """
    for known in ROUND_ORDER:
        if code.strip().lower() == known.lower():
            return known
    msg = f"Unknown round {code!r}. Valid rounds: {', '.join(ROUND_ORDER)}"
    raise ValueError(msg)


def get_round_label(code: str | None) -> str:
    """Display label for a round code ("Select Round" when unknown)."""
    if code is None:
        return "Select Round"
    return ROUND_LABELS.get(code, "Select Round")


def get_seed_pod(seed: int) -> str | None:
    return _SEED_POD.get(seed)


def is_first_round_pair(seed_a: int, seed_b: int) -> bool:
    return frozenset((seed_a, seed_b)) in _FIRST_ROUND


def get_intra_region_round(seed_a: int, seed_b: int) -> str | None:
    """The unique round two seeds meet in when placed in the same region.

    Returns:
        ``None`` for equal seeds or seeds outside 1–16.
    """
    if seed_a == seed_b:
        return None
    pod_a, pod_b = get_seed_pod(seed_a), get_seed_pod(seed_b)
    if pod_a is None or pod_b is None:
        return None
    if is_first_round_pair(seed_a, seed_b):
        return R64
    if pod_a == pod_b:
        return R32
    if _POD_HALF[pod_a] == _POD_HALF[pod_b]:
        return S16
    return E8


def get_possible_rounds_for_seeds(seed_a: int, seed_b: int) -> tuple[str, ...]:
    """All rounds the pair could meet in across every valid draw, in tournament order."""
    possible = set(_CROSS_REGION)
    intra = get_intra_region_round(seed_a, seed_b)
    if intra is not None:
        possible.add(intra)
    return tuple(code for code in ROUND_ORDER if code in possible)


def is_round_possible_for_seeds(seed_a: int, seed_b: int, round_code: str | None) -> bool:
    return round_code in get_possible_rounds_for_seeds(seed_a, seed_b)


def get_seed_round_meta(seed_a: int, seed_b: int, round_code: str | None = None) -> SeedRoundMeta:
    """Describe which rounds the seed pair can meet in and whether *round_code* is one of them."""
    possible = get_possible_rounds_for_seeds(seed_a, seed_b)
    return SeedRoundMeta(
        seed_a=seed_a,
        seed_b=seed_b,
        possible=possible,
        round_code=round_code,
        is_allowed=round_code in possible,
        earliest=possible[0] if possible else None,
    )
