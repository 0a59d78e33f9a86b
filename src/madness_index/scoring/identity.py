"""Static identity layer: Cinderella Identity (CIS) and Favorite Authenticity (FAS).

Both indices describe how well an entrant's seed lines up with how it
actually rates, and are computed once per dataset load over the whole
field:

1. Rank entrants by MI_base ascending; performance percentile
   ``P = (rank + 0.5) / N``.  A cosmetic 1–99 rating is ``round(100 * P)``.
2. For seed ``s``: favorite index ``Sf = (17 - s) / 16``, underdog index
   ``Su = (s - 1) / 16``; ``delta = P - Sf``.
3. Core fractions over the eight core z-scores: strong (z ≥ 0.80) and weak
   (z < 0.50).
4. ``rawCIS = Su * (0.60 * max(0, delta) + 0.25 * coreBonusCIS + 0.15 * boost)``
   and ``rawFAS = Sf * (0.50 * (1 - |delta|) + 0.30 * coreBonusFAS + 0.20 * boost)``
   with ``boost = 0.5 + résumé adjustment / 4``.
5. Normalize each by the field's largest positive raw value, × 100.

The indices are narrative only and never feed MI_base or interactions.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from madness_index.errors import EmptyFieldError

STRONG_Z: float = 0.80
WEAK_Z: float = 0.50
_EPS: float = 1e-6


@dataclass(frozen=True)
class IdentityInput:
    """What the identity layer needs from one scored entrant."""

    name: str
    seed: int | None
    mi_base: float
    core_z: Mapping[str, float]
    resume_adjustment: float


@dataclass(frozen=True)
class IdentityScores:
    """Identity layer output for one entrant.

    Attributes:
        performance_percentile: Rank percentile of MI_base in the field.
        rating: Cosmetic 1–99 rating.
        cis: Cinderella Identity Score, 0–100 (0 when unseeded).
        fas: Favorite Authenticity Score, 0–100 (0 when unseeded).
        cis_raw: Pre-normalization CIS.
        fas_raw: Pre-normalization FAS.
        strong_count: Core metrics with z ≥ 0.80.
        weak_count: Core metrics with z < 0.50.
    """

    performance_percentile: float
    rating: int
    cis: float
    fas: float
    cis_raw: float
    fas_raw: float
    strong_count: int
    weak_count: int


def cosmetic_rating(percentile: float) -> int:
    """``round(100 * percentile)`` (halves round up), clamped to ``[1, 99]``."""
    return min(99, max(1, math.floor(percentile * 100 + 0.5)))


def core_fractions(core_z: Mapping[str, float]) -> tuple[float, float, int, int]:
    """Return ``(f_strong, f_weak, strong_count, weak_count)`` over *core_z*."""
    if not core_z:
        return 0.0, 0.0, 0, 0
    strong = sum(1 for z in core_z.values() if z >= STRONG_Z)
    weak = sum(1 for z in core_z.values() if z < WEAK_Z)
    total = len(core_z)
    return strong / total, weak / total, strong, weak


def _normalize(raw: float, field_max: float) -> float:
    if field_max > _EPS and raw > 0:
        return raw / field_max * 100.0
    return 0.0


def compute_static_identities(entries: Sequence[IdentityInput]) -> dict[str, IdentityScores]:
    """Compute CIS / FAS and the cosmetic rating for the whole field.

    Args:
        entries: Every loaded entrant, with MI_base already computed.

    Returns:
        Entrant name → :class:`IdentityScores`.

    Raises:
        EmptyFieldError: If *entries* is empty.
    """
    n = len(entries)
    if n == 0:
        msg = "Cannot compute identities for an empty field"
        raise EmptyFieldError(msg)

    ranked = sorted(entries, key=lambda entry: entry.mi_base)
    percentile = {entry.name: (idx + 0.5) / n for idx, entry in enumerate(ranked)}

    raw: dict[str, tuple[float, float, int, int]] = {}
    for entry in entries:
        f_strong, f_weak, strong, weak = core_fractions(entry.core_z)
        if entry.seed is None:
            raw[entry.name] = (0.0, 0.0, strong, weak)
            continue
        p = percentile[entry.name]
        favorite = (17 - entry.seed) / 16
        underdog = (entry.seed - 1) / 16
        delta = p - favorite
        boost = 0.5 + entry.resume_adjustment / 4
        bonus_cis = max(0.0, f_strong - 0.5 * f_weak)
        bonus_fas = f_strong * (1 - f_weak)
        cis_raw = underdog * (0.60 * max(0.0, delta) + 0.25 * bonus_cis + 0.15 * boost)
        fas_raw = favorite * (0.50 * (1 - abs(delta)) + 0.30 * bonus_fas + 0.20 * boost)
        raw[entry.name] = (cis_raw, fas_raw, strong, weak)

    cis_max = max((values[0] for values in raw.values()), default=0.0)
    fas_max = max((values[1] for values in raw.values()), default=0.0)

    scores: dict[str, IdentityScores] = {}
    for entry in entries:
        cis_raw, fas_raw, strong, weak = raw[entry.name]
        p = percentile[entry.name]
        scores[entry.name] = IdentityScores(
            performance_percentile=p,
            rating=cosmetic_rating(p),
            cis=_normalize(cis_raw, cis_max),
            fas=_normalize(fas_raw, fas_max),
            cis_raw=cis_raw,
            fas_raw=fas_raw,
            strong_count=strong,
            weak_count=weak,
        )
    return scores
