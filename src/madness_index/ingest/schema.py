"""Pydantic v2 schema for tournament entrants.

:class:`Entrant` is the canonical, alias-resolved record the scoring engine
consumes.  Every statistic is optional: a missing value contributes a
neutral term wherever it is used.  Field names are the engine's canonical
metric keys (see :data:`METRIC_KEYS`).
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

#: Canonical numeric keys, in the order an ingestion collaborator should
#: present them.  ``w``, ``l`` and ``sos`` feed the résumé layer; everything
#: else is a per-possession or percentage statistic.
METRIC_KEYS: tuple[str, ...] = (
    # core efficiency
    "offeff",
    "defeff",
    "adjem",
    "ts",
    "efg",
    "tempo",
    "epr",
    "to",
    "def_efg",
    # scoring distribution
    "pct_pts_2",
    "pct_pts_3",
    "pct_pts_ft",
    # shooting and rates
    "threepp",
    "threepr",
    "ftr",
    "ft_pct",
    "scpg",
    "nb2",
    "orb",
    "drb",
    "blk",
    "spp",
    "opp_ast_poss",
    "otpp",
    "opp_ftr",
    "opp_3pp",
    "opp_3pr",
    # résumé
    "close_win_pct",
    "w",
    "l",
    "sos",
)


class Entrant(BaseModel):
    """One tournament participant and its raw statistics."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., min_length=1)
    seed: int | None = Field(default=None, ge=1, le=16)

    offeff: float | None = None
    defeff: float | None = None
    adjem: float | None = None
    ts: float | None = None
    efg: float | None = None
    tempo: float | None = None
    epr: float | None = None
    to: float | None = None
    def_efg: float | None = None

    pct_pts_2: float | None = None
    pct_pts_3: float | None = None
    pct_pts_ft: float | None = None

    threepp: float | None = None
    threepr: float | None = None
    ftr: float | None = None
    ft_pct: float | None = None
    scpg: float | None = None
    nb2: float | None = None
    orb: float | None = None
    drb: float | None = None
    blk: float | None = None
    spp: float | None = None
    opp_ast_poss: float | None = None
    otpp: float | None = None
    opp_ftr: float | None = None
    opp_3pp: float | None = None
    opp_3pr: float | None = None

    close_win_pct: float | None = None
    w: float | None = None
    l: float | None = None  # noqa: E741
    sos: float | None = None

    @field_validator(*METRIC_KEYS)
    @classmethod
    def _non_finite_to_none(cls, value: float | None) -> float | None:
        if value is not None and not math.isfinite(value):
            return None
        return value

    def metric(self, key: str) -> float | None:
        """Return the raw value for canonical *key* (``None`` when absent or unknown)."""
        if key not in METRIC_KEYS:
            return None
        value: float | None = getattr(self, key)
        return value
