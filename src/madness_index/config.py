"""Scoring configuration.

:class:`ScoringConfig` pins down the handful of values that differ between
engine revisions.  Defaults reproduce the v3.2 engine exactly: résumé
penalties of -0.05 (Weak) / -0.10 (Fragile) and interaction leverage added
to the baseline rating unscaled.  Later-revision values (-0.15 / -0.25,
tier-scaled leverage) are only ever applied when passed explicitly.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TIER_NAMES: tuple[str, ...] = ("Elite", "Strong", "Above Average", "Average", "Weak", "Fragile")


def _unit_multipliers() -> dict[str, float]:
    return {tier: 1.0 for tier in TIER_NAMES}


class ScoringConfig(BaseModel):
    """Revision-dependent scoring constants.

    Attributes:
        revision: Free-form tag recorded alongside results.
        resume_weak_adjustment: Résumé adjustment for ``-0.80 <= R < 0``.
        resume_fragile_adjustment: Résumé adjustment for ``R < -0.80``.
        leverage_multipliers: Résumé tier → factor applied to an entrant's
            interaction total before it is added to MI_base.  Missing tiers
            default to ``1.0``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    revision: Literal["v3.2", "custom"] = "v3.2"
    resume_weak_adjustment: float = Field(default=-0.05, le=0.0)
    resume_fragile_adjustment: float = Field(default=-0.10, le=0.0)
    leverage_multipliers: dict[str, float] = Field(default_factory=_unit_multipliers)

    @field_validator("leverage_multipliers")
    @classmethod
    def _check_tiers(cls, value: dict[str, float]) -> dict[str, float]:
        unknown = sorted(set(value) - set(TIER_NAMES))
        if unknown:
            msg = f"Unknown résumé tier(s) in leverage_multipliers: {unknown}. Valid: {list(TIER_NAMES)}"
            raise ValueError(msg)
        merged = _unit_multipliers()
        merged.update(value)
        return merged

    def leverage_multiplier(self, tier: str) -> float:
        """Return the leverage factor for résumé *tier* (``1.0`` when unknown)."""
        return self.leverage_multipliers.get(tier, 1.0)

    @classmethod
    def from_json(cls, path: Path) -> ScoringConfig:
        """Load and validate a JSON override file.

        Keys not present in the file keep their v3.2 defaults, and
        ``revision`` becomes ``"custom"`` unless the file sets it.
        """
        override = json.loads(path.read_text())
        override.setdefault("revision", "custom")
        return cls(**override)
