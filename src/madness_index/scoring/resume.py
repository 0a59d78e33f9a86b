"""Résumé context: record and schedule strength as a small tiered adjustment.

The résumé index ``R`` is the mean of the entrant's win-percentage z-score
and schedule-hardness-percentile z-score.  ``R`` then maps to a fixed
adjustment that is added to the baseline rating.  Whenever the field or the
entrant lacks either input the adjustment is exactly 0 with tier "Average".
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from madness_index.config import ScoringConfig
from madness_index.ingest.schema import Entrant
from madness_index.scoring.field_stats import SCHEDULE_PCT, WIN_PCT, FieldStats, z_score
from madness_index.scoring.tiers import ABOVE_AVERAGE, AVERAGE, ELITE, FRAGILE, STRONG, WEAK, lookup

logger = logging.getLogger(__name__)

#: Stand-in for a zero wp / P standard deviation.
SD_FLOOR: float = 1e-5


@dataclass(frozen=True)
class ResumeContext:
    """Résumé layer output.

    Attributes:
        index: The blended index ``R`` (0 when neutral).
        adjustment: Amount added to MI_base.
        tier: Tier label for ``R``.
    """

    index: float
    adjustment: float
    tier: str

    @property
    def is_neutral(self) -> bool:
        return self.adjustment == 0.0 and self.tier == AVERAGE


NEUTRAL_RESUME = ResumeContext(index=0.0, adjustment=0.0, tier=AVERAGE)


def resume_tier_table(config: ScoringConfig) -> tuple[tuple[float, tuple[float, str]], ...]:
    """``R`` lower bound → ``(adjustment, tier)``, highest band first."""
    return (
        (1.00, (0.15, ELITE)),
        (0.80, (0.10, STRONG)),
        (0.60, (0.05, ABOVE_AVERAGE)),
        (0.00, (0.0, AVERAGE)),
        (-0.80, (config.resume_weak_adjustment, WEAK)),
        (-math.inf, (config.resume_fragile_adjustment, FRAGILE)),
    )


def resume_index(entrant: Entrant, field: FieldStats) -> float | None:
    """Blended record/schedule index ``R``, or ``None`` when inputs are missing."""
    wp_stats = field.get(WIN_PCT)
    p_stats = field.get(SCHEDULE_PCT)
    wp = field.value(entrant, WIN_PCT)
    p = field.value(entrant, SCHEDULE_PCT)
    if wp_stats is None or p_stats is None or wp is None or p is None:
        return None
    z_wp = z_score(wp, wp_stats.mean, wp_stats.sd or SD_FLOOR)
    z_p = z_score(p, p_stats.mean, p_stats.sd or SD_FLOOR)
    return (z_wp + z_p) / 2.0


def compute_resume_context(entrant: Entrant, field: FieldStats, config: ScoringConfig | None = None) -> ResumeContext:
    """Map *entrant*'s résumé index onto its tiered MI_base adjustment."""
    cfg = config or ScoringConfig()
    index = resume_index(entrant, field)
    if index is None:
        logger.debug("%s: résumé inputs missing, using neutral résumé", entrant.name)
        return NEUTRAL_RESUME
    adjustment, tier = lookup(resume_tier_table(cfg), index)
    return ResumeContext(index=index, adjustment=adjustment, tier=tier)
