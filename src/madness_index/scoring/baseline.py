"""Baseline rating (MI_base): the matchup-independent power rating."""

from __future__ import annotations

from madness_index.scoring.breadth import BreadthResult
from madness_index.scoring.core import CoreTraits
from madness_index.scoring.resume import ResumeContext


def compute_mi_base(core: CoreTraits, breadth: BreadthResult, resume: ResumeContext) -> float:
    """``mibs + breadth bonus + résumé adjustment``.

    Pure: the same inputs always give the same rating.
    """
    return core.mibs + breadth.bonus + resume.adjustment
