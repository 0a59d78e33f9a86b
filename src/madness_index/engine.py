"""Engine façade holding the loaded dataset snapshot.

:class:`MadnessIndexEngine` owns exactly one snapshot at a time: the loaded
entrants, the field statistics computed over them, and every entrant's
profile.  :meth:`MadnessIndexEngine.load` rebuilds all three from scratch
and swaps them in together; comparisons are computed on demand against
whatever snapshot is current.

Example::

    engine = MadnessIndexEngine()
    engine.load(load_entrants_csv(Path("field.csv")))
    result = engine.compare("Houston", "Duke", round_code="E8")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
import pandas as pd  # type: ignore[import-untyped]

from madness_index.config import ScoringConfig
from madness_index.errors import EmptyFieldError, EntrantNotFoundError
from madness_index.ingest.schema import Entrant
from madness_index.matchup.bracket import parse_round
from madness_index.matchup.resolver import MatchupResult, resolve_matchup
from madness_index.scoring.field_stats import FieldStats, compute_field_stats
from madness_index.scoring.identity import compute_static_identities
from madness_index.scoring.marks import Severity
from madness_index.scoring.profile import EntrantProfile, attach_identity, score_entrant

logger = logging.getLogger(__name__)

RANKING_COLUMNS: tuple[str, ...] = (
    "rank",
    "name",
    "seed",
    "mi_base",
    "mibs",
    "breadth",
    "resume_adjustment",
    "resume_tier",
    "rating",
    "cis",
    "fas",
    "severe_marks",
    "moderate_marks",
)


def _coerce(record: Entrant | Mapping[str, Any]) -> Entrant:
    if isinstance(record, Entrant):
        return record
    return Entrant.model_validate(dict(record))


class MadnessIndexEngine:
    """Scores one dataset snapshot and resolves comparisons against it.

    Args:
        config: Scoring configuration; v3.2 defaults when omitted.
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or ScoringConfig()
        self._field_stats: FieldStats | None = None
        self._profiles: dict[str, EntrantProfile] = {}

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def load(self, entrants: Iterable[Entrant | Mapping[str, Any]]) -> None:
        """Replace the current snapshot with *entrants*.

        Entrants sharing a name are collapsed to the last occurrence.

        Raises:
            EmptyFieldError: If *entrants* is empty.
        """
        by_name: dict[str, Entrant] = {}
        for record in entrants:
            entrant = _coerce(record)
            if entrant.name in by_name:
                logger.warning("Duplicate entrant %r; keeping the last row", entrant.name)
                del by_name[entrant.name]
            by_name[entrant.name] = entrant
        if not by_name:
            msg = "Cannot load an empty field; at least one entrant is required"
            raise EmptyFieldError(msg)

        field_stats = compute_field_stats(list(by_name.values()))
        profiles = {name: score_entrant(entrant, field_stats, self.config) for name, entrant in by_name.items()}
        identities = compute_static_identities([profile.identity_input() for profile in profiles.values()])
        profiles = {name: attach_identity(profile, identities[name]) for name, profile in profiles.items()}

        self._field_stats = field_stats
        self._profiles = profiles
        logger.info(
            "Loaded %d entrants (%d metrics tracked, revision %s)",
            len(profiles),
            len(field_stats.metrics),
            self.config.revision,
        )

    @property
    def is_loaded(self) -> bool:
        return self._field_stats is not None

    @property
    def field_stats(self) -> FieldStats:
        """Field statistics of the current snapshot.

        Raises:
            EmptyFieldError: If nothing has been loaded.
        """
        if self._field_stats is None:
            msg = "No entrants loaded; call load() first"
            raise EmptyFieldError(msg)
        return self._field_stats

    def names(self) -> list[str]:
        return list(self._profiles)

    def profile(self, name: str) -> EntrantProfile:
        """Return the scored profile for *name*.

        Raises:
            EmptyFieldError: If nothing has been loaded.
            EntrantNotFoundError: If *name* is not in the snapshot.
        """
        _ = self.field_stats
        try:
            return self._profiles[name]
        except KeyError:
            msg = f"Entrant {name!r} is not in the loaded field"
            raise EntrantNotFoundError(msg) from None

    def profiles(self) -> list[EntrantProfile]:
        """All profiles, highest MI_base first."""
        _ = self.field_stats
        return sorted(self._profiles.values(), key=lambda profile: profile.mi_base, reverse=True)

    # ------------------------------------------------------------------
    # Comparisons
    # ------------------------------------------------------------------

    def compare(self, name_a: str, name_b: str, round_code: str | None = None) -> MatchupResult:
        """Resolve *name_a* vs *name_b*, optionally in the context of a round.

        Raises:
            EmptyFieldError: If nothing has been loaded.
            EntrantNotFoundError: If either name is not in the snapshot.
            ValueError: If *round_code* is not a known round.
        """
        profile_a = self.profile(name_a)
        profile_b = self.profile(name_b)
        code = parse_round(round_code) if round_code is not None else None
        return resolve_matchup(profile_a, profile_b, self.field_stats, code, self.config)

    def rankings(self) -> pd.DataFrame:
        """Per-entrant ratings as a DataFrame ordered by MI_base (rank 1 first)."""
        rows = []
        for profile in self.profiles():
            identity = profile.identity
            rows.append(
                {
                    "name": profile.name,
                    "seed": profile.seed if profile.seed is not None else np.nan,
                    "mi_base": profile.mi_base,
                    "mibs": profile.mibs,
                    "breadth": profile.breadth.bonus,
                    "resume_adjustment": profile.resume.adjustment,
                    "resume_tier": profile.resume.tier,
                    "rating": identity.rating if identity is not None else np.nan,
                    "cis": identity.cis if identity is not None else np.nan,
                    "fas": identity.fas if identity is not None else np.nan,
                    "severe_marks": profile.marks.count(Severity.SEVERE),
                    "moderate_marks": profile.marks.count(Severity.MODERATE),
                }
            )
        frame = pd.DataFrame(rows)
        frame.insert(0, "rank", np.arange(1, len(frame) + 1))
        return frame.loc[:, list(RANKING_COLUMNS)]
