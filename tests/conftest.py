"""Shared pytest fixtures for the madness_index test suite.

The synthetic field is four entrants whose core metrics take one of two
values each, placed symmetrically about the mean, so every core z-score is
exactly +1 or -1 and composites can be checked by hand.

=========  ======  ======  =====  =====  =====  =======  =====  =====
Entrant    offeff  defeff  adjem  ts     efg    def_efg  epr    to
=========  ======  ======  =====  =====  =====  =======  =====  =====
Alpha      +1      +1      +1     +1     +1     +1       +1     +1
Bravo      +1      -1      -1     -1     -1     -1       -1     -1
Charlie    -1      +1      -1     -1     +1     -1       -1     +1
Delta      -1      -1      +1     +1     -1     +1       +1     -1
=========  ======  ======  =====  =====  =====  =======  =====  =====

(z-scores after inversion of defeff, def_efg and to.)
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from madness_index.engine import MadnessIndexEngine
from madness_index.ingest.loader import entrants_from_records
from madness_index.ingest.schema import Entrant

_PACKAGE_LOGGER = "madness_index"

#: Shared non-core statistics; identical across the field unless overridden.
_SHARED: dict[str, float] = {
    "tempo": 68.0,
    "pct_pts_2": 0.50,
    "pct_pts_3": 0.32,
    "pct_pts_ft": 0.18,
    "threepp": 0.35,
    "threepr": 0.36,
    "ftr": 0.32,
    "ft_pct": 0.72,
    "scpg": 2.0,
    "nb2": 0.45,
    "orb": 0.30,
    "drb": 0.70,
    "blk": 0.10,
    "spp": 0.09,
    "opp_ast_poss": 0.50,
    "otpp": 0.18,
    "opp_ftr": 0.30,
    "opp_3pp": 0.33,
    "opp_3pr": 0.38,
}

FIELD_ROWS: list[dict[str, object]] = [
    {
        "name": "Alpha",
        "seed": 1,
        "offeff": 101.0,
        "defeff": 95.0,
        "adjem": 20.0,
        "ts": 0.57,
        "efg": 0.53,
        "def_efg": 0.48,
        "epr": 1.02,
        "to": 0.15,
        "w": 30,
        "l": 4,
        "sos": 1.0,
        **_SHARED,
    },
    {
        "name": "Bravo",
        "seed": 8,
        "offeff": 101.0,
        "defeff": 97.0,
        "adjem": 18.0,
        "ts": 0.55,
        "efg": 0.51,
        "def_efg": 0.50,
        "epr": 0.98,
        "to": 0.17,
        "w": 25,
        "l": 9,
        "sos": 2.0,
        **_SHARED,
    },
    {
        "name": "Charlie",
        "seed": 9,
        "offeff": 99.0,
        "defeff": 95.0,
        "adjem": 18.0,
        "ts": 0.55,
        "efg": 0.53,
        "def_efg": 0.50,
        "epr": 0.98,
        "to": 0.15,
        "w": 20,
        "l": 14,
        "sos": 3.0,
        **_SHARED,
    },
    {
        "name": "Delta",
        "seed": 16,
        "offeff": 99.0,
        "defeff": 97.0,
        "adjem": 20.0,
        "ts": 0.57,
        "efg": 0.51,
        "def_efg": 0.48,
        "epr": 1.02,
        "to": 0.17,
        "w": 15,
        "l": 19,
        "sos": 4.0,
        **_SHARED,
    },
]

#: Human-facing CSV headers for each canonical key, as a stats sheet would label them.
CSV_HEADERS: dict[str, str] = {
    "name": "Team",
    "seed": "Seed",
    "offeff": "Off Eff",
    "defeff": "Def Eff",
    "adjem": "AdjEM",
    "ts": "TS%",
    "efg": "eFG%",
    "def_efg": "Def. eFG%",
    "epr": "EPR",
    "to": "TO%",
    "w": "Wins",
    "l": "Losses",
    "sos": "Strength of Schedule",
    "tempo": "Tempo",
    "pct_pts_2": "% of Points from 2",
    "pct_pts_3": "% of Points from 3",
    "pct_pts_ft": "% of Points from FT",
    "threepp": "3P%",
    "threepr": "3P Rate",
    "ftr": "FTR",
    "ft_pct": "FT%",
    "scpg": "Extra Scoring Chances/Game",
    "nb2": "Non-Blocked 2PT%",
    "orb": "ORB%",
    "drb": "DRB%",
    "blk": "Block%",
    "spp": "Steals per Possession",
    "opp_ast_poss": "Opp Asst/Poss",
    "otpp": "Opp TO/Poss",
    "opp_ftr": "Opp FTA/FGA",
    "opp_3pp": "Opp 3P%",
    "opp_3pr": "Opp 3P Rate",
}


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo ``configure_logging`` so caplog sees records in every test."""
    yield
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def field_rows() -> list[dict[str, object]]:
    """Canonical-key records for the four-entrant synthetic field."""
    return [dict(row) for row in FIELD_ROWS]


@pytest.fixture
def field_entrants(field_rows: list[dict[str, object]]) -> list[Entrant]:
    return entrants_from_records(field_rows)


@pytest.fixture
def loaded_engine(field_entrants: list[Entrant]) -> MadnessIndexEngine:
    """Engine with the synthetic field loaded under default configuration."""
    engine = MadnessIndexEngine()
    engine.load(field_entrants)
    return engine


@pytest.fixture
def field_csv(tmp_path: Path, field_rows: list[dict[str, object]]) -> Path:
    """The synthetic field written as a CSV with human-facing headers.

    Percent columns are written on a 0–100 scale to exercise normalization.
    """
    from madness_index.ingest.loader import PERCENT_KEYS

    path = tmp_path / "field.csv"
    keys = list(CSV_HEADERS)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow([CSV_HEADERS[key] for key in keys])
        for row in field_rows:
            cells = []
            for key in keys:
                value = row[key]
                if key in PERCENT_KEYS and isinstance(value, float):
                    value = round(value * 100, 4)
                cells.append(value)
            writer.writerow(cells)
    return path
