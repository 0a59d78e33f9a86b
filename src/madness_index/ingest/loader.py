"""CSV ingestion for entrant statistics.

Turns a team-statistics sheet into canonical :class:`Entrant` records:

* headers are normalized (trimmed, lower-cased, ``%`` → ``pct``, ``. - _ /``
  → spaces, whitespace collapsed) and looked up in :data:`HEADER_MAP`;
* numeric cells are parsed with thousands separators stripped; anything
  unparsable or non-finite becomes ``None``;
* percent-like columns given on a 0–100 scale are rescaled to 0–1;
* rows without a team name are dropped.

This layer sits outside the scoring core: it may reject a malformed sheet
(missing team column, seed outside 1–16) but never alters how the engine
scores the records it produces.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd  # type: ignore[import-untyped]
import pandera.pandas as pa

from madness_index.ingest.schema import METRIC_KEYS, Entrant

logger = logging.getLogger(__name__)

#: Normalized header → canonical key.
HEADER_MAP: dict[str, str] = {
    # identity
    "team": "name",
    "team name": "name",
    "teamname": "name",
    "school": "name",
    "school name": "name",
    "seed": "seed",
    # core
    "off eff": "offeff",
    "offeff": "offeff",
    "adjoe": "offeff",
    "offensive efficiency": "offeff",
    "def eff": "defeff",
    "defeff": "defeff",
    "adjde": "defeff",
    "defensive efficiency": "defeff",
    "efficiency margin": "adjem",
    "adjem": "adjem",
    "true shooting pct": "ts",
    "ts pct": "ts",
    "efg": "efg",
    "efg pct": "efg",
    "efgpct": "efg",
    "tempo": "tempo",
    "pace": "tempo",
    "effective possession ratio": "epr",
    "epr": "epr",
    "to pct": "to",
    "tov pct": "to",
    "topct": "to",
    "tovpct": "to",
    "tspct": "ts",
    # defensive eFG
    "def efgpct": "def_efg",
    "def efg pct": "def_efg",
    "opp efg pct": "def_efg",
    # scoring distribution
    "pct of points from 2": "pct_pts_2",
    "pct of points from 3": "pct_pts_3",
    "pct of points from ft": "pct_pts_ft",
    # shooting and rates
    "3p pct": "threepp",
    "3p rate": "threepr",
    "3ppct": "threepp",
    "ftpct": "ft_pct",
    "orbpct": "orb",
    "drbpct": "drb",
    "blockpct": "blk",
    "blkpct": "blk",
    "opp 3ppct": "opp_3pp",
    "3par": "threepr",
    "ftr": "ftr",
    "ft rate": "ftr",
    "ft pct": "ft_pct",
    "extra scoring chances game": "scpg",
    "non blocked 2pt pct": "nb2",
    "non blocked 2ptpct": "nb2",
    "orb pct": "orb",
    "drb pct": "drb",
    "block pct": "blk",
    "blk pct": "blk",
    "steals per possession": "spp",
    "opp asst poss": "opp_ast_poss",
    "opp to poss": "otpp",
    "opp fta fga": "opp_ftr",
    "opp ftr": "opp_ftr",
    "opp 3pt pct": "opp_3pp",
    "opp 3p pct": "opp_3pp",
    "opp 3p rate": "opp_3pr",
    # résumé
    "close game win pct": "close_win_pct",
    "wins": "w",
    "w": "w",
    "losses": "l",
    "l": "l",
    "strength of schedule": "sos",
    "sos": "sos",
}

#: Keys whose values are rates or percentages and may arrive on a 0–100 scale.
PERCENT_KEYS: frozenset[str] = frozenset(
    {
        "ts",
        "efg",
        "to",
        "def_efg",
        "pct_pts_2",
        "pct_pts_3",
        "pct_pts_ft",
        "threepp",
        "threepr",
        "ftr",
        "ft_pct",
        "nb2",
        "orb",
        "drb",
        "blk",
        "opp_ftr",
        "opp_3pp",
        "opp_3pr",
        "close_win_pct",
    }
)

_PUNCT = re.compile(r"[.\-_/]")
_SPACES = re.compile(r"\s+")


def normalize_header(header: object) -> str:
    """Normalize a raw CSV header for lookup in :data:`HEADER_MAP`.

    Example:
        >>> normalize_header(" Def. eFG % ")
        'def efg pct'
    """
    text = str(header if header is not None else "").strip().lower()
    text = text.replace("%", "pct")
    text = _PUNCT.sub(" ", text)
    return _SPACES.sub(" ", text).strip()


def normalize_percent(value: float | None) -> float | None:
    """Rescale a 0–100 percentage to 0–1; values already in 0–1 pass through."""
    if value is None or pd.isna(value):
        return value
    if 1.0001 < value <= 100.0:
        return value / 100.0
    return value


def map_headers(columns: Iterable[object]) -> dict[str, str]:
    """Map raw column labels to canonical keys.

    The first column that maps to a key wins; later duplicates and unmapped
    headers are reported at WARNING level and ignored.

    Returns:
        Mapping of raw column label → canonical key.
    """
    mapping: dict[str, str] = {}
    claimed: set[str] = set()
    unmapped: list[str] = []
    for column in columns:
        key = HEADER_MAP.get(normalize_header(column))
        if key is None:
            unmapped.append(str(column))
            continue
        if key in claimed:
            logger.warning("Column %r duplicates canonical key %r; ignoring it", column, key)
            continue
        mapping[str(column)] = key
        claimed.add(key)
    if unmapped:
        logger.warning("Ignoring %d unmapped column(s): %s", len(unmapped), unmapped)
    return mapping


def _field_schema() -> pa.DataFrameSchema:
    numeric = {key: pa.Column(float, nullable=True, required=False) for key in METRIC_KEYS}
    return pa.DataFrameSchema(
        {
            "name": pa.Column(str, nullable=True),
            "seed": pa.Column(float, checks=pa.Check.in_range(1, 16), nullable=True, required=False),
            **numeric,
        },
        strict=False,
    )


def _to_number(series: pd.Series) -> pd.Series:
    if series.dtype == object:
        series = series.astype(str).str.replace(",", "", regex=False).str.strip()
    numbers = pd.to_numeric(series, errors="coerce").astype(float)
    return numbers.replace([np.inf, -np.inf], np.nan)


def canonicalize_frame(df: pd.DataFrame, *, normalize_percents: bool = True) -> pd.DataFrame:
    """Rename, type and validate a raw statistics frame.

    Args:
        df: Raw frame as read from a CSV.
        normalize_percents: Rescale 0–100 values in :data:`PERCENT_KEYS`.

    Returns:
        Frame with canonical column names only.

    Raises:
        pandera.errors.SchemaError: If there is no team-name column or a
            seed falls outside 1–16.
    """
    mapping = map_headers(df.columns)
    frame = df[list(mapping)].rename(columns=mapping).copy()

    for key in frame.columns:
        if key == "name":
            continue
        frame[key] = _to_number(frame[key])
        if normalize_percents and key in PERCENT_KEYS:
            frame[key] = frame[key].map(normalize_percent)

    if "name" in frame.columns:
        names = frame["name"].where(frame["name"].notna(), "")
        frame["name"] = names.astype(str).str.strip()
    validated: pd.DataFrame = _field_schema().validate(frame)
    return validated


def entrants_from_records(records: Iterable[Mapping[str, Any]]) -> list[Entrant]:
    """Build entrants from canonical-key mappings, skipping rows with no name."""
    entrants: list[Entrant] = []
    for record in records:
        name = record.get("name")
        if name is None or (isinstance(name, float) and pd.isna(name)) or not str(name).strip():
            continue
        row = {key: value for key, value in record.items() if not (isinstance(value, float) and pd.isna(value))}
        row["name"] = str(name).strip()
        if row.get("seed") is not None:
            row["seed"] = int(row["seed"])
        entrants.append(Entrant(**row))
    return entrants


def entrants_from_frame(df: pd.DataFrame, *, normalize_percents: bool = True) -> list[Entrant]:
    """Canonicalize *df* and convert each row into an :class:`Entrant`."""
    frame = canonicalize_frame(df, normalize_percents=normalize_percents)
    return entrants_from_records(frame.to_dict(orient="records"))


def load_entrants_csv(path: Path, *, normalize_percents: bool = True) -> list[Entrant]:
    """Read a team-statistics CSV into entrants.

    Args:
        path: CSV file; a UTF-8 byte-order mark is tolerated.
        normalize_percents: See :func:`canonicalize_frame`.

    Returns:
        One entrant per named row, in file order.
    """
    df = pd.read_csv(path, encoding="utf-8-sig", dtype=str, keep_default_na=True)
    entrants = entrants_from_frame(df, normalize_percents=normalize_percents)
    logger.info("Read %d entrant(s) from %s", len(entrants), path)
    return entrants
