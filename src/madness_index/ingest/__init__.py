"""Ingestion collaborator: canonical entrant schema and CSV loading."""

from __future__ import annotations

from madness_index.ingest.loader import (
    HEADER_MAP,
    PERCENT_KEYS,
    canonicalize_frame,
    entrants_from_frame,
    entrants_from_records,
    load_entrants_csv,
    map_headers,
    normalize_header,
    normalize_percent,
)
from madness_index.ingest.schema import METRIC_KEYS, Entrant

__all__ = [
    "HEADER_MAP",
    "METRIC_KEYS",
    "PERCENT_KEYS",
    "Entrant",
    "canonicalize_frame",
    "entrants_from_frame",
    "entrants_from_records",
    "load_entrants_csv",
    "map_headers",
    "normalize_header",
    "normalize_percent",
]
