# SPDX-License-Identifier: MIT
# raw_leaderboard/columns.py
from __future__ import annotations
from dataclasses import dataclass
from html import escape
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from .ranking import POS_KEY

Record = Dict[str, Any]
Formatter = Callable[[Any, Record], str]

TEAM_KEY = "__team"
POINTS_KEY = "__pts"

# Race sheets have used several header spellings over the season
RACE_TEAM_KEYS = (
    "Team (Race 1)",
    "Team (Race 2)",
    "Team (Race 3)",
    "Team (Race)",
    "Team",
)
RACE_POINTS_KEYS = ("Final Points", "Final", "Pts", "Points")

RACE_SEARCH_FIELDS = (
    "Driver Name",
    "EA / RaceNet ID",
    TEAM_KEY,
    "Notes",
    "Finish Status",
)


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    format: Optional[Formatter] = None


def escape_html(value: Any) -> str:
    return escape(str(value), quote=True)


def badge(value: Any, record: Record | None = None) -> str:
    return f'<span class="badge badge--red">{escape_html(value or 0)}</span>'


def pick_first(record: Record, keys: Iterable[str], default: str = "") -> Any:
    """Return the first non-empty value among ``keys``, else ``default``."""
    for k in keys:
        v = record.get(k)
        if v:
            return v
    return default


def pick_team_from_race_row(record: Record) -> str:
    return pick_first(record, RACE_TEAM_KEYS, "")


def pick_points_from_race_row(record: Record) -> str:
    return pick_first(record, RACE_POINTS_KEYS, "0")


def normalize_race_rows(records: List[Record]) -> List[Record]:
    """Copy race records adding the resolved ``__team`` and ``__pts`` fields."""
    return [
        {
            **r,
            TEAM_KEY: pick_team_from_race_row(r),
            POINTS_KEY: pick_points_from_race_row(r),
        }
        for r in records
    ]


def filter_records(
    records: List[Record], query: str | None, fields: Sequence[str]
) -> List[Record]:
    """Keep records whose searched fields contain ``query`` (case-insensitive).

    A blank query keeps everything.
    """
    q = (query or "").strip().lower()
    if not q:
        return records
    out = []
    for r in records:
        hay = " ".join(str(r.get(f) or "") for f in fields).lower()
        if q in hay:
            out.append(r)
    return out


def cell(column: Column, record: Record) -> str:
    raw = record.get(column.key)
    if column.format is not None:
        return column.format(raw, record)
    return escape_html("" if raw is None else raw)


def project(records: List[Record], columns: Sequence[Column]) -> List[List[str]]:
    return [[cell(c, r) for c in columns] for r in records]


DRIVER_COLUMNS = (
    Column(POS_KEY, "Pos"),
    Column("Driver Name", "Driver"),
    Column("Team (registered)", "Team"),
    Column("Total", "Points", badge),
)

CONSTRUCTOR_COLUMNS = (
    Column(POS_KEY, "Pos"),
    Column("Team", "Constructor"),
    Column("Total", "Points", badge),
)

RACE_COLUMNS = (
    Column("Pos", "Pos"),
    Column("Driver Name", "Driver"),
    Column("EA / RaceNet ID", "RaceNet ID"),
    Column(TEAM_KEY, "Team"),
    Column("Race Time / Gap", "Time / Gap"),
    Column("Finish Status", "Status"),
    Column(POINTS_KEY, "Pts", badge),
    Column("Notes", "Notes"),
)
