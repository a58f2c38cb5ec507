# SPDX-License-Identifier: MIT
# raw_leaderboard/ranking.py
from __future__ import annotations
import math
import re
from typing import Any, Dict, List

POS_KEY = "__pos"

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def to_number_safe(value: Any) -> float:
    """Pull a number out of a loosely formatted cell ("1,234 pts" -> 1234.0).

    Anything that does not survive the cleanup as a finite number is 0.0.
    """
    cleaned = _NON_NUMERIC.sub("", "" if value is None else str(value))
    if not cleaned:
        return 0.0
    try:
        n = float(cleaned)
    except ValueError:
        return 0.0
    return n if math.isfinite(n) else 0.0


def sort_by_total_desc(
    records: List[Dict[str, Any]], total_key: str = "Total"
) -> List[Dict[str, Any]]:
    # sorted() is stable with reverse=True, so equal totals keep input order
    return sorted(records, key=lambda r: to_number_safe(r.get(total_key)), reverse=True)


def assign_positions(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{**r, POS_KEY: i + 1} for i, r in enumerate(records)]


def rank_by_total(
    records: List[Dict[str, Any]], total_key: str = "Total"
) -> List[Dict[str, Any]]:
    """Sort by descending total and attach 1-based positions under ``__pos``."""
    return assign_positions(sort_by_total_desc(records, total_key))
