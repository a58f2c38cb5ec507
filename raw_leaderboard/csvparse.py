# SPDX-License-Identifier: MIT
# raw_leaderboard/csvparse.py
from __future__ import annotations
from typing import Dict, List


def parse_csv(text: str) -> List[List[str]]:
    """Split published-sheet CSV text into rows of raw field strings.

    Quoted fields may hold commas, line breaks and doubled quotes. Blank
    lines never produce rows, and an unterminated quote at the end of the
    text is treated as closed.
    """
    rows: List[List[str]] = []
    row: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if c == '"' and in_quotes and nxt == '"':
            current.append('"')
            i += 2
            continue
        if c == '"':
            in_quotes = not in_quotes
            i += 1
            continue
        if c == "," and not in_quotes:
            row.append("".join(current))
            current = []
            i += 1
            continue
        if c in ("\n", "\r") and not in_quotes:
            if current or row:
                row.append("".join(current))
                rows.append(row)
                row = []
                current = []
            # CRLF counts as one break
            i += 2 if (c == "\r" and nxt == "\n") else 1
            continue
        current.append(c)
        i += 1

    if current or row:
        row.append("".join(current))
        rows.append(row)

    return rows


def rows_to_records(rows: List[List[str]]) -> List[Dict[str, str]]:
    """Pair the header row with every data row, trimming all cells.

    Short rows are padded with "" and rows that are blank after trimming
    are dropped.
    """
    if not rows:
        return []
    headers = [h.strip() for h in rows[0]]
    records: List[Dict[str, str]] = []
    for r in rows[1:]:
        rec: Dict[str, str] = {}
        for idx, h in enumerate(headers):
            rec[h] = (r[idx] if idx < len(r) else "").strip()
        if any(rec.values()):
            records.append(rec)
    return records


def parse_records(text: str) -> List[Dict[str, str]]:
    return rows_to_records(parse_csv(text))
