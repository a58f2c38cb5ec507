# SPDX-License-Identifier: MIT
# raw_leaderboard/session.py
from __future__ import annotations
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .columns import RACE_SEARCH_FIELDS, filter_records, normalize_race_rows
from .config import SiteConfig
from .fetch import FetchError, fetch_csv_records
from .ranking import rank_by_total

Record = Dict[str, Any]
Fetcher = Callable[[str], List[Dict[str, str]]]

LOADING_MESSAGE = "Loading…"
FAILED_MESSAGE = "Failed to load data (check CSV links in config)."


@dataclass(frozen=True)
class LoadResult:
    ok: bool
    message: str
    stale: bool = False


class LeaderboardSession:
    """In-memory state behind one rendered site.

    Holds the ranked standings, the per-race record cache and the status
    line. Loads that started before the most recent ``clear()`` are
    discarded when they finish, so the newest refresh always wins.
    """

    def __init__(self, config: SiteConfig, fetch: Fetcher = fetch_csv_records):
        self.config = config
        self._fetch = fetch
        self._lock = threading.Lock()
        self._generation = 0
        self.drivers: List[Record] = []
        self.constructors: List[Record] = []
        self.race_cache: Dict[str, List[Record]] = {}
        self.status = LOADING_MESSAGE
        self.last_updated: Optional[datetime] = None

    @property
    def generation(self) -> int:
        return self._generation

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            self.race_cache.clear()

    def load_all(self) -> LoadResult:
        token = self._generation
        try:
            drivers = self._fetch(self.config.drivers_csv)
            constructors = self._fetch(self.config.constructors_csv)
            latest = self.config.latest_race
            latest_rows = self._fetch(latest.csv) if latest else None
        except FetchError as e:
            with self._lock:
                if token != self._generation:
                    return LoadResult(False, str(e), stale=True)
                self.status = FAILED_MESSAGE
            return LoadResult(False, f"{FAILED_MESSAGE} {e}")

        with self._lock:
            if token != self._generation:
                return LoadResult(False, "Superseded by a newer refresh", stale=True)
            self.drivers = rank_by_total(drivers, "Total")
            self.constructors = rank_by_total(constructors, "Total")
            if latest is not None:
                self.race_cache.setdefault(latest.name, latest_rows)
            self.last_updated = datetime.now()
            self.status = self.last_updated.strftime("%Y-%m-%d %H:%M:%S")
        return LoadResult(True, self.status)

    def refresh(self) -> LoadResult:
        self.clear()
        return self.load_all()

    def load_race(self, name: str) -> Optional[List[Record]]:
        """Records for one configured race, fetched once per generation.

        Unknown race names return None; fetch failures propagate.
        """
        race = self.config.race(name)
        if race is None:
            return None
        cached = self.race_cache.get(name)
        if cached is not None:
            return cached
        token = self._generation
        rows = self._fetch(race.csv)
        with self._lock:
            if token == self._generation:
                return self.race_cache.setdefault(name, rows)
        return rows

    def default_race(self) -> Optional[str]:
        latest = self.config.latest_race
        return latest.name if latest else None

    def race_view(self, name: str | None, query: str | None = "") -> Optional[List[Record]]:
        """Normalized race records for display, narrowed by the quick filter."""
        rows = self.load_race(name or self.default_race() or "")
        if rows is None:
            return None
        return filter_records(normalize_race_rows(rows), query, RACE_SEARCH_FIELDS)
