# SPDX-License-Identifier: MIT
# raw_leaderboard/config.py
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Any, List

import yaml

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CONFIG_PATH = os.path.join(ROOT, "config", "sources.yaml")
CONFIG_ENV = "RAW_LB_CONFIG"


@dataclass(frozen=True)
class RaceSource:
    name: str
    csv: str = ""


@dataclass(frozen=True)
class NextRace:
    name: str = ""
    time: str = ""
    note: str = ""


@dataclass(frozen=True)
class SiteConfig:
    title: str = "Championship Standings"
    master_sheet_url: str = ""
    drivers_csv: str = ""
    constructors_csv: str = ""
    races: List[RaceSource] = field(default_factory=list)
    next_race: NextRace = field(default_factory=NextRace)

    def race(self, name: str) -> RaceSource | None:
        for r in self.races:
            if r.name == name:
                return r
        return None

    @property
    def latest_race(self) -> RaceSource | None:
        return self.races[-1] if self.races else None


def _s(v: Any) -> str:
    return "" if v is None else str(v).strip()


def config_from_dict(data: Any) -> SiteConfig:
    if not isinstance(data, dict):
        return SiteConfig()

    races: List[RaceSource] = []
    seen: set[str] = set()
    for r in data.get("races") or []:
        if not isinstance(r, dict):
            continue
        name = _s(r.get("name"))
        if not name or name in seen:
            continue
        seen.add(name)
        races.append(RaceSource(name=name, csv=_s(r.get("csv"))))

    nr = data.get("next_race") if isinstance(data.get("next_race"), dict) else {}
    defaults = SiteConfig()
    return SiteConfig(
        title=_s(data.get("title")) or defaults.title,
        master_sheet_url=_s(data.get("master_sheet_url")),
        drivers_csv=_s(data.get("drivers_csv")),
        constructors_csv=_s(data.get("constructors_csv")),
        races=races,
        next_race=NextRace(
            name=_s(nr.get("name")), time=_s(nr.get("time")), note=_s(nr.get("note"))
        ),
    )


def resolve_config_path(path: str | None = None) -> str:
    return path or os.getenv(CONFIG_ENV) or DEFAULT_CONFIG_PATH


def load_config(path: str | None = None) -> SiteConfig:
    """Read the sheet sources from YAML; a missing file means no sources."""
    p = resolve_config_path(path)
    if not os.path.exists(p):
        return SiteConfig()
    with open(p, encoding="utf-8") as f:
        return config_from_dict(yaml.safe_load(f))
