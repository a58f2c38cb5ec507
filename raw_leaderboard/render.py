# SPDX-License-Identifier: MIT
# raw_leaderboard/render.py
from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Sequence
from urllib.parse import urlencode

from .columns import (
    CONSTRUCTOR_COLUMNS,
    DRIVER_COLUMNS,
    RACE_COLUMNS,
    Column,
    escape_html,
    project,
)
from .ranking import POS_KEY
from .session import LeaderboardSession

Record = Dict[str, Any]
RaceHref = Callable[[int, str], str]

HOME_DRIVER_ROWS = 8
RACE_FOOTNOTE = "Tip: Use Quick Filter to find a driver/team instantly."
NO_RACES_MESSAGE = "No races configured yet (edit the config)"

STYLES = """
:root { --bg:#0b0d12; --panel:#141821; --line:#262c3a; --text:#eef1f7; --muted:#9aa3b5; --red:#e10600; }
* { box-sizing: border-box; }
body { margin:0; background:var(--bg); color:var(--text); font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; }
a { color: inherit; }
.topbar { position: sticky; top: 0; z-index: 2; display:flex; gap:16px; align-items:center; flex-wrap:wrap; padding:12px 20px; background:#0f121a; border-bottom:1px solid var(--line); }
.topbar h1 { font-size:18px; margin:0 12px 0 0; }
.nav__btn { text-decoration:none; padding:4px 10px; border-radius:8px; border:1px solid var(--line); font-size:14px; }
.muted { color: var(--muted); font-size: 13px; }
main { padding: 16px 20px; display:grid; gap:18px; }
.view { background: var(--panel); border:1px solid var(--line); border-radius:14px; padding:14px 16px; }
.view h2 { margin-top:0; font-size:16px; }
.grid { display:grid; gap:16px; grid-template-columns: repeat(auto-fit, minmax(320px, 1fr)); }
.card { border:1px solid var(--line); border-radius:12px; padding:12px; }
.stats { display:flex; gap:24px; }
.stat b { display:block; font-size:22px; }
table { border-collapse: collapse; width: 100%; font-size: 14px; }
th, td { border-bottom: 1px solid var(--line); padding: 6px 8px; text-align: left; }
th { color: var(--muted); font-weight: 600; }
.badge { display:inline-block; padding:1px 8px; border-radius:999px; font-weight:700; font-size:13px; }
.badge--red { background: var(--red); color: #fff; }
.podiumRow { display:flex; justify-content:space-between; align-items:center; padding:8px 0; border-bottom:1px solid var(--line); }
.podiumLeft { display:flex; gap:12px; align-items:center; }
.podiumRank { width:30px; height:30px; border-radius:50%; display:grid; place-items:center; background:var(--red); font-weight:800; }
.podiumMeta { color: var(--muted); font-size: 13px; }
.podiumPts { font-weight: 700; }
.podium__empty { color: var(--muted); }
.racePicker { display:flex; gap:8px; flex-wrap:wrap; margin-bottom:10px; }
.racePicker a { text-decoration:none; padding:4px 10px; border-radius:8px; border:1px solid var(--line); font-size:13px; }
.racePicker a.is-active { border-color: var(--red); background:#2a0d0d; }
form.filter { margin: 8px 0; display:flex; gap:8px; }
form.filter input[type=text] { padding:4px 8px; background:#0f121a; color:var(--text); border:1px solid var(--line); border-radius:8px; }
"""


def render_table(columns: Sequence[Column], records: List[Record]) -> str:
    """Table markup: one header row of labels, one body row per record."""
    head = "".join(f"<th>{escape_html(c.label)}</th>" for c in columns)
    body = "".join(
        "<tr>" + "".join(f"<td>{v}</td>" for v in cells) + "</tr>"
        for cells in project(records, columns)
    )
    return f"<thead><tr>{head}</tr></thead><tbody>{body}</tbody>"


def render_podium(top3: List[Record]) -> str:
    if not top3:
        return '<div class="podium__empty">No standings data yet.</div>'
    rows = []
    for r in top3:
        team = r.get("Team (registered)") or r.get("Team") or ""
        rows.append(
            '<div class="podiumRow">'
            '<div class="podiumLeft">'
            f'<div class="podiumRank">{escape_html(r.get(POS_KEY, ""))}</div>'
            "<div>"
            f'<div class="podiumName">{escape_html(r.get("Driver Name") or "")}</div>'
            f'<div class="podiumMeta">{escape_html(team)}</div>'
            "</div></div>"
            f'<div class="podiumPts">{escape_html(r.get("Total") or 0)} pts</div>'
            "</div>"
        )
    return "".join(rows)


def query_race_href(index: int, name: str) -> str:
    return "/?" + urlencode({"race": name}) + "#races"


def static_race_href(index: int, name: str) -> str:
    return f"race-{index + 1}.html#races"


def render_race_picker(
    names: Sequence[str], selected: Optional[str], href: RaceHref = query_race_href
) -> str:
    if not names:
        return f'<div class="racePicker muted">{escape_html(NO_RACES_MESSAGE)}</div>'
    links = []
    for i, name in enumerate(names):
        cls = ' class="is-active"' if name == selected else ""
        links.append(f'<a href="{escape_html(href(i, name))}"{cls}>{escape_html(name)}</a>')
    return '<nav class="racePicker">' + "".join(links) + "</nav>"


def _filter_form(race_name: Optional[str], query: str) -> str:
    return (
        '<form class="filter" method="get" action="/#races">'
        f'<input type="hidden" name="race" value="{escape_html(race_name or "")}">'
        f'<input type="text" name="q" value="{escape_html(query)}" '
        'placeholder="Quick filter: driver, team, status…">'
        "<button type=\"submit\">Filter</button>"
        "</form>"
    )


def _race_section(
    session: LeaderboardSession,
    race_name: Optional[str],
    race_rows: Optional[List[Record]],
    race_error: Optional[str],
    query: str,
    race_href: RaceHref,
    interactive: bool,
) -> str:
    names = [r.name for r in session.config.races]
    parts = ['<section class="view" id="races"><h2>Race Results</h2>']
    parts.append(render_race_picker(names, race_name, race_href))
    if race_error:
        parts.append(f'<p class="muted">{escape_html(race_error)}</p>')
    elif race_name and race_rows is not None:
        parts.append(
            f'<p class="muted" id="latestRaceSummary">Currently viewing: {escape_html(race_name)}</p>'
        )
        if interactive:
            parts.append(_filter_form(race_name, query))
        parts.append(f'<table id="raceTable">{render_table(RACE_COLUMNS, race_rows)}</table>')
        parts.append(f'<p class="muted" id="raceFootnote">{escape_html(RACE_FOOTNOTE)}</p>')
    parts.append("</section>")
    return "".join(parts)


def render_page(
    session: LeaderboardSession,
    *,
    race_name: Optional[str] = None,
    race_rows: Optional[List[Record]] = None,
    race_error: Optional[str] = None,
    query: str = "",
    race_href: RaceHref = query_race_href,
    interactive: bool = False,
) -> str:
    """Full HTML document for the current session state."""
    cfg = session.config
    nr = cfg.next_race
    home = "/" if interactive else "index.html"
    refresh = '<a class="nav__btn" href="/refresh">Refresh</a>' if interactive else ""
    sheet = escape_html(cfg.master_sheet_url or "#")

    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{escape_html(cfg.title)}</title>
<style>{STYLES}</style>
</head>
<body>
<header class="topbar">
  <h1>{escape_html(cfg.title)}</h1>
  <a class="nav__btn" href="{home}#home">Home</a>
  <a class="nav__btn" href="{home}#drivers">Drivers</a>
  <a class="nav__btn" href="{home}#constructors">Constructors</a>
  <a class="nav__btn" href="{home}#races">Races</a>
  {refresh}
  <a class="nav__btn" id="sheetLink" href="{sheet}" target="_blank" rel="noopener">Sheet</a>
  <span class="muted">Last updated: <span id="lastUpdated">{escape_html(session.status)}</span></span>
</header>
<main id="mainContent">
<section class="view" id="home">
  <div class="grid">
    <div class="card">
      <h2>Next Race</h2>
      <div id="nextRaceName"><b>{escape_html(nr.name)}</b></div>
      <div class="muted" id="nextRaceTime">{escape_html(nr.time)}</div>
      <div class="muted" id="nextRaceNote">{escape_html(nr.note)}</div>
      <div class="stats" style="margin-top:12px">
        <div class="stat"><b id="driverCount">{len(session.drivers) or '—'}</b><span class="muted">Drivers</span></div>
        <div class="stat"><b id="constructorCount">{len(session.constructors) or '—'}</b><span class="muted">Constructors</span></div>
      </div>
    </div>
    <div class="card">
      <h2>Podium</h2>
      <div id="podium">{render_podium(session.drivers[:3])}</div>
    </div>
  </div>
  <div class="grid" style="margin-top:16px">
    <div class="card"><h2>Top Drivers</h2><table id="driversTableHome">{render_table(DRIVER_COLUMNS, session.drivers[:HOME_DRIVER_ROWS])}</table></div>
    <div class="card"><h2>Constructors</h2><table id="constructorsTableHome">{render_table(CONSTRUCTOR_COLUMNS, session.constructors)}</table></div>
  </div>
</section>
<section class="view" id="drivers">
  <h2>Drivers Championship</h2>
  <table id="driversTable">{render_table(DRIVER_COLUMNS, session.drivers)}</table>
</section>
<section class="view" id="constructors">
  <h2>Constructors Championship</h2>
  <table id="constructorsTable">{render_table(CONSTRUCTOR_COLUMNS, session.constructors)}</table>
</section>
{_race_section(session, race_name, race_rows, race_error, query, race_href, interactive)}
</main>
</body>
</html>
"""
