# SPDX-License-Identifier: MIT
# raw_leaderboard/cli.py
from __future__ import annotations
import csv
import os
import time
from typing import Any, Dict, List, Sequence

import pandas as pd
import typer
import yaml
from dotenv import load_dotenv, find_dotenv

from .columns import (
    CONSTRUCTOR_COLUMNS,
    DRIVER_COLUMNS,
    RACE_COLUMNS,
    Column,
)
from .config import load_config, resolve_config_path
from .fetch import FetchError
from .render import render_page, static_race_href
from .server import make_server
from .session import LeaderboardSession

load_dotenv(find_dotenv(), override=False)

app = typer.Typer(add_completion=False, help="Championship leaderboard built from published sheets")

KINDS = {"drivers": DRIVER_COLUMNS, "constructors": CONSTRUCTOR_COLUMNS}


def _open_session(config: str | None) -> LeaderboardSession:
    try:
        cfg = load_config(config)
    except (OSError, yaml.YAMLError) as e:
        typer.echo(f"❌ Could not read config {resolve_config_path(config)}: {e}")
        raise typer.Exit(1)
    return LeaderboardSession(cfg)


def _load_or_exit(session: LeaderboardSession) -> None:
    result = session.load_all()
    if not result.ok:
        typer.echo(f"❌ {result.message}")
        raise typer.Exit(1)


def _kind_columns(kind: str) -> Sequence[Column]:
    cols = KINDS.get(kind)
    if cols is None:
        typer.echo(f"❌ Unknown kind {kind!r}; use drivers or constructors")
        raise typer.Exit(1)
    return cols


def _frame(records: List[Dict[str, Any]], columns: Sequence[Column]) -> pd.DataFrame:
    """Plain-text view of the display columns (formatters are HTML, so skipped)."""
    labels = [c.label for c in columns]
    return pd.DataFrame(
        [{c.label: r.get(c.key, "") for c in columns} for r in records],
        columns=labels,
    )


def _write_site(session: LeaderboardSession, out_dir: str) -> List[str]:
    """Render index.html (latest race) plus one page per race into out_dir.

    All race sheets are fetched before anything is written, so a failed
    fetch leaves the previous build untouched.
    """
    races = session.config.races
    views = {r.name: session.race_view(r.name) for r in races}

    os.makedirs(out_dir, exist_ok=True)
    pages = [("index.html", session.default_race())]
    pages += [(f"race-{i + 1}.html", r.name) for i, r in enumerate(races)]

    written = []
    for fname, race_name in pages:
        html = render_page(
            session,
            race_name=race_name,
            race_rows=views.get(race_name) if race_name else None,
            race_href=static_race_href,
        )
        path = os.path.join(out_dir, fname)
        with open(path, "w", encoding="utf-8") as f:
            f.write(html)
        written.append(path)
    return written


@app.command("build")
def cmd_build(
    config: str = typer.Option(None, help="Sources YAML (defaults to $RAW_LB_CONFIG or config/sources.yaml)"),
    out: str = typer.Option("site", help="Output directory"),
    watch: float = typer.Option(
        0.0, help="Refresh and rebuild every N seconds (0 = build once)"
    ),
    cycles: int = typer.Option(0, help="With --watch, stop after N refreshes (0 = forever)"),
):
    """Fetch every sheet and write the static site."""
    session = _open_session(config)
    _load_or_exit(session)
    try:
        written = _write_site(session, out)
    except FetchError as e:
        typer.echo(f"❌ Build failed: {e}")
        raise typer.Exit(1)
    typer.echo(f"✅ Wrote {len(written)} pages to {out}")

    done = 0
    while watch > 0 and (cycles <= 0 or done < cycles):
        try:
            time.sleep(watch)
        except KeyboardInterrupt:
            typer.echo("\n⏹  Stopped watching")
            return
        done += 1
        result = session.refresh()
        if result.stale:
            continue
        if not result.ok:
            typer.echo(f"❌ {result.message} (keeping previous build)")
            continue
        try:
            written = _write_site(session, out)
        except FetchError as e:
            typer.echo(f"❌ Rebuild failed: {e} (keeping previous build)")
            continue
        typer.echo(f"✅ {session.status}: rebuilt {len(written)} pages")


@app.command("serve")
def cmd_serve(
    config: str = typer.Option(None, help="Sources YAML (defaults to $RAW_LB_CONFIG or config/sources.yaml)"),
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
):
    """Serve the leaderboard locally with quick filter and /refresh."""
    session = _open_session(config)
    result = session.load_all()
    if not result.ok:
        # Keep serving; the page shows the failure and /refresh retries
        typer.echo(f"❌ {result.message}")
    server = make_server(session, host, port)
    typer.echo(f"✅ Serving on http://{host}:{port}/ (Ctrl+C to stop)")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        typer.echo("\n⏹  Stopped")
    finally:
        server.server_close()


@app.command("standings")
def cmd_standings(
    kind: str = typer.Option("drivers", help="drivers or constructors"),
    top: int = typer.Option(0, help="Only show the first N rows (0 = all)"),
    config: str = typer.Option(None, help="Sources YAML"),
):
    """Print the ranked championship table."""
    columns = _kind_columns(kind)
    session = _open_session(config)
    _load_or_exit(session)
    rows = session.drivers if kind == "drivers" else session.constructors
    if top > 0:
        rows = rows[:top]
    if not rows:
        typer.echo("No standings data yet.")
        return
    typer.echo(_frame(rows, columns).to_string(index=False))


@app.command("race")
def cmd_race(
    name: str = typer.Argument(None, help="Race name (defaults to the latest)"),
    filter: str = typer.Option("", "--filter", "-f", help="Quick filter text"),
    config: str = typer.Option(None, help="Sources YAML"),
):
    """Print one race's results, optionally filtered."""
    session = _open_session(config)
    race_name = name or session.default_race()
    if not race_name:
        typer.echo("❌ No races configured")
        raise typer.Exit(1)
    try:
        rows = session.race_view(race_name, filter)
    except FetchError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)
    if rows is None:
        typer.echo(f"❌ Unknown race: {race_name}")
        raise typer.Exit(1)

    typer.echo(f"Currently viewing: {race_name}")
    if not rows:
        typer.echo("No matching results.")
        return
    typer.echo(_frame(rows, RACE_COLUMNS).to_string(index=False))


@app.command("races")
def cmd_races(config: str = typer.Option(None, help="Sources YAML")):
    """List configured races (latest last)."""
    session = _open_session(config)
    if not session.config.races:
        typer.echo("No races configured yet (edit the config)")
        return
    for i, r in enumerate(session.config.races, start=1):
        typer.echo(f"{i}. {r.name}")


@app.command("export")
def cmd_export(
    kind: str = typer.Option("drivers", help="drivers or constructors"),
    out: str = typer.Option(None, help="Output CSV path (default <kind>_standings.csv)"),
    config: str = typer.Option(None, help="Sources YAML"),
):
    """Write ranked standings to CSV."""
    columns = _kind_columns(kind)
    session = _open_session(config)
    _load_or_exit(session)
    rows = session.drivers if kind == "drivers" else session.constructors
    path = out or f"{kind}_standings.csv"
    _frame(rows, columns).to_csv(path, index=False, quoting=csv.QUOTE_MINIMAL)
    typer.echo(f"✅ Wrote {path}")
