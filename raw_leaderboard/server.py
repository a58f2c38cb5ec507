# SPDX-License-Identifier: MIT
# raw_leaderboard/server.py
from __future__ import annotations
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from .fetch import FetchError
from .render import render_page
from .session import FAILED_MESSAGE, LeaderboardSession


def race_rows(
    session: LeaderboardSession, name: Optional[str], query: str = ""
) -> Tuple[Optional[List[Dict[str, Any]]], Optional[str]]:
    """(rows, error) for one race view; errors become display text."""
    if not name:
        return None, None
    try:
        rows = session.race_view(name, query)
    except FetchError as e:
        return None, f"{FAILED_MESSAGE} {e}"
    if rows is None:
        return None, f"Unknown race: {name}"
    return rows, None


def make_handler(session: LeaderboardSession):
    class LeaderboardHandler(BaseHTTPRequestHandler):
        def do_GET(self):
            url = urlparse(self.path)
            if url.path == "/refresh":
                session.refresh()
                self.send_response(303)
                self.send_header("Location", "/")
                self.end_headers()
                return
            if url.path not in ("/", "/index.html"):
                self.send_error(404, "Not Found")
                return

            params = parse_qs(url.query)
            race = (params.get("race") or [""])[0] or session.default_race()
            query = (params.get("q") or [""])[0]
            rows, err = race_rows(session, race, query)
            body = render_page(
                session,
                race_name=race,
                race_rows=rows,
                race_error=err,
                query=query,
                interactive=True,
            ).encode("utf-8")

            self.send_response(200)
            self.send_header("Content-Type", "text/html; charset=utf-8")
            self.send_header("Content-Length", str(len(body)))
            self.send_header("Cache-Control", "no-store")
            self.end_headers()
            self.wfile.write(body)

    return LeaderboardHandler


def make_server(session: LeaderboardSession, host: str, port: int) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), make_handler(session))
