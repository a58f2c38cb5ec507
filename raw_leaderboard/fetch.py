# SPDX-License-Identifier: MIT
# raw_leaderboard/fetch.py
from __future__ import annotations
from typing import Dict, List

import requests

from .csvparse import parse_records

PLACEHOLDER_PREFIX = "PASTE_"
DEFAULT_TIMEOUT = 20.0


class FetchError(RuntimeError):
    """A published sheet could not be downloaded."""


def is_configured(url: str | None) -> bool:
    return bool(url) and not str(url).startswith(PLACEHOLDER_PREFIX)


def fetch_csv_text(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    try:
        response = requests.get(
            url, headers={"Cache-Control": "no-cache"}, timeout=timeout
        )
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        raise FetchError(f"Failed to load CSV: {status} ({url})") from e
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Failed to load CSV from {url}: {e}") from e

    return response.content.decode("utf-8-sig", errors="replace")


def fetch_csv_records(url: str | None, timeout: float = DEFAULT_TIMEOUT) -> List[Dict[str, str]]:
    """Download one published sheet and map it to header-keyed records.

    Unconfigured sources (empty or ``PASTE_...`` placeholders) return [].
    """
    if not is_configured(url):
        return []
    return parse_records(fetch_csv_text(url, timeout=timeout))
