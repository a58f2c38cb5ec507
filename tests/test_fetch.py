import pytest
import requests

from raw_leaderboard import fetch
from raw_leaderboard.fetch import FetchError, fetch_csv_records, fetch_csv_text, is_configured


class FakeResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)


def test_is_configured():
    assert is_configured("https://example.com/pub?output=csv")
    assert not is_configured("")
    assert not is_configured(None)
    assert not is_configured("PASTE_DRIVERS_CSV_URL")


def test_unconfigured_url_makes_no_request(monkeypatch):
    def boom(*a, **k):
        raise AssertionError("network used")

    monkeypatch.setattr(fetch.requests, "get", boom)
    assert fetch_csv_records("") == []
    assert fetch_csv_records("PASTE_ME") == []


def test_fetch_records_decodes_bom_and_maps(monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout=None):
        seen.update(url=url, headers=headers, timeout=timeout)
        return FakeResponse(content="\ufeffTeam,Total\r\nFerrari,40\r\n".encode("utf-8"))

    monkeypatch.setattr(fetch.requests, "get", fake_get)
    assert fetch_csv_records("https://x/csv") == [{"Team": "Ferrari", "Total": "40"}]
    assert seen["headers"]["Cache-Control"] == "no-cache"
    assert seen["timeout"] == fetch.DEFAULT_TIMEOUT


def test_http_error_becomes_fetch_error(monkeypatch):
    monkeypatch.setattr(fetch.requests, "get", lambda *a, **k: FakeResponse(404))
    with pytest.raises(FetchError) as exc:
        fetch_csv_text("https://x/csv")
    assert "404" in str(exc.value)


def test_network_error_becomes_fetch_error(monkeypatch):
    def fail(*a, **k):
        raise requests.exceptions.ConnectionError("dns failure")

    monkeypatch.setattr(fetch.requests, "get", fail)
    with pytest.raises(FetchError) as exc:
        fetch_csv_records("https://x/csv")
    assert "dns failure" in str(exc.value)
    assert isinstance(exc.value, RuntimeError)


def test_bad_bytes_do_not_raise(monkeypatch):
    monkeypatch.setattr(
        fetch.requests, "get", lambda *a, **k: FakeResponse(content=b"A\n\xff\xfe\n")
    )
    rows = fetch_csv_records("https://x/csv")
    assert len(rows) == 1
