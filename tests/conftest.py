import pytest

from raw_leaderboard.config import NextRace, RaceSource, SiteConfig
from raw_leaderboard.csvparse import parse_records
from raw_leaderboard.fetch import FetchError

DRIVERS_CSV = (
    "Driver Name,Team (registered),Total\n"
    "Alice,Red Bull,25\n"
    "Bruno,Ferrari,40\n"
    "Chen,McLaren,10\n"
)
CONSTRUCTORS_CSV = "Team,Total\nFerrari,40\nRed Bull,25\nMcLaren,10\n"
RACE1_CSV = (
    "Pos,Driver Name,EA / RaceNet ID,Team (Race 1),Race Time / Gap,Finish Status,Final Points,Notes\n"
    "1,Bruno,bruno_f1,Ferrari,45:01.2,Finished,25,\n"
    "2,Alice,alice99,Red Bull,+3.1,Finished,18,Fastest lap\n"
)
RACE2_CSV = (
    "Pos,Driver Name,Team,Finish Status,Pts\n"
    "1,Alice,Red Bull,Finished,25\n"
    "2,Chen,McLaren,DNF,0\n"
)

SHEETS = {
    "http://sheets/drivers": DRIVERS_CSV,
    "http://sheets/constructors": CONSTRUCTORS_CSV,
    "http://sheets/r1": RACE1_CSV,
    "http://sheets/r2": RACE2_CSV,
}


@pytest.fixture
def site_config():
    return SiteConfig(
        title="Test Cup",
        master_sheet_url="http://sheets/master",
        drivers_csv="http://sheets/drivers",
        constructors_csv="http://sheets/constructors",
        races=[RaceSource("R1 – Australia", "http://sheets/r1"), RaceSource("R2 – China", "http://sheets/r2")],
        next_race=NextRace("Round 3 • Japan", "Saturday", "Poll-based"),
    )


class FakeFetch:
    """Serves SHEETS by URL, counting calls; URLs in ``failing`` raise."""

    def __init__(self, sheets=None):
        self.sheets = dict(SHEETS if sheets is None else sheets)
        self.calls = []
        self.failing = set()

    def __call__(self, url):
        self.calls.append(url)
        if url in self.failing:
            raise FetchError(f"Failed to load CSV: 500 ({url})")
        if not url:
            return []
        return parse_records(self.sheets[url])


@pytest.fixture
def fake_fetch():
    return FakeFetch()
