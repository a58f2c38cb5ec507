from raw_leaderboard.config import (
    CONFIG_ENV,
    DEFAULT_CONFIG_PATH,
    SiteConfig,
    config_from_dict,
    load_config,
    resolve_config_path,
)

YAML = """
title: Test Cup
master_sheet_url: http://sheets/master
drivers_csv: http://sheets/drivers
constructors_csv: PASTE_CONSTRUCTORS
races:
  - name: "R1 – Australia"
    csv: http://sheets/r1
  - name: ""
    csv: http://sheets/nameless
  - name: "R1 – Australia"
    csv: http://sheets/dupe
  - name: "R2 – China"
next_race:
  name: "Round 3 • Japan"
  time: Saturday
"""


def test_load_config_from_yaml(tmp_path):
    p = tmp_path / "sources.yaml"
    p.write_text(YAML, encoding="utf-8")
    cfg = load_config(str(p))
    assert cfg.title == "Test Cup"
    assert cfg.drivers_csv == "http://sheets/drivers"
    assert [r.name for r in cfg.races] == ["R1 – Australia", "R2 – China"]
    assert cfg.race("R1 – Australia").csv == "http://sheets/r1"
    assert cfg.race("R2 – China").csv == ""
    assert cfg.latest_race.name == "R2 – China"
    assert cfg.next_race.name == "Round 3 • Japan"
    assert cfg.next_race.note == ""


def test_missing_file_is_empty_config(tmp_path):
    cfg = load_config(str(tmp_path / "nope.yaml"))
    assert cfg == SiteConfig()
    assert cfg.latest_race is None


def test_non_mapping_yaml_is_empty():
    assert config_from_dict(["a", "b"]) == SiteConfig()
    assert config_from_dict(None) == SiteConfig()


def test_config_path_resolution(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    assert resolve_config_path() == DEFAULT_CONFIG_PATH
    monkeypatch.setenv(CONFIG_ENV, "/tmp/other.yaml")
    assert resolve_config_path() == "/tmp/other.yaml"
    assert resolve_config_path("explicit.yaml") == "explicit.yaml"


def test_shipped_sources_file_loads():
    cfg = load_config(DEFAULT_CONFIG_PATH)
    assert cfg.drivers_csv.startswith("https://")
    assert len(cfg.races) >= 1
