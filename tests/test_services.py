from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

from matchday.api import MatchService, ServiceError, Settings
from matchday.core.club import Club
from matchday.core.serialize import dump_league
from matchday.tools.cli import main


@pytest.fixture()
def league_file(tmp_path: Path, league_clubs: List[Club]) -> Path:
    path = tmp_path / "league.json"
    dump_league(league_clubs, [], str(path))
    return path


@pytest.fixture()
def service(league_file: Path) -> MatchService:
    svc = MatchService(league_file, Settings(seed=7))
    svc.build_schedule()
    return svc


# ---------- Inställningar ----------


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MATCHDAY_LANGUAGE", "TR")
    monkeypatch.setenv("MATCHDAY_SEED", "42")
    monkeypatch.setenv("MATCHDAY_LOG_LEVEL", "debug")
    monkeypatch.setenv("MATCHDAY_DOUBLE_ROUND", "0")
    settings = Settings.from_env()
    assert settings.language == "tr"
    assert settings.seed == 42
    assert settings.log_level == "DEBUG"
    assert settings.double_round is False


def test_settings_ignore_invalid_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MATCHDAY_LANGUAGE", "klingon")
    monkeypatch.setenv("MATCHDAY_SEED", "not-a-number")
    monkeypatch.setenv("MATCHDAY_LOG_LEVEL", "LOUD")
    monkeypatch.setenv("MATCHDAY_DOUBLE_ROUND", "maybe")
    assert Settings.from_env() == Settings()


def test_settings_rng_is_seeded() -> None:
    settings = Settings(seed=3)
    assert settings.rng().random() == settings.rng().random()
    assert settings.rng(4).random() != settings.rng().random()


# ---------- Tjänsten ----------


def test_build_schedule_writes_fixtures(service: MatchService) -> None:
    contract = service.dump()
    assert len(contract["fixtures"]) == 12
    assert contract["weeks_played"] == []
    assert set(contract["standings"]) == {"Testligan"}


def test_single_round_schedule(league_file: Path) -> None:
    svc = MatchService(league_file, Settings(seed=1))
    assert svc.build_schedule(double_round=False) == {"ok": True, "fixtures": 6, "weeks": 3}


def test_simulate_fixture_persists_result(service: MatchService) -> None:
    fixture_id = service.dump()["fixtures"][0]["id"]
    result = service.simulate_fixture(fixture_id)
    assert result["ok"] is True
    assert result["fixture"]["played"] is True

    stored = json.loads(service.path.read_text(encoding="utf-8"))
    match = next(f for f in stored["fixtures"] if f["fixture_id"] == fixture_id)
    assert match["played"] is True
    assert match["referee"]

    with pytest.raises(ServiceError):
        service.simulate_fixture(fixture_id)


def test_unknown_fixture_raises(service: MatchService) -> None:
    with pytest.raises(ServiceError):
        service.simulate_fixture("fix-nope-1-1")
    with pytest.raises(ServiceError):
        service.feed("fix-nope-1-1")


def test_play_week_defaults_to_next_unplayed(service: MatchService) -> None:
    first = service.play_week()
    assert first["week"] == 1
    assert len(first["fixtures"]) == 2
    second = service.play_week()
    assert second["week"] == 2

    table = service.table()
    assert [row["pos"] for row in table] == [1, 2, 3, 4]
    assert sum(row["mp"] for row in table) == 8


def test_full_season_then_no_weeks_left(service: MatchService) -> None:
    for _ in range(6):
        service.play_week()
    assert service.dump()["weeks_played"] == [1, 2, 3, 4, 5, 6]
    with pytest.raises(ServiceError):
        service.play_week()


def test_same_seed_same_results(league_file: Path, tmp_path: Path, league_clubs: List[Club]) -> None:
    other = tmp_path / "copy.json"
    dump_league(league_clubs, [], str(other))
    a = MatchService(league_file, Settings(seed=11))
    b = MatchService(other, Settings(seed=11))
    a.build_schedule()
    b.build_schedule()
    assert a.play_week()["fixtures"] == b.play_week()["fixtures"]


def test_feed_and_report(service: MatchService) -> None:
    fixture_id = service.dump()["fixtures"][0]["id"]
    with pytest.raises(ServiceError):
        service.feed(fixture_id)
    service.simulate_fixture(fixture_id)
    assert "Matchhändelser:" in service.feed(fixture_id)
    assert "Başlama vuruşu" in service.feed(fixture_id, language="tr")
    assert service.feed(fixture_id, report=True).startswith("--- Matchrapport ---")


def test_player_stats(service: MatchService) -> None:
    service.play_week()
    stats = service.player_stats("alpha-p1")
    assert stats["team_id"] == "alpha"
    assert stats["appearances"] == 1
    with pytest.raises(ServiceError):
        service.player_stats("ghost")


def test_table_for_unknown_league(service: MatchService) -> None:
    with pytest.raises(ServiceError):
        service.table("Premier League")


def test_reset_clears_results(service: MatchService) -> None:
    service.play_week()
    assert service.reset() == {"ok": True, "fixtures": 12}
    assert not any(f["played"] for f in service.dump()["fixtures"])


def test_missing_and_broken_files(tmp_path: Path) -> None:
    with pytest.raises(ServiceError):
        MatchService(tmp_path / "missing.json", Settings()).dump()
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ServiceError):
        MatchService(broken, Settings()).dump()
    listed = tmp_path / "list.json"
    listed.write_text("[]", encoding="utf-8")
    with pytest.raises(ServiceError):
        MatchService(listed, Settings()).dump()


# ---------- CLI ----------


def test_cli_schedule_and_week(league_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--file", str(league_file), "--seed", "3", "schedule", "build"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"ok": True, "fixtures": 12, "weeks": 6}

    assert main(["--file", str(league_file), "--seed", "3", "week", "play"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["week"] == 1

    assert main(["--file", str(league_file), "table", "get"]) == 0
    table = json.loads(capsys.readouterr().out)
    assert len(table) == 4


def test_cli_feed_prints_text(service: MatchService, capsys: pytest.CaptureFixture[str]) -> None:
    fixture_id = service.dump()["fixtures"][0]["id"]
    service.simulate_fixture(fixture_id)
    assert main(["--file", str(service.path), "feed", "show", "--id", fixture_id, "--report"]) == 0
    assert "Domare:" in capsys.readouterr().out


def test_cli_reports_service_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--file", str(tmp_path / "nothing.json"), "league", "dump"])
    assert code == 1
    out = json.loads(capsys.readouterr().out)
    assert out["ok"] is False
    assert out["error"]["code"] == "SERVICE_ERROR"
