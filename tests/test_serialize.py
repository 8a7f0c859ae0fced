from __future__ import annotations

import random

import pytest

from matchday.core.fixtures import Fixture
from matchday.core.match import simulate_match
from matchday.core.player import PlayerAttributes, Position
from matchday.core.serialize import (
    club_from_dict,
    club_to_dict,
    dump_league,
    fixture_from_dict,
    fixture_to_dict,
    load_league,
    player_from_dict,
)


def test_club_roundtrip_keeps_attributes_and_availability(make_club):
    club = make_club("c", "Cityklubben", formation="3-5-2")
    club.players[0].attributes = PlayerAttributes(pace=81, shooting=40)
    club.players[3].injury = "Hamstring"
    club.players[4].suspension_games = 1

    back = club_from_dict(club_to_dict(club))
    assert back == club
    assert back.players[0].attributes.pace == 81
    assert back.players[1].attributes is None


def test_unknown_position_becomes_cm():
    player = player_from_dict({"id": "x", "name": "X", "position": "SWEEPER", "rating": 77})
    assert player.position is Position.CM
    assert player.rating == 77


def test_missing_keys_get_defaults():
    player = player_from_dict({"id": 7})
    assert player.id == "7"
    assert player.rating == 60
    assert player.attributes is None
    assert player.is_available

    club = club_from_dict({"id": "legacy", "name": "Gamla IF"})
    assert club.club_id == "legacy"
    assert club.players == []
    assert club.formation == "4-3-3"


def test_partial_attributes_fill_with_defaults():
    player = player_from_dict({"id": "p", "attributes": {"pace": 90, "defending": None}})
    assert player.attributes == PlayerAttributes(pace=90)


def test_played_fixture_roundtrip(home_club, away_club):
    fixture = Fixture(fixture_id="fix-t-1-1", week=1, home_id="home", away_id="away", league="Testligan")
    result = simulate_match(fixture, home_club, away_club, rng=random.Random(17))
    assert fixture_from_dict(fixture_to_dict(result)) == result


def test_unplayed_fixture_roundtrip():
    fixture = Fixture(fixture_id="fix-t-2-1", week=2, home_id="a", away_id="b")
    back = fixture_from_dict(fixture_to_dict(fixture))
    assert back == fixture
    assert back.referee is None and back.man_of_the_match is None


def test_league_file_roundtrip(tmp_path, league_clubs):
    fixtures = [Fixture(fixture_id="fix-testligan-1-1", week=1, home_id="alpha", away_id="bravo", league="Testligan")]
    path = tmp_path / "league.json"
    dump_league(league_clubs, fixtures, str(path))
    clubs, loaded = load_league(str(path))
    assert clubs == league_clubs
    assert loaded == fixtures


def test_league_file_must_hold_an_object(tmp_path):
    path = tmp_path / "league.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_league(str(path))
