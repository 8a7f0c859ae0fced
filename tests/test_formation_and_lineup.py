from __future__ import annotations

import pytest

from matchday.core.formation import Formation, parse_formation
from matchday.core.lineup import select_starting_xi
from matchday.core.player import Position, Unit


@pytest.mark.parametrize(
    "code, expected",
    [
        ("4-3-3", (4, 3, 3)),
        ("3-5-2", (3, 5, 2)),
        ("4-2-3-1", (4, 5, 1)),
        ("4-4-1-1", (4, 5, 1)),
        (None, (4, 3, 3)),
        ("", (4, 3, 3)),
        ("abc", (4, 3, 3)),
        ("4-4", (4, 3, 3)),
        ("1-2-3-4-5", (4, 3, 3)),
        ("4-x-3", (4, 3, 3)),
    ],
)
def test_parse_formation(code, expected):
    assert parse_formation(code) == Formation(*expected)


def test_formation_code_roundtrip():
    assert parse_formation("4-2-3-1").code == "4-5-1"


def test_starting_xi_follows_formation(home_club):
    xi = select_starting_xi(home_club)
    assert len(xi) == 11
    assert xi[0].unit is Unit.GK
    units = [e.unit for e in xi]
    assert units.count(Unit.DEF) == 4
    assert units.count(Unit.MID) == 3
    assert units.count(Unit.FWD) == 3
    assert len({e.player.id for e in xi}) == 11


def test_starting_xi_picks_best_rated(make_club):
    club = make_club("c")
    club.players[1].rating = 90  # reservmålvakten är bäst
    xi = select_starting_xi(club)
    assert xi[0].player.id == club.players[1].id


def test_starting_xi_skips_unavailable_players(make_club):
    club = make_club("c")
    club.players[0].injury = "Knee"
    club.players[2].suspension_games = 2
    club.players[7].illness = "Flu"
    xi_ids = {e.player.id for e in select_starting_xi(club)}
    assert club.players[0].id not in xi_ids
    assert club.players[2].id not in xi_ids
    assert club.players[7].id not in xi_ids
    assert club.players[1].id in xi_ids  # reservmålvakten kliver in


def test_four_part_formation_merges_midfield(make_club):
    club = make_club("c", formation="4-2-3-1")
    units = [e.unit for e in select_starting_xi(club)]
    assert units.count(Unit.DEF) == 4
    assert units.count(Unit.MID) == 5
    assert units.count(Unit.FWD) == 1


def test_backfill_tags_first_short_unit(make_club):
    layout = ((Position.GK, 1), (Position.CB, 3), (Position.CM, 5), (Position.ST, 4))
    club = make_club("c", layout=layout)
    xi = select_starting_xi(club)
    assert len(xi) == 11
    extra = xi[-1]
    # bästa oanvända spelaren är en mittfältare, taggad som back
    assert extra.player.position is Position.CM
    assert extra.unit is Unit.DEF


def test_oversized_formation_is_capped(make_club):
    club = make_club("c", formation="5-5-5")
    assert len(select_starting_xi(club)) == 11


def test_short_squad_gives_short_xi(make_club):
    layout = ((Position.GK, 1), (Position.CB, 3), (Position.CM, 2), (Position.ST, 2))
    xi = select_starting_xi(make_club("c", layout=layout))
    assert len(xi) == 8


def test_empty_roster_gives_empty_xi(make_club):
    assert select_starting_xi(make_club("c", layout=())) == []
