from __future__ import annotations

import pytest

from matchday.core.lineup import XIEntry, select_starting_xi
from matchday.core.player import Position, Unit
from matchday.core.strength import (
    dynamic_strength,
    effective_rating,
    home_dominance,
    position_penalty,
    round_half_up,
    team_strength,
)


@pytest.mark.parametrize(
    "position, unit, penalty",
    [
        (Position.CB, Unit.DEF, 0),
        (Position.CM, Unit.MID, 0),
        (Position.CAM, Unit.MID, 2),
        (Position.CDM, Unit.MID, 2),
        (Position.GK, Unit.DEF, 50),
        (Position.GK, Unit.FWD, 50),
        (Position.ST, Unit.DEF, 35),
        (Position.LB, Unit.FWD, 30),
        (Position.LW, Unit.MID, 20),
        (Position.RM, Unit.FWD, 15),
        (Position.CM, Unit.DEF, 18),
        (Position.RWB, Unit.MID, 15),
        (Position.ST, Unit.GK, 25),
    ],
)
def test_position_penalty(position, unit, penalty):
    assert position_penalty(position, unit) == penalty


def test_goalkeeper_out_of_goal_always_rates_lower(make_player):
    for rating in range(2, 100):
        keeper = make_player("gk", Position.GK, rating)
        in_goal = effective_rating(XIEntry(keeper, Unit.GK))
        for unit in (Unit.DEF, Unit.MID, Unit.FWD):
            assert effective_rating(XIEntry(keeper, unit)) < in_goal


def test_effective_rating_never_below_one(make_player):
    assert effective_rating(XIEntry(make_player("x", Position.GK, 10), Unit.FWD)) == 1


def test_team_strength_uniform_squad(home_club):
    strength = team_strength(home_club, select_starting_xi(home_club))
    assert (strength.attack, strength.defense, strength.midfield, strength.overall) == (70, 70, 70, 70)


def test_team_strength_empty_xi_uses_base_rating(make_club):
    club = make_club("c", rating=63, layout=())
    assert team_strength(club, []).overall == 63


def test_team_strength_ignores_empty_units(make_club):
    club = make_club("c", layout=((Position.GK, 1), (Position.CB, 4)))
    strength = team_strength(club, select_starting_xi(club))
    assert strength.attack == 0
    assert strength.midfield == 0
    assert strength.overall == strength.defense == 70


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(-0.5) == 0


def test_dynamic_strength_drops_per_missing_player():
    assert dynamic_strength(70, 11) == 70
    assert dynamic_strength(70, 9) == 64
    assert dynamic_strength(5, 0) == 1


def test_home_dominance_clamped():
    assert home_dominance(70, 70) == pytest.approx(0.55)
    assert home_dominance(99, 1) == pytest.approx(0.9)
    assert home_dominance(1, 99) == pytest.approx(0.1)


def test_two_reds_lower_dominance():
    full = home_dominance(dynamic_strength(70, 11), 70)
    two_down = home_dominance(dynamic_strength(70, 9), 70)
    assert two_down < full
