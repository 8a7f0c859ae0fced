from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from matchday.core.club import Club
from matchday.core.player import Player, PlayerAttributes, Position

DEFAULT_LAYOUT: Sequence[Tuple[Position, int]] = (
    (Position.GK, 2),
    (Position.CB, 5),
    (Position.CM, 5),
    (Position.ST, 4),
)


def _make_player(
    pid: str,
    position: Position,
    rating: int = 70,
    attributes: Optional[PlayerAttributes] = None,
    **availability,
) -> Player:
    return Player(
        id=pid,
        name=f"Player {pid}",
        position=position,
        rating=rating,
        attributes=attributes,
        **availability,
    )


def _make_club(
    club_id: str,
    name: Optional[str] = None,
    *,
    rating: int = 70,
    formation: str = "4-3-3",
    league: str = "Testligan",
    layout: Sequence[Tuple[Position, int]] = DEFAULT_LAYOUT,
) -> Club:
    players: List[Player] = []
    n = 1
    for position, count in layout:
        for _ in range(count):
            players.append(_make_player(f"{club_id}-p{n}", position, rating))
            n += 1
    return Club(
        club_id=club_id,
        name=name or club_id.capitalize(),
        players=players,
        formation=formation,
        base_rating=rating,
        league=league,
    )


@pytest.fixture()
def make_player() -> Callable[..., Player]:
    return _make_player


@pytest.fixture()
def make_club() -> Callable[..., Club]:
    return _make_club


@pytest.fixture()
def home_club() -> Club:
    return _make_club("home", "Hemma FC")


@pytest.fixture()
def away_club() -> Club:
    return _make_club("away", "Borta IF")


@pytest.fixture()
def league_clubs() -> List[Club]:
    return [
        _make_club("alpha", "Alpha", rating=72),
        _make_club("bravo", "Bravo", rating=68),
        _make_club("charlie", "Charlie", rating=70),
        _make_club("delta", "Delta", rating=65),
    ]
