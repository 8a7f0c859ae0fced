from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .club import Club
from .events import CardRecord, MatchEvent, MotmRef, Referee, ScorerRecord
from .ratings import MatchPerformance


@dataclass(slots=True)
class Fixture:
    fixture_id: str
    week: int
    home_id: str
    away_id: str
    league: str = ""
    played: bool = False
    home_score: int = 0
    away_score: int = 0
    events: List[MatchEvent] = field(default_factory=list)
    scorers: List[ScorerRecord] = field(default_factory=list)
    cards: List[CardRecord] = field(default_factory=list)
    home_xi: List[str] = field(default_factory=list)
    away_xi: List[str] = field(default_factory=list)
    man_of_the_match: Optional[MotmRef] = None
    referee: Optional[Referee] = None
    performances: List[MatchPerformance] = field(default_factory=list)

    def involves(self, club_id: str) -> bool:
        return club_id in (self.home_id, self.away_id)

    def __str__(self) -> str:
        score = f"{self.home_score}-{self.away_score}" if self.played else "vs"
        return f"{self.week}: {self.home_id} {score} {self.away_id}"


def league_slug(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "league"


def _circle_rounds(club_ids: List[str]) -> List[List[Tuple[str, str]]]:
    # Klassisk round-robin: första laget står still, resten roterar
    ids: List[Optional[str]] = list(club_ids)
    if len(ids) % 2:
        ids.append(None)  # bye om ojämnt antal
    n = len(ids)

    rounds: List[List[Tuple[str, str]]] = []
    for i in range(n - 1):
        mid = n // 2
        l1 = ids[:mid]
        l2 = ids[mid:]
        l2.reverse()
        pairings = []
        for a, b in zip(l1, l2):
            if a is None or b is None:
                continue
            # Växla hemmaplan varannan omgång så att ingen spelar hemma jämt
            pairings.append((b, a) if i % 2 else (a, b))
        rounds.append(pairings)
        ids.insert(1, ids.pop())
    return rounds


def round_robin(
    clubs: List[Club],
    *,
    double_round: bool = True,
    rng: Optional[random.Random] = None,
) -> List[Fixture]:
    """
    Spelschema per liga: alla möter alla en gång per halva. Andra halvan
    speglar den första med ombytt hemmaplan. Omgångar 1..2(n−1).
    Indatalistan ändras inte.
    """
    by_league: Dict[str, List[Club]] = {}
    for club in clubs:
        by_league.setdefault(club.league, []).append(club)

    fixtures: List[Fixture] = []
    for league, members in by_league.items():
        if len(members) < 2:
            continue
        ids = [club.club_id for club in members]
        if rng is not None:
            rng.shuffle(ids)

        rounds = _circle_rounds(ids)
        if double_round:
            rounds = rounds + [[(away, home) for home, away in pairs] for pairs in rounds]

        slug = league_slug(league)
        for week, pairs in enumerate(rounds, start=1):
            for index, (home_id, away_id) in enumerate(pairs, start=1):
                fixtures.append(
                    Fixture(
                        fixture_id=f"fix-{slug}-{week}-{index}",
                        week=week,
                        home_id=home_id,
                        away_id=away_id,
                        league=league,
                    )
                )
    return fixtures


def fixtures_for_week(fixtures: List[Fixture], week: int) -> List[Fixture]:
    return [f for f in fixtures if f.week == week]


def weeks(fixtures: List[Fixture]) -> List[int]:
    return sorted({f.week for f in fixtures})
