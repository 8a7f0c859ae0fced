from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .events import CardKind, CardRecord, MotmRef, ScorerRecord
from .lineup import XIEntry
from .player import Unit

RATING_MIN = 4.0
RATING_MAX = 10.0
FULL_MATCH = 90


class MatchOutcome(Enum):
    WIN = "WIN"
    DRAW = "DRAW"
    LOSS = "LOSS"


@dataclass(slots=True)
class MatchPerformance:
    player_id: str
    fixture_id: str
    week: int
    opponent_id: str
    opponent_name: str
    is_home: bool
    result: MatchOutcome
    team_score: int
    opponent_score: int
    rating: float
    goals: int = 0
    assists: int = 0
    shots: int = 0
    shots_on_target: int = 0
    passes: int = 0
    pass_accuracy: int = 0
    # Endast backar och mittfältare
    tackles: Optional[int] = None
    interceptions: Optional[int] = None
    # Endast målvakter
    saves: Optional[int] = None
    yellow_cards: int = 0
    red_card: bool = False
    minutes_played: int = FULL_MATCH
    man_of_the_match: bool = False


@dataclass(frozen=True, slots=True)
class SideSheet:
    """En sidas underlag för betygen efter slutsignal."""

    team_id: str
    team_name: str
    xi: Sequence[XIEntry]
    goals_for: int
    goals_against: int
    is_home: bool


def outcome_for(goals_for: int, goals_against: int) -> MatchOutcome:
    if goals_for > goals_against:
        return MatchOutcome.WIN
    if goals_for == goals_against:
        return MatchOutcome.DRAW
    return MatchOutcome.LOSS


def round_rating(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def _count_goals(scorers: Sequence[ScorerRecord], player_id: str, team_id: str):
    goals = sum(1 for s in scorers if s.scorer_id == player_id and s.team_id == team_id)
    assists = sum(1 for s in scorers if s.assist_id == player_id and s.team_id == team_id)
    return goals, assists


def player_performance(
    entry: XIEntry,
    sheet: SideSheet,
    opponent: SideSheet,
    *,
    fixture_id: str,
    week: int,
    scorers: Sequence[ScorerRecord],
    cards: Sequence[CardRecord],
    rng: random.Random,
) -> MatchPerformance:
    """
    Syntetiserar statistik och betyg för en spelare utifrån lagdelen hen
    spelade i. bp = (betyg − 50) / 50 styr både statistik och grundbetyg.
    """
    player = entry.player
    unit = entry.unit
    bp = (player.rating - 50) / 50
    conceded = sheet.goals_against

    goals, assists = _count_goals(scorers, player.id, sheet.team_id)
    own_cards = [c for c in cards if c.player_id == player.id and c.team_id == sheet.team_id]
    yellows = sum(1 for c in own_cards if c.kind is CardKind.YELLOW)
    red = any(c.kind is CardKind.RED for c in own_cards)

    shots = on_target = passes = 0
    accuracy = 0.0
    tackles = interceptions = saves = 0

    if unit is Unit.FWD:
        shots = rng.randrange(5) + math.floor(bp * 3)
        on_target = math.floor(shots * (0.3 + bp * 0.2))
        passes = rng.randrange(20) + 15 + math.floor(bp * 10)
        accuracy = 70 + bp * 20
    elif unit is Unit.MID:
        shots = rng.randrange(3) + math.floor(bp * 1.5)
        on_target = math.floor(shots * 0.4)
        passes = rng.randrange(30) + 30 + math.floor(bp * 15)
        accuracy = 75 + bp * 16
        tackles = rng.randrange(5) + 2 + math.floor(bp * 3)
        interceptions = rng.randrange(3) + 1 + math.floor(bp * 2)
    elif unit is Unit.DEF:
        shots = rng.randrange(2)
        on_target = math.floor(shots * 0.5)
        passes = rng.randrange(25) + 20 + math.floor(bp * 10)
        accuracy = 80 + bp * 9
        tackles = rng.randrange(6) + 3 + math.floor(bp * 3.5)
        interceptions = rng.randrange(4) + 2 + math.floor(bp * 2)
    else:
        passes = rng.randrange(15) + 10 + math.floor(bp * 7.5)
        accuracy = 60 + bp * 20
        saves = rng.randrange(5) + math.floor(conceded * 0.5) + (2 if conceded == 0 else 0)

    shots = max(0, shots)
    on_target = max(0, min(on_target, shots))
    passes = max(0, passes)
    accuracy = max(0.0, min(100.0, accuracy))
    tackles = max(0, tackles)
    interceptions = max(0, interceptions)
    saves = max(0, saves)

    # 1) Grund från betyg och målinsats
    rating = 6.0 + bp * 1.5
    rating += goals * 0.8 + assists * 0.5

    # 2) Lagresultat
    outcome = outcome_for(sheet.goals_for, sheet.goals_against)
    rating += {MatchOutcome.WIN: 0.3, MatchOutcome.DRAW: 0.1, MatchOutcome.LOSS: -0.1}[outcome]

    # 3) Lagdelsberoende bonusar
    if unit is Unit.GK:
        rating += 0.5 if conceded == 0 else -0.15 * conceded
        if saves > 3:
            rating += (saves - 3) * 0.1
        if accuracy > 70:
            rating += (accuracy - 70) / 200
    elif unit is Unit.FWD:
        if on_target > 0:
            rating += (on_target / shots) * 0.3
        if accuracy > 80:
            rating += (accuracy - 80) / 100
    elif unit is Unit.MID:
        if passes > 40:
            rating += (passes - 40) / 200
        if accuracy > 85:
            rating += (accuracy - 85) / 100
        if tackles > 4:
            rating += (tackles - 4) * 0.05
    else:
        if accuracy > 85:
            rating += (accuracy - 85) / 100
        if tackles > 5:
            rating += (tackles - 5) * 0.05
        if interceptions > 3:
            rating += (interceptions - 3) * 0.05

    # 4) Kort
    if red:
        rating -= 1.5
    else:
        rating -= 0.2 * yellows

    # 5) Dagsform
    rating += (rng.random() - 0.5) * 0.4
    rating = max(RATING_MIN, min(RATING_MAX, rating))

    minutes = rng.randrange(60) + 30 if red else FULL_MATCH
    defensive = unit in (Unit.DEF, Unit.MID)

    return MatchPerformance(
        player_id=player.id,
        fixture_id=fixture_id,
        week=week,
        opponent_id=opponent.team_id,
        opponent_name=opponent.team_name,
        is_home=sheet.is_home,
        result=outcome,
        team_score=sheet.goals_for,
        opponent_score=sheet.goals_against,
        rating=round_rating(rating),
        goals=goals,
        assists=assists,
        shots=shots,
        shots_on_target=on_target,
        passes=passes,
        pass_accuracy=int(math.floor(accuracy + 0.5)),
        tackles=tackles if defensive else None,
        interceptions=interceptions if defensive else None,
        saves=saves if unit is Unit.GK else None,
        yellow_cards=yellows,
        red_card=red,
        minutes_played=minutes,
    )


def build_performances(
    home: SideSheet,
    away: SideSheet,
    *,
    fixture_id: str,
    week: int,
    scorers: Sequence[ScorerRecord],
    cards: Sequence[CardRecord],
    rng: random.Random,
    motm: Optional[MotmRef] = None,
) -> List[MatchPerformance]:
    """En prestation per startspelare, hemmalaget först, i elvans ordning."""
    performances: List[MatchPerformance] = []
    for sheet, opponent in ((home, away), (away, home)):
        for entry in sheet.xi:
            perf = player_performance(
                entry,
                sheet,
                opponent,
                fixture_id=fixture_id,
                week=week,
                scorers=scorers,
                cards=cards,
                rng=rng,
            )
            if motm is not None and motm.player_id == perf.player_id and motm.team_id == sheet.team_id:
                perf.man_of_the_match = True
            performances.append(perf)
    return performances


# ---------------------------------
# Matchens lirare
# ---------------------------------


def motm_score(entry: XIEntry, sheet: SideSheet, scorers: Sequence[ScorerRecord]) -> int:
    goals, assists = _count_goals(scorers, entry.player.id, sheet.team_id)
    score = entry.player.rating * 2 + goals * 25 + assists * 12
    if sheet.goals_for > sheet.goals_against:
        score += 5
    if entry.unit is Unit.GK and sheet.goals_against == 0:
        score += 10
    return score


def select_man_of_the_match(
    home: SideSheet, away: SideSheet, scorers: Sequence[ScorerRecord]
) -> Optional[MotmRef]:
    """
    Högst poäng vinner; lika poäng → högre grundbetyg; fortfarande lika →
    först i ordningen hemma-elvan, borta-elvan. Ingen slump.
    """
    best: Optional[MotmRef] = None
    best_key = None
    for sheet in (home, away):
        for entry in sheet.xi:
            key = (motm_score(entry, sheet, scorers), entry.player.rating)
            if best_key is None or key > best_key:
                best_key = key
                best = MotmRef(team_id=sheet.team_id, player_id=entry.player.id)
    return best


def performance_by_player(performances: Sequence[MatchPerformance]) -> Dict[str, MatchPerformance]:
    return {p.player_id: p for p in performances}
