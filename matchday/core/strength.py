from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .club import Club
from .lineup import XI_SIZE, XIEntry
from .player import Position, Unit

# Avdrag när en spelare ställs upp utanför sin lagdel: (nominell, spelad) -> avdrag
CROSS_UNIT_PENALTY: Dict[Tuple[Unit, Unit], int] = {
    (Unit.FWD, Unit.DEF): 35,
    (Unit.DEF, Unit.FWD): 30,
    (Unit.FWD, Unit.MID): 20,
    (Unit.MID, Unit.FWD): 15,
    (Unit.MID, Unit.DEF): 18,
    (Unit.DEF, Unit.MID): 15,
}
GK_OUTFIELD_PENALTY = 50
DEFAULT_PENALTY = 25
SPECIALIST_MID_PENALTY = 2

MISSING_PLAYER_PENALTY = 3

HOME_EDGE = 0.55
DOMINANCE_PER_POINT = 0.04
DOMINANCE_MIN = 0.1
DOMINANCE_MAX = 0.9


@dataclass(frozen=True, slots=True)
class TeamStrength:
    attack: int
    defense: int
    midfield: int
    overall: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def position_penalty(position: Position, unit: Unit) -> int:
    nominal = position.unit
    if nominal is unit:
        # CAM/CDM tappar lite i andra mittfältsroller, CM spelar var som helst
        if position in (Position.CAM, Position.CDM):
            return SPECIALIST_MID_PENALTY
        return 0
    if nominal is Unit.GK:
        return GK_OUTFIELD_PENALTY
    return CROSS_UNIT_PENALTY.get((nominal, unit), DEFAULT_PENALTY)


def effective_rating(entry: XIEntry) -> int:
    return max(1, entry.player.rating - position_penalty(entry.player.position, entry.unit))


def _unit_mean(entries: Sequence[XIEntry]) -> int:
    if not entries:
        return 0
    return round_half_up(sum(effective_rating(e) for e in entries) / len(entries))


def team_strength(club: Club, xi: List[XIEntry]) -> TeamStrength:
    """
    Anfall = snitt av FWD, försvar = snitt av DEF + GK, mittfält = snitt av MID.
    Total = snitt av de lagdelar som har spelare; tom elva → klubbens basbetyg.
    """
    if not xi:
        base = int(club.base_rating)
        return TeamStrength(attack=0, defense=0, midfield=0, overall=base)

    attack = _unit_mean([e for e in xi if e.unit is Unit.FWD])
    defense = _unit_mean([e for e in xi if e.unit in (Unit.DEF, Unit.GK)])
    midfield = _unit_mean([e for e in xi if e.unit is Unit.MID])

    filled = [r for r in (attack, defense, midfield) if r > 0]
    overall = round_half_up(sum(filled) / len(filled)) if filled else int(club.base_rating)
    return TeamStrength(attack=attack, defense=defense, midfield=midfield, overall=overall)


def dynamic_strength(overall: int, active_players: int) -> int:
    """Tappar 3 poäng per saknad spelare (utvisningar, för kort trupp)."""
    missing = XI_SIZE - active_players
    return max(1, overall - missing * MISSING_PLAYER_PENALTY)


def home_dominance(home_strength: float, away_strength: float) -> float:
    """Sannolikheten att en händelse tillfaller hemmalaget."""
    raw = HOME_EDGE + DOMINANCE_PER_POINT * (home_strength - away_strength)
    return max(DOMINANCE_MIN, min(DOMINANCE_MAX, raw))
