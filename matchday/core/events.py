from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ---------------------------------
# Händelsetyper
# ---------------------------------


class EventType(Enum):
    GOAL = "GOAL"
    SAVE = "SAVE"
    MISS = "MISS"
    CARD = "CARD"
    CORNER = "CORNER"
    FOUL = "FOUL"
    POST = "POST"
    SUBSTITUTION = "SUBSTITUTION"
    VAR = "VAR"
    PENALTY = "PENALTY"


class CardKind(Enum):
    YELLOW = "YELLOW"
    RED = "RED"


# ---------------------------------
# Matchprotokoll
# ---------------------------------


@dataclass(frozen=True, slots=True)
class MatchEvent:
    minute: int
    kind: EventType
    description: str
    important: bool = False
    team_name: str = ""


@dataclass(frozen=True, slots=True)
class CardRecord:
    player_id: str
    team_id: str
    kind: CardKind
    minute: int


@dataclass(frozen=True, slots=True)
class ScorerRecord:
    name: str
    minute: int
    team_id: str
    assist: Optional[str] = None
    # None för platshållaren "Unknown Player"
    scorer_id: Optional[str] = None
    assist_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class MotmRef:
    team_id: str
    player_id: str


# ---------------------------------
# Domare
# ---------------------------------


REFEREE_NAMES = [
    "Michael Oliver",
    "Anthony Taylor",
    "Simon Hooper",
    "Chris Kavanagh",
    "Stuart Attwell",
    "Paul Tierney",
    "Robert Jones",
    "Andy Madley",
    "Craig Pawson",
    "John Brooks",
    "Jarred Gillett",
    "Tim Robinson",
    "David Coote",
    "Peter Bankes",
    "Darren England",
    "Sam Barrott",
]


@dataclass(frozen=True, slots=True)
class Referee:
    name: str = "Referee"
