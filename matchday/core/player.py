from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Unit(Enum):
    """Lagdel som en spelare ställs upp i."""

    GK = "GK"
    DEF = "DEF"
    MID = "MID"
    FWD = "FWD"


class Position(Enum):
    GK = "GK"
    # Backar
    LB = "LB"
    CB = "CB"
    RB = "RB"
    LWB = "LWB"
    RWB = "RWB"
    # Mittfält
    CDM = "CDM"
    CM = "CM"
    CAM = "CAM"
    LM = "LM"
    RM = "RM"
    # Anfall
    LW = "LW"
    RW = "RW"
    CF = "CF"
    ST = "ST"

    @property
    def unit(self) -> Unit:
        return POSITION_UNITS[self]


POSITION_UNITS = {
    Position.GK: Unit.GK,
    Position.LB: Unit.DEF,
    Position.CB: Unit.DEF,
    Position.RB: Unit.DEF,
    Position.LWB: Unit.DEF,
    Position.RWB: Unit.DEF,
    Position.CDM: Unit.MID,
    Position.CM: Unit.MID,
    Position.CAM: Unit.MID,
    Position.LM: Unit.MID,
    Position.RM: Unit.MID,
    Position.LW: Unit.FWD,
    Position.RW: Unit.FWD,
    Position.CF: Unit.FWD,
    Position.ST: Unit.FWD,
}


@dataclass(slots=True)
class PlayerAttributes:
    pace: int = 50
    shooting: int = 50
    passing: int = 50
    dribbling: int = 50
    defending: int = 50
    physical: int = 50


@dataclass(slots=True)
class Player:
    id: str
    name: str
    position: Position
    rating: int = 60  # 1–99

    attributes: Optional[PlayerAttributes] = None

    # Tillgänglighet (sätts av omvärlden, motorn läser bara)
    suspension_games: int = 0
    injury: Optional[str] = None
    illness: Optional[str] = None

    @property
    def unit(self) -> Unit:
        return self.position.unit

    @property
    def is_available(self) -> bool:
        return not self.suspension_games and not self.injury and not self.illness

    def stat(self, attribute: str) -> int:
        """Attributvärde, eller overall-betyget om attributet saknas."""
        if self.attributes is None:
            return self.rating
        value = getattr(self.attributes, attribute, None)
        # 0 räknas som saknat värde, precis som ett tomt fält
        return value or self.rating
