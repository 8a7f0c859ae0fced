from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .player import Player

DEFAULT_FORMATION = "4-3-3"


@dataclass(slots=True)
class Club:
    club_id: str
    name: str
    players: List[Player] = field(default_factory=list)
    formation: str = DEFAULT_FORMATION
    # Reservstyrka när ingen elva kan ställas upp
    base_rating: int = 60
    league: str = "League"

    def player_by_id(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def available_players(self) -> List[Player]:
        return [p for p in self.players if p.is_available]

    def average_rating(self) -> float:
        if not self.players:
            return 0.0
        return sum(p.rating for p in self.players) / len(self.players)


def clubs_by_id(clubs: Iterable[Club]) -> Dict[str, Club]:
    return {club.club_id: club for club in clubs}
