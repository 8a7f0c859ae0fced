from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Deque, Dict, List, Optional, Set, Tuple

from .club import Club
from .commentary import Commentary
from .events import CardRecord, MatchEvent, ScorerRecord
from .lineup import XIEntry
from .player import Player
from .strength import TeamStrength

LAST_MINUTE = 90
CHAIN_DELAYS = (1, 2)


@dataclass(slots=True)
class Side:
    """Ett lag i en pågående match: elva, styrka och spelare kvar på planen."""

    key: str  # "home" | "away"
    club: Club
    xi: List[XIEntry]
    strength: TeamStrength
    # Ordnad lista (inte set) så att en given seed ger samma match i alla processer
    active_ids: List[str] = field(default_factory=list)

    @classmethod
    def from_xi(cls, key: str, club: Club, xi: List[XIEntry], strength: TeamStrength) -> "Side":
        return cls(
            key=key,
            club=club,
            xi=list(xi),
            strength=strength,
            active_ids=[entry.player.id for entry in xi],
        )

    def active_entries(self) -> List[XIEntry]:
        active = set(self.active_ids)
        return [entry for entry in self.xi if entry.player.id in active]

    def player(self, player_id: str) -> Optional[Player]:
        return next((e.player for e in self.xi if e.player.id == player_id), None)

    def send_off(self, player_id: str) -> None:
        self.active_ids = [pid for pid in self.active_ids if pid != player_id]


class Chain(Enum):
    CORNER_OUTCOME = auto()
    VAR_DECISION = auto()
    PENALTY_KICK = auto()


@dataclass(slots=True)
class PendingResolution:
    minute: int
    trigger_minute: int
    chain: Chain
    attack: Side
    defence: Side
    taker: Optional[Player] = None


@dataclass(slots=True)
class TimelineState:
    home: Side
    away: Side
    events: List[MatchEvent] = field(default_factory=list)
    scorers: List[ScorerRecord] = field(default_factory=list)
    cards: List[CardRecord] = field(default_factory=list)
    goals: Dict[str, int] = field(default_factory=lambda: {"home": 0, "away": 0})
    yellow_counts: Dict[str, int] = field(default_factory=dict)
    blocked_minutes: Set[int] = field(default_factory=set)
    pending: Deque[PendingResolution] = field(default_factory=deque)
    # (utlösande minut, avgörande minut) för hörnor, VAR och straffar
    windows: List[Tuple[int, int]] = field(default_factory=list)
    independent_minutes: List[int] = field(default_factory=list)
    dominance_log: List[Tuple[int, float]] = field(default_factory=list)
    iterations: int = 0

    def occupied_minutes(self) -> Set[int]:
        return {ev.minute for ev in self.events} | set(self.independent_minutes)

    def schedule(
        self,
        chain: Chain,
        trigger_minute: int,
        attack: Side,
        defence: Side,
        rng: random.Random,
        *,
        taker: Optional[Player] = None,
    ) -> PendingResolution:
        """
        Lägg ett följdavgörande 1–2 minuter efter trigger. Minuterna emellan
        spärras för nya händelser. Den dragna fördröjningen prövas först, sedan
        den andra; en kandidat godtas om fönstret är tomt och minuten inte
        ligger inuti ett tidigare fönster. Annars avgörs det i samma minut.
        """
        delay = CHAIN_DELAYS[rng.randrange(len(CHAIN_DELAYS))]
        occupied = self.occupied_minutes()
        minute = trigger_minute
        for step in [delay] + [d for d in CHAIN_DELAYS if d != delay]:
            candidate = min(trigger_minute + step, LAST_MINUTE)
            if candidate in self.blocked_minutes:
                continue
            if any(m in occupied for m in range(trigger_minute + 1, candidate)):
                continue
            minute = candidate
            break
        self.blocked_minutes.update(range(trigger_minute + 1, minute))
        self.windows.append((trigger_minute, minute))
        pending = PendingResolution(
            minute=minute,
            trigger_minute=trigger_minute,
            chain=chain,
            attack=attack,
            defence=defence,
            taker=taker,
        )
        self.pending.append(pending)
        return pending


@dataclass(frozen=True, slots=True)
class PlayContext:
    """Allt en resolver behöver för en händelse, skickas explicit."""

    state: TimelineState
    attack: Side
    defence: Side
    minute: int
    rng: random.Random
    commentary: Commentary
