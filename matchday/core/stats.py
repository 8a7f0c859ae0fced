from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .events import CardKind
from .fixtures import Fixture

FORM_LENGTH = 5

# -------- Spelarstatistik (per säsong) --------


@dataclass(slots=True)
class PlayerSeasonStats:
    player_id: str
    club_id: str
    appearances: int = 0
    minutes: int = 0
    goals: int = 0
    assists: int = 0
    yellows: int = 0
    reds: int = 0
    motm: int = 0
    rating_sum: float = 0.0
    rating_count: int = 0
    # True = mål eller assist i matchen, senaste matchen sist
    form: List[bool] = field(default_factory=list)

    @property
    def rating_avg(self) -> float:
        return (self.rating_sum / self.rating_count) if self.rating_count else 0.0

    @property
    def points(self) -> int:
        return self.goals + self.assists


def _started(fixture: Fixture, player_id: str, club_id: str) -> bool:
    if fixture.home_id == club_id:
        return player_id in fixture.home_xi
    if fixture.away_id == club_id:
        return player_id in fixture.away_xi
    return False


def player_season_stats(player_id: str, club_id: str, fixtures: Iterable[Fixture]) -> PlayerSeasonStats:
    """
    Summerar en spelares spelade matcher i omgångsordning. Mål och assist
    matchas på spelar-id, aldrig på namn.
    """
    stats = PlayerSeasonStats(player_id=player_id, club_id=club_id)
    played = sorted((f for f in fixtures if f.played), key=lambda f: f.week)
    for fixture in played:
        if not _started(fixture, player_id, club_id):
            continue
        stats.appearances += 1

        goals = sum(1 for s in fixture.scorers if s.scorer_id == player_id and s.team_id == club_id)
        assists = sum(1 for s in fixture.scorers if s.assist_id == player_id and s.team_id == club_id)
        stats.goals += goals
        stats.assists += assists

        for card in fixture.cards:
            if card.player_id != player_id or card.team_id != club_id:
                continue
            if card.kind is CardKind.RED:
                stats.reds += 1
            else:
                stats.yellows += 1

        perf = next((p for p in fixture.performances if p.player_id == player_id), None)
        if perf is not None:
            stats.minutes += perf.minutes_played
            stats.rating_sum += perf.rating
            stats.rating_count += 1
        motm = fixture.man_of_the_match
        if motm is not None and motm.player_id == player_id and motm.team_id == club_id:
            stats.motm += 1

        stats.form.append(goals + assists > 0)
    stats.form = stats.form[-FORM_LENGTH:]
    return stats


def top_scorers(fixtures: Iterable[Fixture], limit: int = 10) -> List[Dict[str, object]]:
    """Skytteliga: [{player_id, team_id, name, goals}] sorterad på mål, sedan namn."""
    tally: Dict[tuple, Dict[str, object]] = {}
    for fixture in fixtures:
        if not fixture.played:
            continue
        for s in fixture.scorers:
            if s.scorer_id is None:
                continue
            key = (s.scorer_id, s.team_id)
            row = tally.setdefault(
                key, {"player_id": s.scorer_id, "team_id": s.team_id, "name": s.name, "goals": 0}
            )
            row["goals"] += 1
    rows = sorted(tally.values(), key=lambda r: r["name"])
    rows.sort(key=lambda r: r["goals"], reverse=True)
    return rows[:limit]
