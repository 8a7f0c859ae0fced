from __future__ import annotations

from typing import Any, Dict, Iterable, List

from matchday.core.club import Club
from matchday.core.fixtures import Fixture
from matchday.core.standings import TableRow, build_table
from matchday.core.stats import PlayerSeasonStats, top_scorers


def _club_summary(club: Club) -> Dict[str, Any]:
    return {
        "id": club.club_id,
        "name": club.name,
        "league": club.league,
        "formation": club.formation,
        "squad_size": len(club.players),
        "average_rating": round(club.average_rating(), 1),
    }


def table_row_entry(position: int, row: TableRow) -> Dict[str, Any]:
    return {
        "pos": position,
        "team_id": row.club_id,
        "name": row.name,
        "mp": row.mp,
        "w": row.w,
        "d": row.d,
        "l": row.losses,
        "gf": row.gf,
        "ga": row.ga,
        "gd": row.gd,
        "pts": row.pts,
    }


def table_entries(rows: Iterable[TableRow]) -> List[Dict[str, Any]]:
    return [table_row_entry(idx, row) for idx, row in enumerate(rows, start=1)]


def fixture_summary(fixture: Fixture) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "id": fixture.fixture_id,
        "week": fixture.week,
        "league": fixture.league,
        "home": fixture.home_id,
        "away": fixture.away_id,
        "played": fixture.played,
    }
    if fixture.played:
        motm = fixture.man_of_the_match
        entry["result"] = {
            "home_goals": fixture.home_score,
            "away_goals": fixture.away_score,
            "scorers": [
                {"name": s.name, "minute": s.minute, "team_id": s.team_id, "assist": s.assist}
                for s in fixture.scorers
            ],
            "man_of_the_match": motm.player_id if motm else None,
            "referee": fixture.referee.name if fixture.referee else None,
        }
    return entry


def player_stats_entry(stats: PlayerSeasonStats) -> Dict[str, Any]:
    return {
        "player_id": stats.player_id,
        "team_id": stats.club_id,
        "appearances": stats.appearances,
        "minutes": stats.minutes,
        "goals": stats.goals,
        "assists": stats.assists,
        "yellows": stats.yellows,
        "reds": stats.reds,
        "motm": stats.motm,
        "rating_avg": round(stats.rating_avg, 2),
        "form": list(stats.form),
    }


def build_contract(clubs: List[Club], fixtures: List[Fixture]) -> Dict[str, Any]:
    """Hela ligan som ett JSON-kontrakt: lag, tabeller per liga, matcher och skytteliga."""
    leagues: Dict[str, List[Club]] = {}
    for club in clubs:
        leagues.setdefault(club.league, []).append(club)

    standings = {
        league: table_entries(
            build_table(members, [f for f in fixtures if f.league in ("", league)])
        )
        for league, members in leagues.items()
    }
    weeks_played = sorted({f.week for f in fixtures if f.played})
    return {
        "teams": [_club_summary(c) for c in clubs],
        "standings": standings,
        "fixtures": [fixture_summary(f) for f in fixtures],
        "top_scorers": top_scorers(fixtures),
        "weeks_played": weeks_played,
    }
