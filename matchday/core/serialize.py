from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from .club import DEFAULT_FORMATION, Club
from .events import (
    CardKind,
    CardRecord,
    EventType,
    MatchEvent,
    MotmRef,
    Referee,
    ScorerRecord,
)
from .fixtures import Fixture
from .player import Player, PlayerAttributes, Position
from .ratings import MatchOutcome, MatchPerformance

ATTRIBUTE_NAMES = ("pace", "shooting", "passing", "dribbling", "defending", "physical")

# -------------------------------------------------------------------
# PLAYER
# -------------------------------------------------------------------


def player_to_dict(p: Player) -> Dict[str, Any]:
    attrs = None
    if p.attributes is not None:
        attrs = {name: int(getattr(p.attributes, name)) for name in ATTRIBUTE_NAMES}
    return {
        "id": p.id,
        "name": p.name,
        "position": p.position.value,
        "rating": int(p.rating),
        "attributes": attrs,
        "suspension_games": int(p.suspension_games),
        "injury": p.injury,
        "illness": p.illness,
    }


def _position_from(raw: Any) -> Position:
    try:
        return Position(str(raw).upper())
    except ValueError:
        return Position.CM  # okända positioner blir centrala mittfältare


def _attributes_from(raw: Any) -> Optional[PlayerAttributes]:
    if not isinstance(raw, dict):
        return None
    values: Dict[str, int] = {}
    for name in ATTRIBUTE_NAMES:
        if name in raw and raw[name] is not None:
            values[name] = int(raw[name])
    return PlayerAttributes(**values)


def player_from_dict(d: Dict[str, Any]) -> Player:
    return Player(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        position=_position_from(d.get("position", "CM")),
        rating=int(d.get("rating", 60)),
        attributes=_attributes_from(d.get("attributes")),
        suspension_games=int(d.get("suspension_games", 0) or 0),
        injury=d.get("injury") or None,
        illness=d.get("illness") or None,
    )


# -------------------------------------------------------------------
# CLUB
# -------------------------------------------------------------------


def club_to_dict(c: Club) -> Dict[str, Any]:
    return {
        "club_id": c.club_id,
        "name": c.name,
        "league": c.league,
        "formation": c.formation,
        "base_rating": int(c.base_rating),
        "players": [player_to_dict(p) for p in c.players],
    }


def club_from_dict(d: Dict[str, Any]) -> Club:
    return Club(
        club_id=str(d.get("club_id", d.get("id", ""))),
        name=d.get("name", ""),
        players=[player_from_dict(x) for x in (d.get("players") or [])],
        formation=d.get("formation") or DEFAULT_FORMATION,
        base_rating=int(d.get("base_rating", 60)),
        league=d.get("league") or "League",
    )


# -------------------------------------------------------------------
# MATCH RECORDS
# -------------------------------------------------------------------


def event_to_dict(ev: MatchEvent) -> Dict[str, Any]:
    return {
        "minute": ev.minute,
        "type": ev.kind.value,
        "description": ev.description,
        "important": ev.important,
        "team_name": ev.team_name,
    }


def event_from_dict(d: Dict[str, Any]) -> MatchEvent:
    return MatchEvent(
        minute=int(d.get("minute", 0)),
        kind=EventType(d.get("type", "MISS")),
        description=d.get("description", ""),
        important=bool(d.get("important", False)),
        team_name=d.get("team_name", ""),
    )


def scorer_to_dict(s: ScorerRecord) -> Dict[str, Any]:
    return {
        "name": s.name,
        "minute": s.minute,
        "team_id": s.team_id,
        "assist": s.assist,
        "scorer_id": s.scorer_id,
        "assist_id": s.assist_id,
    }


def scorer_from_dict(d: Dict[str, Any]) -> ScorerRecord:
    return ScorerRecord(
        name=d.get("name", ""),
        minute=int(d.get("minute", 0)),
        team_id=str(d.get("team_id", "")),
        assist=d.get("assist"),
        scorer_id=d.get("scorer_id"),
        assist_id=d.get("assist_id"),
    )


def card_to_dict(c: CardRecord) -> Dict[str, Any]:
    return {"player_id": c.player_id, "team_id": c.team_id, "type": c.kind.value, "minute": c.minute}


def card_from_dict(d: Dict[str, Any]) -> CardRecord:
    return CardRecord(
        player_id=str(d.get("player_id", "")),
        team_id=str(d.get("team_id", "")),
        kind=CardKind(d.get("type", "YELLOW")),
        minute=int(d.get("minute", 0)),
    )


def performance_to_dict(p: MatchPerformance) -> Dict[str, Any]:
    return {
        "player_id": p.player_id,
        "fixture_id": p.fixture_id,
        "week": p.week,
        "opponent_id": p.opponent_id,
        "opponent_name": p.opponent_name,
        "is_home": p.is_home,
        "result": p.result.value,
        "team_score": p.team_score,
        "opponent_score": p.opponent_score,
        "rating": p.rating,
        "goals": p.goals,
        "assists": p.assists,
        "shots": p.shots,
        "shots_on_target": p.shots_on_target,
        "passes": p.passes,
        "pass_accuracy": p.pass_accuracy,
        "tackles": p.tackles,
        "interceptions": p.interceptions,
        "saves": p.saves,
        "yellow_cards": p.yellow_cards,
        "red_card": p.red_card,
        "minutes_played": p.minutes_played,
        "man_of_the_match": p.man_of_the_match,
    }


def performance_from_dict(d: Dict[str, Any]) -> MatchPerformance:
    return MatchPerformance(
        player_id=str(d.get("player_id", "")),
        fixture_id=str(d.get("fixture_id", "")),
        week=int(d.get("week", 0)),
        opponent_id=str(d.get("opponent_id", "")),
        opponent_name=d.get("opponent_name", ""),
        is_home=bool(d.get("is_home", False)),
        result=MatchOutcome(d.get("result", "DRAW")),
        team_score=int(d.get("team_score", 0)),
        opponent_score=int(d.get("opponent_score", 0)),
        rating=float(d.get("rating", 6.0)),
        goals=int(d.get("goals", 0)),
        assists=int(d.get("assists", 0)),
        shots=int(d.get("shots", 0)),
        shots_on_target=int(d.get("shots_on_target", 0)),
        passes=int(d.get("passes", 0)),
        pass_accuracy=int(d.get("pass_accuracy", 0)),
        tackles=d.get("tackles"),
        interceptions=d.get("interceptions"),
        saves=d.get("saves"),
        yellow_cards=int(d.get("yellow_cards", 0)),
        red_card=bool(d.get("red_card", False)),
        minutes_played=int(d.get("minutes_played", 90)),
        man_of_the_match=bool(d.get("man_of_the_match", False)),
    )


# -------------------------------------------------------------------
# FIXTURE
# -------------------------------------------------------------------


def fixture_to_dict(f: Fixture) -> Dict[str, Any]:
    motm = f.man_of_the_match
    return {
        "fixture_id": f.fixture_id,
        "week": f.week,
        "league": f.league,
        "home_id": f.home_id,
        "away_id": f.away_id,
        "played": f.played,
        "home_score": f.home_score,
        "away_score": f.away_score,
        "events": [event_to_dict(e) for e in f.events],
        "scorers": [scorer_to_dict(s) for s in f.scorers],
        "cards": [card_to_dict(c) for c in f.cards],
        "home_xi": list(f.home_xi),
        "away_xi": list(f.away_xi),
        "man_of_the_match": (
            {"team_id": motm.team_id, "player_id": motm.player_id} if motm else None
        ),
        "referee": f.referee.name if f.referee else None,
        "performances": [performance_to_dict(p) for p in f.performances],
    }


def fixture_from_dict(d: Dict[str, Any]) -> Fixture:
    motm_raw = d.get("man_of_the_match")
    motm = None
    if isinstance(motm_raw, dict) and motm_raw.get("player_id"):
        motm = MotmRef(team_id=str(motm_raw.get("team_id", "")), player_id=str(motm_raw["player_id"]))
    referee_raw = d.get("referee")
    return Fixture(
        fixture_id=str(d.get("fixture_id", d.get("id", ""))),
        week=int(d.get("week", 0)),
        home_id=str(d.get("home_id", "")),
        away_id=str(d.get("away_id", "")),
        league=d.get("league", ""),
        played=bool(d.get("played", False)),
        home_score=int(d.get("home_score", 0)),
        away_score=int(d.get("away_score", 0)),
        events=[event_from_dict(x) for x in (d.get("events") or [])],
        scorers=[scorer_from_dict(x) for x in (d.get("scorers") or [])],
        cards=[card_from_dict(x) for x in (d.get("cards") or [])],
        home_xi=[str(x) for x in (d.get("home_xi") or [])],
        away_xi=[str(x) for x in (d.get("away_xi") or [])],
        man_of_the_match=motm,
        referee=Referee(name=referee_raw) if referee_raw else None,
        performances=[performance_from_dict(x) for x in (d.get("performances") or [])],
    )


# -------------------------------------------------------------------
# LEAGUE FILE ({"clubs": [...], "fixtures": [...]})
# -------------------------------------------------------------------


def league_to_dict(clubs: List[Club], fixtures: List[Fixture]) -> Dict[str, Any]:
    return {
        "clubs": [club_to_dict(c) for c in clubs],
        "fixtures": [fixture_to_dict(f) for f in fixtures],
    }


def league_from_dict(d: Dict[str, Any]) -> Tuple[List[Club], List[Fixture]]:
    clubs = [club_from_dict(x) for x in (d.get("clubs") or [])]
    fixtures = [fixture_from_dict(x) for x in (d.get("fixtures") or [])]
    return clubs, fixtures


def dump_league(clubs: List[Club], fixtures: List[Fixture], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(league_to_dict(clubs, fixtures), f, ensure_ascii=False, indent=2)


def load_league(path: str) -> Tuple[List[Club], List[Fixture]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("league file must contain a JSON object")
    return league_from_dict(data)
