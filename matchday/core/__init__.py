# Gör det lättare att importera i resten av projektet
from .club import Club, clubs_by_id
from .commentary import Commentary, register_language, supported_languages
from .events import CardKind, CardRecord, EventType, MatchEvent, MotmRef, Referee, ScorerRecord
from .fixtures import Fixture, round_robin
from .formation import Formation, parse_formation
from .lineup import XIEntry, select_starting_xi
from .livefeed import FeedLine, build_timeline, format_feed, format_match_report
from .match import simulate_match
from .player import Player, PlayerAttributes, Position, Unit
from .ratings import MatchOutcome, MatchPerformance, build_performances, select_man_of_the_match
from .season import play_season, play_week
from .serialize import (
    club_from_dict,
    club_to_dict,
    fixture_from_dict,
    fixture_to_dict,
    league_from_dict,
    league_to_dict,
    player_from_dict,
    player_to_dict,
)
from .standings import TableRow, apply_result_to_table, build_table, sort_table
from .stats import PlayerSeasonStats, player_season_stats, top_scorers
from .strength import TeamStrength, effective_rating, home_dominance, position_penalty, team_strength
from .timeline import EVENT_BANDS, Play, run_timeline

__all__ = [
    "Player",
    "PlayerAttributes",
    "Position",
    "Unit",
    "Club",
    "clubs_by_id",
    "Formation",
    "parse_formation",
    "XIEntry",
    "select_starting_xi",
    "TeamStrength",
    "position_penalty",
    "effective_rating",
    "team_strength",
    "home_dominance",
    "Commentary",
    "register_language",
    "supported_languages",
    "EventType",
    "CardKind",
    "MatchEvent",
    "CardRecord",
    "ScorerRecord",
    "MotmRef",
    "Referee",
    "EVENT_BANDS",
    "Play",
    "run_timeline",
    "MatchOutcome",
    "MatchPerformance",
    "build_performances",
    "select_man_of_the_match",
    "Fixture",
    "round_robin",
    "simulate_match",
    "play_week",
    "play_season",
    "TableRow",
    "apply_result_to_table",
    "build_table",
    "sort_table",
    "PlayerSeasonStats",
    "player_season_stats",
    "top_scorers",
    "FeedLine",
    "build_timeline",
    "format_feed",
    "format_match_report",
    "player_to_dict",
    "player_from_dict",
    "club_to_dict",
    "club_from_dict",
    "fixture_to_dict",
    "fixture_from_dict",
    "league_to_dict",
    "league_from_dict",
]
