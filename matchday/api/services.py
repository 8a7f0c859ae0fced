from __future__ import annotations

import json
import logging
import os
import random
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from matchday.api.contracts import build_contract, fixture_summary, player_stats_entry, table_entries
from matchday.core.club import Club, clubs_by_id
from matchday.core.commentary import DEFAULT_LANGUAGE, supported_languages
from matchday.core.fixtures import Fixture, round_robin
from matchday.core.livefeed import format_feed, format_match_report
from matchday.core.match import simulate_match
from matchday.core.season import play_week
from matchday.core.serialize import dump_league, fixture_to_dict, load_league
from matchday.core.standings import build_table
from matchday.core.stats import player_season_stats

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ServiceError(RuntimeError):
    """Raised when a CLI operation fails in a controlled manner."""


@dataclass
class Settings:
    """Environment driven defaults for the service layer and CLI."""

    language: str = DEFAULT_LANGUAGE
    seed: Optional[int] = None
    log_level: str = "WARNING"
    double_round: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls()
        language = os.getenv("MATCHDAY_LANGUAGE", "").strip().lower()
        seed = os.getenv("MATCHDAY_SEED", "").strip()
        level = os.getenv("MATCHDAY_LOG_LEVEL", "").strip().upper()
        double_round = os.getenv("MATCHDAY_DOUBLE_ROUND", "").strip().lower()

        if language in supported_languages():
            settings.language = language
        if seed:
            try:
                settings.seed = int(seed)
            except ValueError:
                pass
        if level in LOG_LEVELS:
            settings.log_level = level
        if double_round in _TRUE:
            settings.double_round = True
        elif double_round in _FALSE:
            settings.double_round = False
        return settings

    def rng(self, seed: Optional[int] = None) -> random.Random:
        chosen = seed if seed is not None else self.seed
        return random.Random(chosen) if chosen is not None else random.Random()


class MatchService:
    """High level operations on a league file ({"clubs": [...], "fixtures": [...]})."""

    def __init__(self, path: Path, settings: Optional[Settings] = None) -> None:
        self.path = Path(path)
        self.settings = settings or Settings.from_env()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self) -> Tuple[List[Club], List[Fixture]]:
        if not self.path.exists():
            raise ServiceError(f"League file '{self.path}' does not exist.")
        try:
            return load_league(str(self.path))
        except json.JSONDecodeError as exc:
            raise ServiceError(f"League file '{self.path}' is not valid JSON: {exc}") from exc
        except ValueError as exc:
            raise ServiceError(f"League file '{self.path}' is not a league: {exc}") from exc

    def _save(self, clubs: List[Club], fixtures: List[Fixture]) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        dump_league(clubs, fixtures, str(self.path))
        return self.path

    @staticmethod
    def _find_fixture(fixtures: List[Fixture], fixture_id: str) -> Fixture:
        for fixture in fixtures:
            if fixture.fixture_id == fixture_id:
                return fixture
        raise ServiceError(f"Fixture '{fixture_id}' was not found.")

    @staticmethod
    def _club(clubs: Dict[str, Club], club_id: str) -> Club:
        club = clubs.get(club_id)
        if club is None:
            raise ServiceError(f"Club '{club_id}' was not found.")
        return club

    def _language(self, language: Optional[str]) -> str:
        return language or self.settings.language

    # ------------------------------------------------------------------
    # Schedule
    # ------------------------------------------------------------------

    def build_schedule(
        self, *, double_round: Optional[bool] = None, seed: Optional[int] = None
    ) -> Dict[str, Any]:
        clubs, _ = self._load()
        rounds = self.settings.double_round if double_round is None else double_round
        fixtures = round_robin(clubs, double_round=rounds, rng=self.settings.rng(seed))
        self._save(clubs, fixtures)
        weeks = sorted({f.week for f in fixtures})
        logger.info("built %d fixtures over %d weeks", len(fixtures), len(weeks))
        return {"ok": True, "fixtures": len(fixtures), "weeks": len(weeks)}

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------

    def simulate_fixture(
        self,
        fixture_id: str,
        *,
        language: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> Dict[str, Any]:
        clubs, fixtures = self._load()
        fixture = self._find_fixture(fixtures, fixture_id)
        if fixture.played:
            raise ServiceError(f"Fixture '{fixture_id}' has already been played.")
        index = clubs_by_id(clubs)
        home = self._club(index, fixture.home_id)
        away = self._club(index, fixture.away_id)

        result = simulate_match(
            fixture, home, away, self._language(language), rng=self.settings.rng(seed)
        )
        fixtures = [result if f.fixture_id == fixture_id else f for f in fixtures]
        self._save(clubs, fixtures)
        return {"ok": True, "fixture": fixture_to_dict(result)}

    def play_week(
        self,
        week: Optional[int] = None,
        *,
        language: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> Dict[str, Any]:
        clubs, fixtures = self._load()
        if week is None:
            pending = sorted({f.week for f in fixtures if not f.played})
            if not pending:
                raise ServiceError("Every fixture has already been played.")
            week = pending[0]

        played = play_week(
            fixtures,
            clubs,
            week,
            language=self._language(language),
            rng=self.settings.rng(seed),
        )
        by_id = {f.fixture_id: f for f in played}
        fixtures = [by_id.get(f.fixture_id, f) for f in fixtures]
        self._save(clubs, fixtures)
        return {"ok": True, "week": week, "fixtures": [fixture_summary(f) for f in played]}

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------

    def table(self, league: Optional[str] = None) -> List[Dict[str, Any]]:
        clubs, fixtures = self._load()
        if league is None and clubs:
            league = clubs[0].league
        members = [c for c in clubs if c.league == league]
        if not members:
            raise ServiceError(f"League '{league}' has no clubs.")
        return table_entries(build_table(members, fixtures))

    def feed(self, fixture_id: str, *, language: Optional[str] = None, report: bool = False) -> str:
        clubs, fixtures = self._load()
        fixture = self._find_fixture(fixtures, fixture_id)
        if not fixture.played:
            raise ServiceError(f"Fixture '{fixture_id}' has not been played yet.")
        index = clubs_by_id(clubs)
        home = self._club(index, fixture.home_id)
        away = self._club(index, fixture.away_id)
        if report:
            return format_match_report(fixture, home, away)
        return format_feed(fixture, home, away, self._language(language))

    def player_stats(self, player_id: str) -> Dict[str, Any]:
        clubs, fixtures = self._load()
        club = next((c for c in clubs if c.player_by_id(player_id) is not None), None)
        if club is None:
            raise ServiceError(f"Player '{player_id}' was not found.")
        return player_stats_entry(player_season_stats(player_id, club.club_id, fixtures))

    def dump(self) -> Dict[str, Any]:
        clubs, fixtures = self._load()
        return build_contract(clubs, fixtures)

    def reset(self) -> Dict[str, Any]:
        """Mark every fixture as unplayed and drop their results."""
        clubs, fixtures = self._load()
        cleared = [
            replace(
                f,
                played=False,
                home_score=0,
                away_score=0,
                events=[],
                scorers=[],
                cards=[],
                home_xi=[],
                away_xi=[],
                man_of_the_match=None,
                referee=None,
                performances=[],
            )
            for f in fixtures
        ]
        self._save(clubs, cleared)
        return {"ok": True, "fixtures": len(cleared)}
