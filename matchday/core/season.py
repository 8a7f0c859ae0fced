from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Optional

from .club import Club, clubs_by_id
from .commentary import DEFAULT_LANGUAGE
from .fixtures import Fixture, weeks
from .match import simulate_match

logger = logging.getLogger(__name__)

# Övre gräns för seeds som delas ut till varje match
_SEED_SPACE = 2**32


def _simulate_fixture(
    fixture: Fixture,
    clubs: Dict[str, Club],
    language: str,
    rng: random.Random,
) -> Optional[Fixture]:
    home = clubs.get(fixture.home_id)
    away = clubs.get(fixture.away_id)
    # Seeden dras även för matcher som hoppas över så att resten av veckan
    # inte förskjuts
    match_rng = random.Random(rng.randrange(_SEED_SPACE))
    if home is None or away is None:
        logger.warning(
            "skipping %s: unknown club id (%s vs %s)",
            fixture.fixture_id,
            fixture.home_id,
            fixture.away_id,
        )
        return None
    return simulate_match(fixture, home, away, language, rng=match_rng)


def play_week(
    fixtures: Iterable[Fixture],
    clubs: Iterable[Club],
    week: int,
    *,
    language: str = DEFAULT_LANGUAGE,
    rng: Optional[random.Random] = None,
) -> List[Fixture]:
    """
    Spelar alla ospelade matcher i omgången och returnerar de färdiga.
    Matcher med okänd klubb loggas och hoppas över. Indata ändras inte.
    """
    rnd = rng or random.Random()
    by_id = clubs_by_id(clubs)
    played: List[Fixture] = []
    for fixture in fixtures:
        if fixture.week != week or fixture.played:
            continue
        result = _simulate_fixture(fixture, by_id, language, rnd)
        if result is not None:
            played.append(result)
    logger.debug("week %d: %d fixtures played", week, len(played))
    return played


def play_season(
    fixtures: Iterable[Fixture],
    clubs: Iterable[Club],
    *,
    language: str = DEFAULT_LANGUAGE,
    rng: Optional[random.Random] = None,
) -> List[Fixture]:
    """
    Spelar omgång för omgång. Returnerar hela schemat: spelade matcher
    ersatta med sina resultat, övriga oförändrade.
    """
    rnd = rng or random.Random()
    schedule = list(fixtures)
    club_list = list(clubs)
    results: Dict[str, Fixture] = {}
    for week in weeks(schedule):
        for result in play_week(schedule, club_list, week, language=language, rng=rnd):
            results[result.fixture_id] = result
    return [results.get(f.fixture_id, f) for f in schedule]
