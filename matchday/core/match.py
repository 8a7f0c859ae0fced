from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from .club import Club
from .commentary import Commentary, DEFAULT_LANGUAGE
from .events import REFEREE_NAMES, Referee
from .fixtures import Fixture
from .lineup import select_starting_xi
from .ratings import SideSheet, build_performances, select_man_of_the_match
from .state import Side, TimelineState
from .strength import team_strength
from .timeline import Play, run_timeline

logger = logging.getLogger(__name__)


def draw_referee(rng: random.Random) -> Referee:
    return Referee(name=REFEREE_NAMES[rng.randrange(len(REFEREE_NAMES))])


def field_side(key: str, club: Club) -> Side:
    xi = select_starting_xi(club)
    strength = team_strength(club, xi)
    logger.debug(
        "%s %s: %d players, strength %s", key, club.name, len(xi), strength
    )
    return Side.from_xi(key, club, xi, strength)


def _reconcile_tally(state: TimelineState, fixture: Fixture) -> Tuple[int, int]:
    # Målskyttelistan bestämmer alltid slutresultatet
    home_id = state.home.club.club_id
    away_id = state.away.club.club_id
    home_listed = sum(1 for s in state.scorers if s.team_id == home_id)
    away_listed = sum(1 for s in state.scorers if s.team_id == away_id)
    if (home_listed, away_listed) != (state.goals["home"], state.goals["away"]):
        logger.warning(
            "goal tally drift in %s: counted %d-%d, scorers %d-%d",
            fixture.fixture_id,
            state.goals["home"],
            state.goals["away"],
            home_listed,
            away_listed,
        )
    state.goals["home"] = home_listed
    state.goals["away"] = away_listed
    return home_listed, away_listed


def simulate_match(
    fixture: Fixture,
    home: Club,
    away: Club,
    language: str = DEFAULT_LANGUAGE,
    *,
    rng: Optional[random.Random] = None,
    referee: Optional[Referee] = None,
    event_bands: Optional[Sequence[Tuple[float, Play]]] = None,
) -> Fixture:
    """
    Simulerar en match och returnerar en ny, spelad Fixture:
      1) startelvor och lagstyrka
      2) händelseloopen (med följdavgöranden)
      3) resultat från målskyttelistan
      4) matchens lirare, domare och spelarbetyg
    Indata ändras inte.
    """
    rnd = rng or random.Random()
    commentary = Commentary(language)

    home_side = field_side("home", home)
    away_side = field_side("away", away)

    state = run_timeline(home_side, away_side, rnd, commentary, bands=event_bands)
    # sorted() är stabil → händelser i samma minut behåller sin ordning
    events = sorted(state.events, key=lambda ev: ev.minute)
    home_goals, away_goals = _reconcile_tally(state, fixture)

    home_sheet = SideSheet(
        team_id=home.club_id,
        team_name=home.name,
        xi=home_side.xi,
        goals_for=home_goals,
        goals_against=away_goals,
        is_home=True,
    )
    away_sheet = SideSheet(
        team_id=away.club_id,
        team_name=away.name,
        xi=away_side.xi,
        goals_for=away_goals,
        goals_against=home_goals,
        is_home=False,
    )

    motm = select_man_of_the_match(home_sheet, away_sheet, state.scorers)
    ref = referee or draw_referee(rnd)
    performances = build_performances(
        home_sheet,
        away_sheet,
        fixture_id=fixture.fixture_id,
        week=fixture.week,
        scorers=state.scorers,
        cards=state.cards,
        rng=rnd,
        motm=motm,
    )

    logger.debug(
        "%s: %s %d-%d %s (%d events)",
        fixture.fixture_id,
        home.name,
        home_goals,
        away_goals,
        away.name,
        len(events),
    )

    return replace(
        fixture,
        played=True,
        home_score=home_goals,
        away_score=away_goals,
        events=events,
        scorers=list(state.scorers),
        cards=list(state.cards),
        home_xi=[e.player.id for e in home_side.xi],
        away_xi=[e.player.id for e in away_side.xi],
        man_of_the_match=motm,
        referee=ref,
        performances=performances,
    )
