from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

from .commentary import Commentary
from .resolvers import (
    CHAIN_RESOLVERS,
    resolve_card,
    resolve_corner,
    resolve_foul,
    resolve_goal,
    resolve_miss,
    resolve_post,
    resolve_save,
    resolve_substitution,
    resolve_var,
)
from .state import LAST_MINUTE, PlayContext, Side, TimelineState
from .strength import dynamic_strength, home_dominance

logger = logging.getLogger(__name__)

BASE_ITERATIONS = 30
EXTRA_ITERATIONS = 10


class Play(Enum):
    GOAL = "GOAL"
    SAVE = "SAVE"
    MISS = "MISS"
    CARD = "CARD"
    CORNER = "CORNER"
    FOUL = "FOUL"
    POST = "POST"
    SUBSTITUTION = "SUBSTITUTION"
    VAR = "VAR"


# Ordnad tabell, första gränsen rullningen understiger vinner. Överlappet
# (0.65 före 0.60) gör FOUL och senare band onåbara med standardtabellen.
EVENT_BANDS: Tuple[Tuple[float, Play], ...] = (
    (0.065, Play.GOAL),
    (0.25, Play.SAVE),
    (0.45, Play.MISS),
    (0.58, Play.CARD),
    (0.65, Play.CORNER),
    (0.60, Play.FOUL),
    (0.62, Play.CARD),
    (0.63, Play.POST),
    (0.64, Play.SUBSTITUTION),
    (0.645, Play.VAR),
)

RESOLVERS: Dict[Play, Callable[[PlayContext], None]] = {
    Play.GOAL: resolve_goal,
    Play.SAVE: resolve_save,
    Play.MISS: resolve_miss,
    Play.CARD: resolve_card,
    Play.CORNER: resolve_corner,
    Play.FOUL: resolve_foul,
    Play.POST: resolve_post,
    Play.SUBSTITUTION: resolve_substitution,
    Play.VAR: resolve_var,
}


def pick_play(roll: float, bands: Sequence[Tuple[float, Play]] = EVENT_BANDS) -> Optional[Play]:
    for threshold, play in bands:
        if roll < threshold:
            return play
    return None


def _drain(state: TimelineState, rng: random.Random, commentary: Commentary) -> None:
    # Ett avgörande kan lägga ett nytt (VAR → straff), kön töms i tidsordning
    while state.pending:
        pending = state.pending.popleft()
        ctx = PlayContext(
            state=state,
            attack=pending.attack,
            defence=pending.defence,
            minute=pending.minute,
            rng=rng,
            commentary=commentary,
        )
        CHAIN_RESOLVERS[pending.chain](ctx, pending)


def run_timeline(
    home: Side,
    away: Side,
    rng: random.Random,
    commentary: Commentary,
    *,
    bands: Optional[Sequence[Tuple[float, Play]]] = None,
) -> TimelineState:
    """
    Kör matchens händelseloop:
      - 30–39 iterationer, en slumpad minut per iteration (utan återläggning)
      - spärrade minuter hoppas över men förbrukar iterationen
      - dominansen räknas om varje varv (utvisningar sänker styrkan)
      - väntande följdavgöranden körs direkt efter sin utlösande händelse
    """
    table = EVENT_BANDS if bands is None else tuple(bands)
    state = TimelineState(home=home, away=away)
    state.iterations = BASE_ITERATIONS + rng.randrange(EXTRA_ITERATIONS)

    minutes = list(range(1, LAST_MINUTE + 1))
    rng.shuffle(minutes)

    for minute in minutes[: state.iterations]:
        if minute in state.blocked_minutes:
            continue

        home_now = dynamic_strength(home.strength.overall, len(home.active_ids))
        away_now = dynamic_strength(away.strength.overall, len(away.active_ids))
        dominance = home_dominance(home_now, away_now)
        state.dominance_log.append((minute, dominance))

        is_home = rng.random() < dominance
        attack, defence = (home, away) if is_home else (away, home)

        play = pick_play(rng.random(), table)
        if play is None:
            continue

        state.independent_minutes.append(minute)
        RESOLVERS[play](
            PlayContext(
                state=state,
                attack=attack,
                defence=defence,
                minute=minute,
                rng=rng,
                commentary=commentary,
            )
        )
        _drain(state, rng, commentary)

    logger.debug(
        "timeline: %d iterations, %d events, %d-%d",
        state.iterations,
        len(state.events),
        state.goals["home"],
        state.goals["away"],
    )
    return state
