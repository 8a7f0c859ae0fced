from __future__ import annotations

import random
from typing import Callable, Dict, List, Optional

from .commentary import UNKNOWN_PLAYER
from .events import CardKind, CardRecord, EventType, MatchEvent, ScorerRecord
from .lineup import XIEntry
from .player import Player, Unit
from .state import Chain, PendingResolution, PlayContext, Side, TimelineState

# ---------------------------------
# Sannolikheter
# ---------------------------------

GOAL_MID_ROLL = 0.4
GOAL_DEF_ROLL = 0.8
SLOW_SCORER_DENIED = 0.15
ASSIST_CHANCE = 0.7
ASSIST_FWD_ROLL = 0.5
ASSIST_DEF_ROLL = 0.85
DRIBBLE_ASSIST_CHANCE = 0.15
DIRECT_RED = 0.15

CORNER_HEADER = 0.15
CORNER_BICYCLE = 0.25

VAR_PENALTY = 0.25
VAR_OFFSIDE = 0.45
VAR_FOUL = 0.65
PENALTY_CONVERTED = 0.75

# (gräns, faktor), första träffen räknas
SHOOTING_BOOSTS = ((90, 3.0), (85, 2.2), (80, 1.6), (75, 1.2))
FORWARD_FINISHER_BOOST = 1.5
PACE_BOOSTS = ((90, 1.4), (85, 1.25), (80, 1.15))
DRIBBLING_BOOSTS = ((90, 1.5), (85, 1.3), (80, 1.2), (75, 1.1))


def _boost(value: int, table) -> float:
    for threshold, factor in table:
        if value >= threshold:
            return factor
    return 1.0


def name_of(player: Optional[Player]) -> str:
    return player.name if player is not None else UNKNOWN_PLAYER


# ---------------------------------
# Spelarurval
# ---------------------------------


def pick_player(side: Side, rng: random.Random, unit: Optional[Unit] = None) -> Optional[Player]:
    """Likformigt urval bland aktiva spelare i lagdelen, annars bland alla aktiva."""
    if unit is Unit.GK:
        return pick_keeper(side, rng)
    active = side.active_entries()
    pool = [e for e in active if unit is None or e.player.unit is unit]
    if not pool:
        pool = active
    if not pool:
        return None
    return pool[rng.randrange(len(pool))].player


def pick_keeper(side: Side, rng: random.Random) -> Optional[Player]:
    keepers = [e for e in side.active_entries() if e.unit is Unit.GK]
    if not keepers:
        return None
    return keepers[rng.randrange(len(keepers))].player


def selection_weight(player: Player, attribute: str) -> float:
    weight = float(player.stat(attribute)) ** 3
    if attribute == "shooting":
        shooting = player.stat("shooting")
        weight *= _boost(shooting, SHOOTING_BOOSTS)
        if player.unit is Unit.FWD and shooting >= 85:
            weight *= FORWARD_FINISHER_BOOST
        weight *= _boost(player.stat("pace"), PACE_BOOSTS)
    elif attribute == "passing":
        weight *= _boost(player.stat("dribbling"), DRIBBLING_BOOSTS)
    return weight


def pick_weighted(
    side: Side,
    rng: random.Random,
    unit: Optional[Unit],
    attribute: str,
) -> Optional[Player]:
    """
    Viktat urval (stat³ plus boostar). Tom lagdel → alla aktiva utespelare.
    Utan lagdel dras från hela den aktiva elvan.
    """
    active = side.active_entries()
    if unit is None:
        pool: List[XIEntry] = active
    else:
        pool = [e for e in active if e.player.unit is unit]
        if not pool:
            pool = [e for e in active if e.player.unit is not Unit.GK]
    if not pool:
        return None

    weights = [selection_weight(e.player, attribute) for e in pool]
    remaining = rng.random() * sum(weights)
    for entry, weight in zip(pool, weights):
        remaining -= weight
        if remaining <= 0:
            return entry.player
    return pool[0].player


def pace_bonus(player: Optional[Player]) -> float:
    if player is None:
        return 0.0
    pace = player.stat("pace")
    if pace >= 90:
        return 0.15
    if pace >= 85:
        return 0.10
    if pace >= 80:
        return 0.05
    return 0.0


# ---------------------------------
# Gemensamma steg
# ---------------------------------


def emit(
    state: TimelineState,
    minute: int,
    kind: EventType,
    text: str,
    side: Side,
    important: bool = False,
) -> MatchEvent:
    event = MatchEvent(
        minute=minute,
        kind=kind,
        description=text,
        important=important,
        team_name=side.club.name,
    )
    state.events.append(event)
    return event


def record_goal(
    state: TimelineState,
    minute: int,
    side: Side,
    scorer: Optional[Player],
    assist: Optional[Player] = None,
) -> None:
    state.scorers.append(
        ScorerRecord(
            name=name_of(scorer),
            minute=minute,
            team_id=side.club.club_id,
            assist=assist.name if assist is not None else None,
            scorer_id=scorer.id if scorer is not None else None,
            assist_id=assist.id if assist is not None else None,
        )
    )
    state.goals[side.key] += 1


# ---------------------------------
# Fristående händelser
# ---------------------------------


def resolve_goal(ctx: PlayContext) -> None:
    rng, attack = ctx.rng, ctx.attack
    pos_roll = rng.random()
    unit = Unit.FWD
    if pos_roll > GOAL_MID_ROLL:
        unit = Unit.MID
    if pos_roll > GOAL_DEF_ROLL:
        unit = Unit.DEF
    scorer = pick_weighted(attack, rng, unit, "shooting")

    # Långsamma avslutare nekas ibland av målvakten
    if pace_bonus(scorer) == 0 and rng.random() < SLOW_SCORER_DENIED:
        _save(ctx, name_of(scorer))
        return

    assist: Optional[Player] = None
    dribble = False
    if rng.random() < ASSIST_CHANCE:
        assist_roll = rng.random()
        assist_unit = Unit.MID
        if assist_roll > ASSIST_FWD_ROLL:
            assist_unit = Unit.FWD
        if assist_roll > ASSIST_DEF_ROLL:
            assist_unit = Unit.DEF
        assist = pick_weighted(attack, rng, assist_unit, "passing")
        if assist is not None and scorer is not None and assist.id == scorer.id:
            assist = None
        if assist is not None and assist.stat("dribbling") >= 90:
            dribble = rng.random() < DRIBBLE_ASSIST_CHANCE

    if dribble:
        text = ctx.commentary.line(
            "goal_dribble", rng, scorer=name_of(scorer), assist=assist.name
        )
    else:
        text = ctx.commentary.line("goal", rng, scorer=name_of(scorer))
        if assist is not None:
            text = f"{text} {ctx.commentary.line('goal_assist', rng, assist=assist.name)}"
    emit(ctx.state, ctx.minute, EventType.GOAL, text, attack, important=True)
    record_goal(ctx.state, ctx.minute, attack, scorer, assist)


def _save(ctx: PlayContext, shooter: str) -> None:
    keeper = pick_keeper(ctx.defence, ctx.rng)
    if keeper is None:
        text = ctx.commentary.line("save_no_keeper", ctx.rng, shooter=shooter)
    else:
        text = ctx.commentary.line("save", ctx.rng, shooter=shooter, keeper=keeper.name)
    emit(ctx.state, ctx.minute, EventType.SAVE, text, ctx.defence)


def resolve_save(ctx: PlayContext) -> None:
    unit = Unit.FWD if ctx.rng.random() > 0.5 else Unit.MID
    shooter = pick_player(ctx.attack, ctx.rng, unit)
    _save(ctx, name_of(shooter))


def resolve_miss(ctx: PlayContext) -> None:
    unit = Unit.MID if ctx.rng.random() > 0.6 else Unit.FWD
    shooter = pick_weighted(ctx.attack, ctx.rng, unit, "shooting")
    text = ctx.commentary.line("miss", ctx.rng, shooter=name_of(shooter))
    emit(ctx.state, ctx.minute, EventType.MISS, text, ctx.attack)


def resolve_card(ctx: PlayContext) -> None:
    """
    Kort för en slumpad aktiv spelare. Direkt rött (15 %) eller andra gula
    ger RED, spelaren lämnar planen och gula räkningen nollställs.
    """
    state, side, rng = ctx.state, ctx.attack, ctx.rng
    if not side.active_ids:
        return
    player_id = side.active_ids[rng.randrange(len(side.active_ids))]
    player = side.player(player_id)
    if player is None:
        return

    direct_red = rng.random() < DIRECT_RED
    yellows = state.yellow_counts.get(player_id, 0)
    params = {"player": player.name, "team": side.club.name}
    if direct_red or yellows >= 1:
        state.cards.append(CardRecord(player_id, side.club.club_id, CardKind.RED, ctx.minute))
        state.yellow_counts.pop(player_id, None)
        side.send_off(player_id)
        text = ctx.commentary.line("red", rng, **params)
        emit(state, ctx.minute, EventType.CARD, text, side, important=True)
    else:
        state.yellow_counts[player_id] = yellows + 1
        state.cards.append(CardRecord(player_id, side.club.club_id, CardKind.YELLOW, ctx.minute))
        text = ctx.commentary.line("yellow", rng, **params)
        emit(state, ctx.minute, EventType.CARD, text, side)


def resolve_corner(ctx: PlayContext) -> None:
    text = ctx.commentary.line("corner", ctx.rng, team=ctx.attack.club.name)
    emit(ctx.state, ctx.minute, EventType.CORNER, text, ctx.attack)
    ctx.state.schedule(Chain.CORNER_OUTCOME, ctx.minute, ctx.attack, ctx.defence, ctx.rng)


def resolve_foul(ctx: PlayContext) -> None:
    offender = pick_player(ctx.attack, ctx.rng, Unit.DEF)
    text = ctx.commentary.line("foul", ctx.rng, player=name_of(offender))
    emit(ctx.state, ctx.minute, EventType.FOUL, text, ctx.attack)


def resolve_post(ctx: PlayContext) -> None:
    shooter = pick_weighted(ctx.attack, ctx.rng, None, "shooting")
    text = ctx.commentary.line("post", ctx.rng, shooter=name_of(shooter))
    emit(ctx.state, ctx.minute, EventType.POST, text, ctx.attack, important=True)


def resolve_substitution(ctx: PlayContext) -> None:
    leaving = pick_player(ctx.attack, ctx.rng)
    text = ctx.commentary.line(
        "substitution", ctx.rng, team=ctx.attack.club.name, player=name_of(leaving)
    )
    emit(ctx.state, ctx.minute, EventType.SUBSTITUTION, text, ctx.attack)


def resolve_var(ctx: PlayContext) -> None:
    text = ctx.commentary.line("var_check", ctx.rng)
    emit(ctx.state, ctx.minute, EventType.VAR, text, ctx.attack, important=True)
    ctx.state.schedule(Chain.VAR_DECISION, ctx.minute, ctx.attack, ctx.defence, ctx.rng)


# ---------------------------------
# Följdavgöranden
# ---------------------------------


def resolve_corner_outcome(ctx: PlayContext, pending: PendingResolution) -> None:
    state, rng = ctx.state, ctx.rng
    outcome = rng.random()
    if outcome < CORNER_BICYCLE:
        header = outcome < CORNER_HEADER
        unit = Unit.DEF if header else Unit.FWD
        scorer = pick_weighted(ctx.attack, rng, unit, "shooting")
        key = "corner_header" if header else "corner_bicycle"
        text = ctx.commentary.line(key, rng, scorer=name_of(scorer))
        emit(state, ctx.minute, EventType.GOAL, text, ctx.attack, important=True)
        record_goal(state, ctx.minute, ctx.attack, scorer)
        return

    defender = pick_player(ctx.defence, rng, Unit.DEF)
    keeper = pick_keeper(ctx.defence, rng)
    if keeper is None or rng.random() > 0.5:
        text = ctx.commentary.line("corner_cleared", rng, defender=name_of(defender))
    else:
        text = ctx.commentary.line("corner_claimed", rng, keeper=keeper.name)
    emit(state, ctx.minute, EventType.SAVE, text, ctx.defence)


def resolve_var_decision(ctx: PlayContext, pending: PendingResolution) -> None:
    state, rng = ctx.state, ctx.rng
    decision = rng.random()
    if decision < VAR_PENALTY:
        fouled = pick_weighted(ctx.attack, rng, Unit.FWD, "shooting")
        text = ctx.commentary.line("var_penalty", rng, player=name_of(fouled))
        emit(state, ctx.minute, EventType.PENALTY, text, ctx.attack, important=True)
        state.schedule(
            Chain.PENALTY_KICK, ctx.minute, ctx.attack, ctx.defence, rng, taker=fouled
        )
    elif decision < VAR_OFFSIDE:
        text = ctx.commentary.line("var_offside", rng)
        emit(state, ctx.minute, EventType.VAR, text, ctx.attack, important=True)
    elif decision < VAR_FOUL:
        offender = pick_player(ctx.defence, rng, Unit.DEF)
        text = ctx.commentary.line("var_foul", rng, player=name_of(offender))
        emit(state, ctx.minute, EventType.FOUL, text, ctx.defence, important=True)
    else:
        text = ctx.commentary.line("var_clear", rng)
        emit(state, ctx.minute, EventType.VAR, text, ctx.attack)


def resolve_penalty_kick(ctx: PlayContext, pending: PendingResolution) -> None:
    state, rng = ctx.state, ctx.rng
    taker = pending.taker
    if rng.random() < PENALTY_CONVERTED:
        text = ctx.commentary.line("penalty_scored", rng, scorer=name_of(taker))
        emit(state, ctx.minute, EventType.GOAL, text, ctx.attack, important=True)
        record_goal(state, ctx.minute, ctx.attack, taker)
    else:
        keeper = pick_keeper(ctx.defence, rng)
        if keeper is None:
            text = ctx.commentary.line("penalty_saved_no_keeper", rng, scorer=name_of(taker))
        else:
            text = ctx.commentary.line("penalty_saved", rng, keeper=keeper.name)
        emit(state, ctx.minute, EventType.SAVE, text, ctx.defence, important=True)


ChainResolver = Callable[[PlayContext, PendingResolution], None]

CHAIN_RESOLVERS: Dict[Chain, ChainResolver] = {
    Chain.CORNER_OUTCOME: resolve_corner_outcome,
    Chain.VAR_DECISION: resolve_var_decision,
    Chain.PENALTY_KICK: resolve_penalty_kick,
}
