from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .club import Club
from .commentary import Commentary, DEFAULT_LANGUAGE
from .events import CardKind, EventType
from .fixtures import Fixture
from .player import Player
from .ratings import MatchPerformance, performance_by_player

ICONS = {
    EventType.GOAL: "⚽",
    EventType.SAVE: "🧤",
    EventType.MISS: "➖",
    EventType.CARD: "🟨",
    EventType.CORNER: "⚑",
    EventType.FOUL: "🚫",
    EventType.POST: "🔔",
    EventType.SUBSTITUTION: "🔁",
    EventType.VAR: "📺",
    EventType.PENALTY: "⚖️",
}


@dataclass(slots=True)
class FeedLine:
    minute: int
    text: str


def _player_row(player: Optional[Player], perf: Optional[MatchPerformance], fallback_id: str) -> str:
    pos = player.position.value if player is not None else "?"
    name = player.name if player is not None else f"#{fallback_id}"
    if perf is None:
        return f"{pos:<3} {name:<24}  --   -- "
    icons: List[str] = []
    icons.extend("⚽" for _ in range(perf.goals))
    icons.extend("🅰" for _ in range(perf.assists))
    icons.extend("🟨" for _ in range(perf.yellow_cards))
    if perf.red_card:
        icons.append("🟥")
    if perf.man_of_the_match:
        icons.append("⭐")
    return f"{pos:<3} {name:<24} {perf.minutes_played:>3}'  {perf.rating:>4.1f}  {' '.join(icons)}".rstrip()


def _team_block(club: Club, xi: List[str], perfs: Dict[str, MatchPerformance]) -> List[str]:
    lines = [club.name]
    if not xi:
        lines.append("  Startelva: saknas")
        return lines
    lines.append("  Startelva:")
    for pid in xi:
        lines.append("    " + _player_row(club.player_by_id(pid), perfs.get(pid), pid))
    return lines


def build_timeline(
    fixture: Fixture,
    home: Club,
    away: Club,
    language: str = DEFAULT_LANGUAGE,
) -> List[FeedLine]:
    """Avspark, matchens händelser, halvtid och slutsignal i minutordning."""
    commentary = Commentary(language)
    lines: List[FeedLine] = [
        FeedLine(0, commentary.fixed("kickoff", home=home.name, away=away.name))
    ]
    for ev in fixture.events:
        icon = ICONS.get(ev.kind, "•")
        # Bara utvisningar markeras som viktiga kort
        if ev.kind is EventType.CARD and ev.important:
            icon = "🟥"
        lines.append(FeedLine(ev.minute, f"{icon} {ev.description}"))

    lines.append(FeedLine(45, "⏸️ " + commentary.fixed("halftime")))
    lines.append(
        FeedLine(
            90,
            "🔚 "
            + commentary.fixed(
                "fulltime",
                home=home.name,
                away=away.name,
                home_score=fixture.home_score,
                away_score=fixture.away_score,
            ),
        )
    )
    # sorted() är stabil → halvtid efter minut 45-händelser, slut sist
    return sorted(lines, key=lambda fl: fl.minute)


def format_feed(
    fixture: Fixture,
    home: Club,
    away: Club,
    language: str = DEFAULT_LANGUAGE,
) -> str:
    perfs = performance_by_player(fixture.performances)
    out_lines = [f"=== {home.name} vs {away.name} ===", "", "Laguppställningar:"]

    home_block = _team_block(home, fixture.home_xi, perfs)
    away_block = _team_block(away, fixture.away_xi, perfs)
    out_lines.extend(f"  {line}" if idx == 0 else line for idx, line in enumerate(home_block))
    out_lines.append("")
    out_lines.extend(f"  {line}" if idx == 0 else line for idx, line in enumerate(away_block))

    out_lines.append("")
    out_lines.append("Matchhändelser:")
    for fl in build_timeline(fixture, home, away, language):
        out_lines.append(f"  {fl.minute:>2}'  {fl.text}")

    return "\n".join(out_lines)


def format_match_report(fixture: Fixture, home: Club, away: Club) -> str:
    h, a = home.name, away.name
    names = {home.club_id: h, away.club_id: a}

    scorer_parts = []
    for s in fixture.scorers:
        assist = f" (assist: {s.assist})" if s.assist else ""
        scorer_parts.append(f"{s.name} {s.minute}'{assist} [{names.get(s.team_id, s.team_id)}]")

    yellows = {home.club_id: 0, away.club_id: 0}
    reds = {home.club_id: 0, away.club_id: 0}
    for card in fixture.cards:
        bucket = reds if card.kind is CardKind.RED else yellows
        bucket[card.team_id] = bucket.get(card.team_id, 0) + 1

    motm_txt = "–"
    if fixture.man_of_the_match is not None:
        club = home if fixture.man_of_the_match.team_id == home.club_id else away
        player = club.player_by_id(fixture.man_of_the_match.player_id)
        motm_txt = f"{player.name if player else fixture.man_of_the_match.player_id} ({club.name})"

    referee = fixture.referee.name if fixture.referee is not None else "–"
    return "\n".join(
        [
            "--- Matchrapport ---",
            f"Resultat: {h} {fixture.home_score}–{fixture.away_score} {a}",
            f"Målskyttar: {', '.join(scorer_parts) if scorer_parts else '–'}",
            f"Kort: Gula {yellows[home.club_id]}-{yellows[away.club_id]}  "
            f"Röda {reds[home.club_id]}-{reds[away.club_id]}",
            f"Matchens lirare: {motm_txt}",
            f"Domare: {referee}",
        ]
    )
