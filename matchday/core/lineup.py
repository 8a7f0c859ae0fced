from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .club import Club
from .formation import Formation, parse_formation
from .player import Player, Unit

XI_SIZE = 11


@dataclass(frozen=True, slots=True)
class XIEntry:
    player: Player
    unit: Unit  # lagdelen spelaren ställs upp i, kan skilja sig från positionen


def _needed_unit(xi: List[XIEntry], formation: Formation) -> Unit:
    counts: Dict[Unit, int] = {unit: 0 for unit in Unit}
    for entry in xi:
        counts[entry.unit] += 1
    if counts[Unit.DEF] < formation.defenders:
        return Unit.DEF
    if counts[Unit.MID] < formation.midfielders:
        return Unit.MID
    if counts[Unit.FWD] < formation.forwards:
        return Unit.FWD
    return Unit.MID


def select_starting_xi(club: Club) -> List[XIEntry]:
    """
    Startelva enligt klubbens formation:
      1) bästa tillgängliga målvakt
      2) backar / mittfältare / anfallare upp till formationens antal
      3) fyll på med bästa kvarvarande spelare, taggade med den lagdel som saknas
    Avstängda, skadade och sjuka spelare hoppas över. Färre än 11 endast om
    truppen saknar spelare.
    """
    # sorted() är stabil → lika betyg behåller truppordningen
    ranked = sorted(club.available_players(), key=lambda p: p.rating, reverse=True)
    if not ranked:
        return []

    formation = parse_formation(club.formation)
    by_unit: Dict[Unit, List[Player]] = {unit: [] for unit in Unit}
    for player in ranked:
        by_unit[player.unit].append(player)

    xi: List[XIEntry] = []
    if by_unit[Unit.GK]:
        xi.append(XIEntry(by_unit[Unit.GK][0], Unit.GK))
    for unit, count in (
        (Unit.DEF, formation.defenders),
        (Unit.MID, formation.midfielders),
        (Unit.FWD, formation.forwards),
    ):
        xi.extend(XIEntry(p, unit) for p in by_unit[unit][:count])
    # Formationer med fler än tio utespelare ("5-5-5") kapas här
    xi = xi[:XI_SIZE]

    used = {entry.player.id for entry in xi}
    for player in ranked:
        if len(xi) >= XI_SIZE:
            break
        if player.id in used:
            continue
        xi.append(XIEntry(player, _needed_unit(xi, formation)))
        used.add(player.id)
    return xi
