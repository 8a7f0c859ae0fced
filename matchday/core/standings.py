from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .club import Club
from .fixtures import Fixture

# ---------- LIGATABELL ----------


@dataclass(slots=True)
class TableRow:
    club_id: str
    name: str
    mp: int = 0
    w: int = 0
    d: int = 0
    losses: int = 0
    gf: int = 0
    ga: int = 0
    pts: int = 0

    @property
    def gd(self) -> int:
        return self.gf - self.ga


def _ensure_row(table: Dict[str, TableRow], club_id: str, names: Dict[str, str]) -> TableRow:
    if club_id not in table:
        table[club_id] = TableRow(club_id=club_id, name=names.get(club_id, club_id))
    return table[club_id]


def apply_result_to_table(
    table: Dict[str, TableRow],
    fixture: Fixture,
    names: Optional[Dict[str, str]] = None,
) -> None:
    """3/1/0 poäng. Ospelade matcher ignoreras."""
    if not fixture.played:
        return
    names = names or {}
    h = _ensure_row(table, fixture.home_id, names)
    a = _ensure_row(table, fixture.away_id, names)

    h.mp += 1
    a.mp += 1

    h.gf += fixture.home_score
    h.ga += fixture.away_score

    a.gf += fixture.away_score
    a.ga += fixture.home_score

    if fixture.home_score > fixture.away_score:
        h.w += 1
        a.losses += 1
        h.pts += 3
    elif fixture.home_score < fixture.away_score:
        a.w += 1
        h.losses += 1
        a.pts += 3
    else:
        h.d += 1
        a.d += 1
        h.pts += 1
        a.pts += 1


def sort_table(table: Dict[str, TableRow]) -> List[TableRow]:
    # Poäng, målskillnad, gjorda mål; namn i bokstavsordning vid full likhet
    by_name = sorted(table.values(), key=lambda r: r.name)
    return sorted(by_name, key=lambda r: (r.pts, r.gd, r.gf), reverse=True)


def build_table(clubs: Iterable[Club], fixtures: Iterable[Fixture]) -> List[TableRow]:
    """Tabell för klubbarna, även de som inte spelat än, sorterad."""
    club_list = list(clubs)
    names = {c.club_id: c.name for c in club_list}
    table: Dict[str, TableRow] = {}
    for club in club_list:
        _ensure_row(table, club.club_id, names)
    for fixture in fixtures:
        if fixture.home_id in table and fixture.away_id in table:
            apply_result_to_table(table, fixture, names)
    return sort_table(table)
