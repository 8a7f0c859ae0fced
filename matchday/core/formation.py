from __future__ import annotations

from typing import NamedTuple, Optional


class Formation(NamedTuple):
    defenders: int
    midfielders: int
    forwards: int

    @property
    def code(self) -> str:
        return f"{self.defenders}-{self.midfielders}-{self.forwards}"


DEFAULT = Formation(4, 3, 3)


def parse_formation(code: Optional[str]) -> Formation:
    """
    Tolkar en formationskod till (backar, mittfältare, anfallare).
    - "4-3-3"   → (4, 3, 3)
    - "4-2-3-1" → (4, 5, 1), de två mittersta slås ihop till mittfältet
    Allt annat ger 4-3-3.
    """
    if not code:
        return DEFAULT
    try:
        parts = [int(raw) for raw in str(code).strip().split("-")]
    except ValueError:
        return DEFAULT
    if any(n < 0 for n in parts):
        return DEFAULT
    if len(parts) == 3:
        return Formation(parts[0], parts[1], parts[2])
    if len(parts) == 4:
        return Formation(parts[0], parts[1] + parts[2], parts[3])
    return DEFAULT
