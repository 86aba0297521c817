"""
Heuristic weight and phase tables.

Base weights say how much each heuristic matters; phase multipliers scale
them by game phase. The phase is selected by turn number, where one turn is
a move by each side (turn = ply // 2).

Default phase table (version "1"):

    Phase       Turns    mobility blocking territory center spread arrow risk
    early       0-7        1.2      0.8      0.5      1.2    1.2   0.8   0.8
    mid         8-19       1.0      1.0      0.7      1.0    1.0   1.0   1.0
    late        20-29      0.8      1.2      1.0      0.8    0.8   1.2   1.2
    very late   30+        0.7      1.3      1.2      0.7    0.7   1.3   1.3
"""

from dataclasses import dataclass, fields
from typing import Dict, Optional, Tuple

HEURISTIC_NAMES = (
    "mobility",
    "blocking",
    "territory",
    "center",
    "spread",
    "arrow",
    "risk",
)


@dataclass(frozen=True)
class HeuristicWeights:
    """Base weight per heuristic plus the raw scaling constants."""

    mobility: float = 0.3
    blocking: float = 1.0
    territory: float = 0.7
    center: float = 0.4
    spread: float = 0.3
    arrow: float = 0.25
    risk: float = 0.25

    mobility_scale: float = 3.0
    """Points per reachable square from queen_to"""

    blocking_scale: float = 2.0
    """Points per square of opponent mobility removed"""

    trapped_queen_bonus: float = 15.0
    """Flat bonus per opponent queen left with zero mobility"""

    def __post_init__(self):
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must be non-negative, got {getattr(self, f.name)}")

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in HEURISTIC_NAMES}


@dataclass(frozen=True)
class PhaseMultipliers:
    """Per-heuristic multipliers for one game phase."""

    mobility: float = 1.0
    blocking: float = 1.0
    territory: float = 1.0
    center: float = 1.0
    spread: float = 1.0
    arrow: float = 1.0
    risk: float = 1.0

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in HEURISTIC_NAMES}


@dataclass(frozen=True)
class PhaseTable:
    """
    Versioned mapping from turn number to phase multipliers.

    Attributes:
        rows: (until_turn, multipliers) pairs in increasing until_turn order;
              a row applies to turns strictly below until_turn
        final: Multipliers for turns past the last row
        version: Tag for tuning experiments
    """

    rows: Tuple[Tuple[int, PhaseMultipliers], ...]
    final: PhaseMultipliers
    version: str = "1"

    def __post_init__(self):
        limits = [until for until, _ in self.rows]
        if limits != sorted(limits) or len(set(limits)) != len(limits):
            raise ValueError(f"Phase limits must be strictly increasing, got {limits}")

    def multipliers_for(self, turn: int) -> PhaseMultipliers:
        for until_turn, multipliers in self.rows:
            if turn < until_turn:
                return multipliers
        return self.final

    def phase_index(self, turn: int) -> int:
        """0 for the first phase, len(rows) for the final phase."""
        for index, (until_turn, _) in enumerate(self.rows):
            if turn < until_turn:
                return index
        return len(self.rows)


EARLY = PhaseMultipliers(
    mobility=1.2, blocking=0.8, territory=0.5, center=1.2, spread=1.2, arrow=0.8, risk=0.8
)
MIDGAME = PhaseMultipliers(territory=0.7)
LATE = PhaseMultipliers(
    mobility=0.8, blocking=1.2, territory=1.0, center=0.8, spread=0.8, arrow=1.2, risk=1.2
)
VERY_LATE = PhaseMultipliers(
    mobility=0.7, blocking=1.3, territory=1.2, center=0.7, spread=0.7, arrow=1.3, risk=1.3
)

DEFAULT_WEIGHTS = HeuristicWeights()
DEFAULT_PHASE_TABLE = PhaseTable(
    rows=((8, EARLY), (20, MIDGAME), (30, LATE)),
    final=VERY_LATE,
    version="1",
)


def turn_for_ply(ply: int) -> int:
    return max(0, ply) // 2


def phase_multipliers(ply: int, table: Optional[PhaseTable] = None) -> PhaseMultipliers:
    """Multipliers for the phase a position with `ply` plies played is in."""
    table = DEFAULT_PHASE_TABLE if table is None else table
    return table.multipliers_for(turn_for_ply(ply))
