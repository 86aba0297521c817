"""
Board Representation

This module defines the core value types of the engine: sides, cell contents,
positions, moves, and the mutable game board.

Grid Layout:
    The game is 1-indexed. The grid is a (size + 1) * (size + 1) numpy array so
    that board[row, col] can be addressed directly with game coordinates.
    Row 0 and column 0 exist but are never used.

    (1, 1)   = bottom-left corner
    (10, 10) = top-right corner

Cell Encoding (int8):
    0: Empty
    1: Queen of side A
    2: Queen of side B
   -1: Blocked (arrow)

Standard Opening:
    Side A: (4,1), (1,4), (1,7), (4,10)
    Side B: (7,1), (10,4), (10,7), (7,10)
    Side A moves first.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

BOARD_SIZE = 10
QUEENS_PER_SIDE = 4

Position = Tuple[int, int]


class Side(IntEnum):
    """The two sides of an Amazons game."""

    A = 1
    B = 2

    @property
    def opponent(self) -> "Side":
        return Side.B if self is Side.A else Side.A


class Cell(IntEnum):
    """Contents of a single board square."""

    EMPTY = 0
    QUEEN_A = 1
    QUEEN_B = 2
    BLOCKED = -1

    @classmethod
    def queen_of(cls, side: Side) -> "Cell":
        return cls(int(side))


# Standard 8-queen symmetric opening layout
STANDARD_LAYOUT = {
    Side.A: [(4, 1), (1, 4), (1, 7), (4, 10)],
    Side.B: [(7, 1), (10, 4), (10, 7), (7, 10)],
}

# Characters used by __str__ and from_rows()
CELL_SYMBOLS = {
    Cell.EMPTY: ".",
    Cell.QUEEN_A: "A",
    Cell.QUEEN_B: "B",
    Cell.BLOCKED: "X",
}
SYMBOL_TO_CELL = {symbol: cell for cell, symbol in CELL_SYMBOLS.items()}


@dataclass(frozen=True, order=True)
class Move:
    """
    A complete Amazons ply: queen slide followed by an arrow shot.

    Attributes:
        queen_from: Square the queen leaves
        queen_to: Square the queen lands on
        arrow_to: Square the arrow blocks (may equal queen_from)
    """

    queen_from: Position
    queen_to: Position
    arrow_to: Position

    def __post_init__(self):
        # Lists would break numpy indexing and hashing
        for name in ("queen_from", "queen_to", "arrow_to"):
            value = getattr(self, name)
            if isinstance(value, list):
                object.__setattr__(self, name, tuple(value))

    @classmethod
    def from_triple(cls, triple: Sequence[Sequence[int]]) -> "Move":
        """Build a move from a plain ((r, c), (r, c), (r, c)) triple."""
        queen_from, queen_to, arrow_to = triple
        return cls(
            (int(queen_from[0]), int(queen_from[1])),
            (int(queen_to[0]), int(queen_to[1])),
            (int(arrow_to[0]), int(arrow_to[1])),
        )

    def to_triple(self) -> Tuple[Position, Position, Position]:
        return (self.queen_from, self.queen_to, self.arrow_to)

    def __str__(self) -> str:
        return (
            f"Q({self.queen_from[0]},{self.queen_from[1]})"
            f"->({self.queen_to[0]},{self.queen_to[1]}) "
            f"A({self.arrow_to[0]},{self.arrow_to[1]})"
        )


class Board:
    """
    Mutable Amazons board plus the side-to-move flag.

    Boards are created once from the standard opening and then mutated in
    place by confirmed moves. Search works on copies only.

    Attributes:
        size: Board edge length (10 for standard Amazons)
        grid: (size + 1, size + 1) int8 numpy array, 1-indexed
    """

    def __init__(self, size: int = BOARD_SIZE, side_to_move: Side = Side.A):
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}")
        self.size = size
        self.grid = np.zeros((size + 1, size + 1), dtype=np.int8)
        self._side_to_move = Side(side_to_move)

    @classmethod
    def initial_standard(cls) -> "Board":
        """Create the standard 10x10 opening position with side A to move."""
        board = cls(BOARD_SIZE, Side.A)
        for side, positions in STANDARD_LAYOUT.items():
            for pos in positions:
                board.place(pos, Cell.queen_of(side))
        return board

    @classmethod
    def from_rows(cls, rows: Iterable[str], side_to_move: Side = Side.A) -> "Board":
        """
        Build a board from a text diagram.

        Rows are given top row first (row `size` down to row 1), one character
        per square using '.', 'A', 'B' and 'X'. Whitespace is ignored.

        Raises:
            ValueError: If the diagram is not square or has unknown symbols
        """
        cleaned = ["".join(row.split()) for row in rows]
        cleaned = [row for row in cleaned if row]
        size = len(cleaned)
        board = cls(size, side_to_move)

        for index, row in enumerate(cleaned):
            if len(row) != size:
                raise ValueError(f"Row {index} has {len(row)} squares, expected {size}")
            board_row = size - index
            for col, symbol in enumerate(row, start=1):
                if symbol not in SYMBOL_TO_CELL:
                    raise ValueError(f"Unknown board symbol: {symbol!r}")
                board.grid[board_row, col] = SYMBOL_TO_CELL[symbol]

        return board

    # ------------------------------------------------------------------
    # Side to move
    # ------------------------------------------------------------------

    @property
    def side_to_move(self) -> Side:
        return self._side_to_move

    def set_side_to_move(self, side: Side) -> None:
        self._side_to_move = Side(side)

    @staticmethod
    def opponent(side: Side) -> Side:
        return Side(side).opponent

    # ------------------------------------------------------------------
    # Cell queries
    # ------------------------------------------------------------------

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 1 <= row <= self.size and 1 <= col <= self.size

    def cell(self, pos: Position) -> Cell:
        return Cell(int(self.grid[pos[0], pos[1]]))

    def is_empty(self, pos: Position) -> bool:
        return self.grid[pos[0], pos[1]] == Cell.EMPTY

    def owner(self, pos: Position) -> Optional[Side]:
        """Return the side whose queen occupies pos, or None."""
        value = int(self.grid[pos[0], pos[1]])
        if value in (Side.A, Side.B):
            return Side(value)
        return None

    def queens(self, side: Side) -> List[Position]:
        """Positions of all queens of `side`, in row-major order."""
        rows, cols = np.nonzero(self.grid == int(side))
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def blocked_count(self) -> int:
        return int(np.count_nonzero(self.grid == Cell.BLOCKED))

    @property
    def ply(self) -> int:
        """Plies played since the opening: every ply blocks exactly one square."""
        return self.blocked_count()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def place(self, pos: Position, cell: Cell) -> None:
        """Set a square directly. Used to build fixture positions."""
        if not self.in_bounds(pos):
            raise ValueError(f"Position {pos} is off a {self.size}x{self.size} board")
        self.grid[pos[0], pos[1]] = int(cell)

    def apply_move(self, move: Move) -> None:
        """
        Apply an already validated move and pass the turn.

        queen_from becomes Empty, queen_to takes the mover's queen, arrow_to
        becomes Blocked. The mover is whoever occupies queen_from.
        """
        mover = int(self.grid[move.queen_from])

        self.grid[move.queen_from] = Cell.EMPTY
        self.grid[move.queen_to] = mover
        self.grid[move.arrow_to] = Cell.BLOCKED

        if mover in (Side.A, Side.B):
            self._side_to_move = Side(mover).opponent

    def copy(self) -> "Board":
        """Full independent clone (no shared storage)."""
        clone = Board.__new__(Board)
        clone.size = self.size
        clone.grid = self.grid.copy()
        clone._side_to_move = self._side_to_move
        return clone

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.size == other.size
            and self._side_to_move == other._side_to_move
            and np.array_equal(self.grid, other.grid)
        )

    def __str__(self) -> str:
        lines = []
        for row in range(self.size, 0, -1):
            symbols = (CELL_SYMBOLS[Cell(int(v))] for v in self.grid[row, 1:])
            lines.append(f"{row:>2} " + " ".join(symbols))
        lines.append("   " + " ".join(str(col % 10) for col in range(1, self.size + 1)))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Board(size={self.size}, side_to_move={self._side_to_move.name}, "
            f"ply={self.ply})"
        )
