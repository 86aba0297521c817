"""
Move Heuristics

Scoring functions over (move, board). Every function scores the move for
board.side_to_move (the acting side) and is only used to bias search, never to
validate legality.

Heuristics:
    - mobility: squares reachable from queen_to
    - blocking: opponent mobility removed, plus a bonus per trapped queen
    - territory: flood-fill reach of own queens minus opponent's, after the move
    - centralization: closeness of queen_to to the board center
    - spread: mean pairwise Manhattan distance of own queens, after the move
    - arrow_placement: opponent queens sharing a line with arrow_to
    - risk: reduction of the acting side's own mobility (a penalty)

Batch Evaluation:
    A node ranks every legal move at once (2176 in the opening), so the
    heuristics work on a MoveBatch: all candidate moves applied to a stack of
    padded grids of shape (N, size + 2, size + 2). Mobility and flood fill are
    then a few numpy passes over the whole stack instead of N Python loops.

    Padded grids carry a BLOCKED border, so game coordinates index them
    directly and no slide ever needs a bounds check.

    The single-move functions (mobility(), blocking(), ...) are batches of one.

Degenerate move data (missing, non-integer or off-board squares) scores 0.0
instead of raising, so a single bad move cannot break a sort.
"""

import math
from functools import cached_property
from numbers import Integral
from typing import Callable, Optional, Sequence

import numpy as np

from amazons_engine.board.movegen import DIRECTIONS
from amazons_engine.board.representation import Board, Cell, Move, Side
from amazons_engine.evaluation.weights import DEFAULT_WEIGHTS, HeuristicWeights

NEUTRAL_SCORE = 0.0

# Stand-in coordinates for malformed moves; their scores are masked to 0.0
_PLACEHOLDER = ((1, 1), (1, 1), (1, 1))


def is_well_formed(move: Optional[Move], board: Board) -> bool:
    """True if every square of move is a (row, col) pair of integers on the board."""
    if move is None:
        return False
    for pos in (
        getattr(move, "queen_from", None),
        getattr(move, "queen_to", None),
        getattr(move, "arrow_to", None),
    ):
        if not isinstance(pos, tuple) or len(pos) != 2:
            return False
        if not all(isinstance(v, Integral) and not isinstance(v, bool) for v in pos):
            return False
        if not board.in_bounds(pos):
            return False
    return True


# ----------------------------------------------------------------------
# Grid primitives
# ----------------------------------------------------------------------


def padded_grid(board: Board) -> np.ndarray:
    """Copy of the board grid with a one-square BLOCKED border on every side."""
    size = board.size
    padded = np.full((size + 2, size + 2), int(Cell.BLOCKED), dtype=np.int8)
    padded[1:size + 1, 1:size + 1] = board.grid[1:, 1:]
    return padded


def _interior_shift(arr: np.ndarray, d_row: int, d_col: int) -> np.ndarray:
    """View holding arr[..., r + d_row, c + d_col] for every interior (r, c)."""
    height, width = arr.shape[-2:]
    return arr[..., 1 + d_row:height - 1 + d_row, 1 + d_col:width - 1 + d_col]


def reach_counts(grids: np.ndarray) -> np.ndarray:
    """
    Squares a queen standing on each cell could slide to.

    For every direction, run[cell] = empty[next] * (1 + run[next]) where next
    is the neighbour in that direction; after size - 1 rounds every run is
    exact. The cell's own content is ignored, so the value at a queen is its
    mobility and the value at an empty square is the mobility a queen would
    have there.

    Args:
        grids: One padded grid or a stack of them

    Returns:
        int16 array of the same shape
    """
    empty = grids == Cell.EMPTY
    rounds = grids.shape[-1] - 3
    reach = np.zeros(grids.shape, dtype=np.int16)

    for d_row, d_col in DIRECTIONS:
        step = _interior_shift(empty, d_row, d_col)
        run = np.zeros(grids.shape, dtype=np.int16)
        for _ in range(rounds):
            run[..., 1:-1, 1:-1] = np.where(step, _interior_shift(run, d_row, d_col) + 1, 0)
        reach += run

    return reach


def flood_fill_counts(grids: np.ndarray, side: Side) -> np.ndarray:
    """
    Count empty squares reachable by the queens of side.

    Sliding across empty squares in 8 directions, repeated from every square
    reached, covers exactly the empty squares 8-connected to a queen through
    other empty squares. That region is grown one ring per round until it
    stops changing.

    Args:
        grids: One padded grid or a stack of them
        side: Side whose territory to measure

    Returns:
        Territory per grid (a scalar array for a single grid)
    """
    empty = grids == Cell.EMPTY
    reached = grids == int(side)

    while True:
        neighbours = np.zeros_like(reached)
        for d_row, d_col in DIRECTIONS:
            neighbours[..., 1:-1, 1:-1] |= _interior_shift(reached, d_row, d_col)
        grown = reached | (neighbours & empty)
        if np.array_equal(grown, reached):
            break
        reached = grown

    return (reached & empty).sum(axis=(-2, -1))


def _side_total(grids: np.ndarray, reach: np.ndarray, side: Side) -> np.ndarray:
    return np.where(grids == int(side), reach, 0).sum(axis=(-2, -1))


# ----------------------------------------------------------------------
# Move batches
# ----------------------------------------------------------------------


class MoveBatch:
    """
    Candidate moves of one position, each applied exactly once.

    Attributes:
        board: Position before the moves
        side: Acting side (board.side_to_move)
        moves: The candidate moves
        valid: Boolean mask of well-formed moves
        coords: (N, 3, 2) int array of (queen_from, queen_to, arrow_to)
        before: Padded grid of board
        after: (N, size + 2, size + 2) stack of padded grids, one per move
    """

    def __init__(self, board: Board, moves: Sequence[Move]):
        self.board = board
        self.side = board.side_to_move
        self.moves = list(moves)
        self.valid = np.array([is_well_formed(m, board) for m in self.moves], dtype=bool)

        triples = [
            m.to_triple() if ok else _PLACEHOLDER
            for m, ok in zip(self.moves, self.valid)
        ]
        self.coords = np.array(triples, dtype=np.intp).reshape(-1, 3, 2)
        self.before = padded_grid(board)
        self.after = self._apply_all()

    def __len__(self) -> int:
        return len(self.moves)

    def _apply_all(self) -> np.ndarray:
        count = len(self.moves)
        after = np.repeat(self.before[np.newaxis], count, axis=0)
        index = np.arange(count)
        queen_from, queen_to, arrow_to = (self.coords[:, i] for i in range(3))

        movers = self.before[queen_from[:, 0], queen_from[:, 1]]
        after[index, queen_from[:, 0], queen_from[:, 1]] = Cell.EMPTY
        after[index, queen_to[:, 0], queen_to[:, 1]] = movers
        after[index, arrow_to[:, 0], arrow_to[:, 1]] = Cell.BLOCKED
        return after

    @cached_property
    def reach_before(self) -> np.ndarray:
        return reach_counts(self.before)

    @cached_property
    def reach_after(self) -> np.ndarray:
        return reach_counts(self.after)

    def mobility_before(self, side: Side) -> int:
        return int(_side_total(self.before, self.reach_before, side))

    def mobility_after(self, side: Side) -> np.ndarray:
        return _side_total(self.after, self.reach_after, side)

    def queens_before(self, side: Side) -> np.ndarray:
        """(Q, 2) array of the side's queen positions before the moves."""
        return np.argwhere(self.before == int(side))

    def masked(self, values) -> np.ndarray:
        """values as float64, with malformed moves forced to the neutral score."""
        return np.where(self.valid, values, NEUTRAL_SCORE).astype(np.float64)


def mobility_scores(batch: MoveBatch, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> np.ndarray:
    """Squares the queen can reach from queen_to, on the board before the move."""
    queen_to = batch.coords[:, 1]
    reach = batch.reach_before[queen_to[:, 0], queen_to[:, 1]]
    return batch.masked(reach * weights.mobility_scale)


def blocking_scores(batch: MoveBatch, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> np.ndarray:
    """Opponent mobility removed by each move, plus a bonus per trapped queen."""
    opponent = batch.side.opponent
    queens_after = batch.after == int(opponent)
    trapped = (queens_after & (batch.reach_after == 0)).sum(axis=(1, 2))

    effect = batch.mobility_before(opponent) - batch.mobility_after(opponent)
    return batch.masked(effect * weights.blocking_scale + trapped * weights.trapped_queen_bonus)


def territory_scores(batch: MoveBatch) -> np.ndarray:
    """Own flood-fill territory minus the opponent's, after each move."""
    own = flood_fill_counts(batch.after, batch.side)
    theirs = flood_fill_counts(batch.after, batch.side.opponent)
    return batch.masked(own - theirs)


def centralization_scores(batch: MoveBatch) -> np.ndarray:
    """
    Bonus that falls off linearly with Euclidean distance of queen_to from center.

    The center of a 10x10 board is (5.5, 5.5); a corner scores 0.
    """
    center = (batch.board.size + 1) / 2.0
    max_distance = math.hypot(center - 1, center - 1)
    queen_to = batch.coords[:, 1]
    distance = np.hypot(queen_to[:, 0] - center, queen_to[:, 1] - center)
    return batch.masked(np.maximum(0.0, max_distance - distance))


def spread_scores(batch: MoveBatch) -> np.ndarray:
    """Average pairwise Manhattan distance between own queens after each move."""
    queens = batch.queens_before(batch.side)
    if len(queens) < 2:
        return batch.masked(np.zeros(len(batch)))

    queen_from = batch.coords[:, 0]
    queen_to = batch.coords[:, 1]
    moved = (queens[np.newaxis] == queen_from[:, np.newaxis]).all(axis=-1)
    positions = np.where(moved[..., np.newaxis], queen_to[:, np.newaxis], queens[np.newaxis])

    first, second = np.triu_indices(len(queens), k=1)
    distances = np.abs(positions[:, first] - positions[:, second]).sum(axis=-1)
    return batch.masked(distances.mean(axis=-1))


def arrow_scores(batch: MoveBatch) -> np.ndarray:
    """One point per opponent queen on the same row, column or diagonal as arrow_to."""
    queens = batch.queens_before(batch.side.opponent)
    arrow_to = batch.coords[:, 2]
    d_row = np.abs(arrow_to[:, np.newaxis, 0] - queens[np.newaxis, :, 0])
    d_col = np.abs(arrow_to[:, np.newaxis, 1] - queens[np.newaxis, :, 1])
    on_line = (d_row == 0) | (d_col == 0) | (d_row == d_col)
    return batch.masked(on_line.sum(axis=-1))


def risk_scores(batch: MoveBatch) -> np.ndarray:
    """
    Reduction of the acting side's total mobility caused by each move.

    Returned as a positive number; the combined score subtracts it.
    """
    side = batch.side
    lost = batch.mobility_before(side) - batch.mobility_after(side)
    return batch.masked(np.maximum(0, lost))


# ----------------------------------------------------------------------
# Single-move scoring
# ----------------------------------------------------------------------


def _single(scorer: Callable[..., np.ndarray], move: Optional[Move], board: Board, *args) -> float:
    if not is_well_formed(move, board):
        return NEUTRAL_SCORE
    return float(scorer(MoveBatch(board, [move]), *args)[0])


def mobility(move: Move, board: Board, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> float:
    return _single(mobility_scores, move, board, weights)


def blocking(move: Move, board: Board, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> float:
    return _single(blocking_scores, move, board, weights)


def territory(move: Move, board: Board) -> float:
    return _single(territory_scores, move, board)


def centralization(move: Move, board: Board) -> float:
    return _single(centralization_scores, move, board)


def spread(move: Move, board: Board) -> float:
    return _single(spread_scores, move, board)


def arrow_placement(move: Move, board: Board) -> float:
    return _single(arrow_scores, move, board)


def risk(move: Move, board: Board) -> float:
    return _single(risk_scores, move, board)
