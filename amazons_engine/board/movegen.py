"""
Legal Move Generation

Every Amazons move is a queen slide followed by an arrow shot from the
queen's landing square. Both use the same slide rule: travel in one of the
8 directions across empty squares until the first obstruction or the edge.

Algorithm:
    For each queen of the side:
        For each queen_to reachable by sliding:
            For each arrow_to reachable by sliding from queen_to
            (with queen_from treated as empty):
                emit Move(queen_from, queen_to, arrow_to)

The generator is correct by construction, so Board.apply_move() never
validates. The dominant cost is the materialized cross-product, which is
2176 moves per side in the opening position.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from amazons_engine.board.representation import Board, Cell, Move, Position, Side

Triple = Tuple[Position, Position, Position]

# (d_row, d_col) for the 8 queen directions
DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


def _slide_rows(
    rows: Sequence[Sequence[int]],
    size: int,
    pos: Position,
    vacated: Optional[Position] = None,
) -> Iterator[Position]:
    """Slide over a plain nested-list snapshot of the grid."""
    start_row, start_col = pos
    for d_row, d_col in DIRECTIONS:
        row = start_row + d_row
        col = start_col + d_col
        while 1 <= row <= size and 1 <= col <= size:
            if rows[row][col] != Cell.EMPTY and (row, col) != vacated:
                break
            yield (row, col)
            row += d_row
            col += d_col


def slide(board: Board, pos: Position, vacated: Optional[Position] = None) -> List[Position]:
    """
    Every empty square reachable from pos along the 8 directions.

    Args:
        board: Board to slide on
        pos: Starting square (its own content is ignored)
        vacated: Optional square to treat as empty (the square a queen just left)

    Returns:
        List of reachable positions
    """
    return list(_slide_rows(board.grid.tolist(), board.size, pos, vacated))


def queen_mobility(board: Board, pos: Position) -> int:
    """Number of squares a queen standing on pos can slide to."""
    return sum(1 for _ in _slide_rows(board.grid.tolist(), board.size, pos))


def total_mobility(board: Board, side: Side) -> int:
    """Sum of queen_mobility over all queens of side."""
    rows = board.grid.tolist()
    return sum(
        sum(1 for _ in _slide_rows(rows, board.size, queen))
        for queen in board.queens(side)
    )


def generate_move_triples(board: Board, side: Side) -> List[Triple]:
    """
    Enumerate every legal move for side as plain position triples.

    Same moves and order as generate_moves(), without building Move objects.
    Used by random playouts, which apply a single move per ply.
    """
    rows = board.grid.tolist()
    size = board.size
    triples: List[Triple] = []

    for queen_from in board.queens(side):
        for queen_to in _slide_rows(rows, size, queen_from):
            arrows = list(_slide_rows(rows, size, queen_to, vacated=queen_from))
            # The vacated square lies on the slide line and is always reachable
            if queen_from not in arrows:
                arrows.append(queen_from)
            for arrow_to in arrows:
                triples.append((queen_from, queen_to, arrow_to))

    return triples


def generate_moves(board: Board, side: Side) -> List[Move]:
    """
    Enumerate every legal move for side on board.

    Args:
        board: Current position
        side: Side whose moves to generate (need not be the side to move)

    Returns:
        List of legal moves, ordered by queen (row-major), then direction
    """
    return [Move(*triple) for triple in generate_move_triples(board, side)]


def has_legal_move(board: Board, side: Side) -> bool:
    """
    True if side has at least one legal move.

    A queen that can slide anywhere can always shoot back at the square it
    vacated, so this reduces to "some queen has nonzero mobility".
    """
    rows = board.grid.tolist()
    for queen in board.queens(side):
        for _ in _slide_rows(rows, board.size, queen):
            return True
    return False


def is_terminal(board: Board, side: Side) -> bool:
    """True when side has no legal move, i.e. side has lost."""
    return not has_legal_move(board, side)


def is_legal_move(board: Board, move: Move, side: Optional[Side] = None) -> bool:
    """
    Validate a move supplied from outside the core.

    Args:
        board: Position before the move
        move: Candidate move
        side: Expected mover (defaults to board.side_to_move)

    Returns:
        True if the move is legal for side on board
    """
    side = board.side_to_move if side is None else side
    positions = (move.queen_from, move.queen_to, move.arrow_to)
    if not all(board.in_bounds(pos) for pos in positions):
        return False
    if board.owner(move.queen_from) != side:
        return False

    rows = board.grid.tolist()
    if move.queen_to not in _slide_rows(rows, board.size, move.queen_from):
        return False
    return move.arrow_to in _slide_rows(rows, board.size, move.queen_to, vacated=move.queen_from)
