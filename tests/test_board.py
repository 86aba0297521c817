"""
Unit Tests for Board Representation

Tests for the 1-indexed grid, the Move value type and board mutation.
"""

import random

import numpy as np
import pytest

from amazons_engine.board import (
    BOARD_SIZE,
    QUEENS_PER_SIDE,
    Board,
    Cell,
    Move,
    Side,
    generate_moves,
)


class TestInitialPosition:
    """Tests for the standard opening layout."""

    @pytest.fixture
    def board(self):
        return Board.initial_standard()

    def test_queen_positions(self, board):
        """Queens sit on the standard squares, listed in row-major order."""
        assert board.queens(Side.A) == [(1, 4), (1, 7), (4, 1), (4, 10)]
        assert board.queens(Side.B) == [(7, 1), (7, 10), (10, 4), (10, 7)]

    def test_side_a_moves_first(self, board):
        assert board.side_to_move == Side.A
        assert board.ply == 0

    def test_no_blocked_squares(self, board):
        assert board.blocked_count() == 0

    def test_grid_shape_and_dtype(self, board):
        """Grid has an unused row and column 0 so game coordinates index it directly."""
        assert board.size == BOARD_SIZE
        assert board.grid.shape == (BOARD_SIZE + 1, BOARD_SIZE + 1)
        assert board.grid.dtype == np.int8
        assert not board.grid[0, :].any()
        assert not board.grid[:, 0].any()

    def test_cell_queries(self, board):
        assert board.cell((4, 1)) == Cell.QUEEN_A
        assert board.cell((10, 7)) == Cell.QUEEN_B
        assert board.cell((5, 5)) == Cell.EMPTY
        assert board.owner((4, 1)) == Side.A
        assert board.owner((7, 10)) == Side.B
        assert board.owner((5, 5)) is None
        assert board.is_empty((5, 5))
        assert not board.is_empty((1, 4))

    def test_in_bounds(self, board):
        assert board.in_bounds((1, 1))
        assert board.in_bounds((10, 10))
        assert not board.in_bounds((0, 5))
        assert not board.in_bounds((5, 11))


class TestApplyMove:
    """Tests for Board.apply_move()."""

    @pytest.fixture
    def board(self):
        return Board.initial_standard()

    def test_cell_effects(self, board):
        """queen_from empties, queen_to takes the queen, arrow_to is blocked."""
        board.apply_move(Move((4, 1), (5, 1), (6, 1)))

        assert board.cell((4, 1)) == Cell.EMPTY
        assert board.cell((5, 1)) == Cell.QUEEN_A
        assert board.cell((6, 1)) == Cell.BLOCKED

    def test_other_cells_unchanged(self, board):
        before = board.copy()
        board.apply_move(Move((4, 1), (5, 1), (6, 1)))

        changed = np.argwhere(before.grid != board.grid)
        assert sorted(map(tuple, changed)) == [(4, 1), (5, 1), (6, 1)]

    def test_arrow_on_vacated_square(self, board):
        """Shooting back at queen_from leaves it blocked, not empty."""
        board.apply_move(Move((4, 1), (5, 1), (4, 1)))

        assert board.cell((4, 1)) == Cell.BLOCKED
        assert board.cell((5, 1)) == Cell.QUEEN_A
        assert board.blocked_count() == 1

    def test_turn_passes(self, board):
        board.apply_move(Move((4, 1), (5, 1), (4, 1)))
        assert board.side_to_move == Side.B

        board.apply_move(Move((7, 1), (6, 1), (7, 1)))
        assert board.side_to_move == Side.A
        assert board.ply == 2

    def test_random_game_invariants(self, board):
        """Queen count stays fixed and exactly one square is blocked per ply."""
        rng = random.Random(7)

        for ply in range(1, 31):
            moves = generate_moves(board, board.side_to_move)
            if not moves:
                break
            board.apply_move(rng.choice(moves))

            assert len(board.queens(Side.A)) == QUEENS_PER_SIDE
            assert len(board.queens(Side.B)) == QUEENS_PER_SIDE
            assert board.blocked_count() == ply


class TestCopy:
    """Tests for Board.copy()."""

    def test_copy_is_equal(self):
        board = Board.initial_standard()
        assert board.copy() == board

    def test_copy_shares_no_storage(self):
        board = Board.initial_standard()
        clone = board.copy()

        clone.apply_move(Move((4, 1), (5, 1), (4, 1)))

        assert board.cell((4, 1)) == Cell.QUEEN_A
        assert board.side_to_move == Side.A
        assert clone != board
        assert not np.shares_memory(board.grid, clone.grid)


class TestFromRows:
    """Tests for building fixture boards from text diagrams."""

    def test_rows_are_top_first(self):
        board = Board.from_rows([
            "A . .",
            ". X .",
            ". . B",
        ])

        assert board.size == 3
        assert board.cell((3, 1)) == Cell.QUEEN_A
        assert board.cell((2, 2)) == Cell.BLOCKED
        assert board.cell((1, 3)) == Cell.QUEEN_B

    def test_side_to_move(self):
        board = Board.from_rows(["A.", ".B"], side_to_move=Side.B)
        assert board.side_to_move == Side.B

    def test_ragged_rows_rejected(self):
        with pytest.raises(ValueError):
            Board.from_rows(["A..", ".B"])

    def test_unknown_symbol_rejected(self):
        with pytest.raises(ValueError, match="Unknown board symbol"):
            Board.from_rows(["A?", ".B"])

    def test_str_round_trip(self):
        board = Board.from_rows(["A.", "XB"])
        lines = str(board).splitlines()

        assert lines[0].split()[1:] == ["A", "."]
        assert lines[1].split()[1:] == ["X", "B"]


class TestBoardEdgeCases:
    """Tests for invalid construction and direct placement."""

    def test_too_small_board(self):
        with pytest.raises(ValueError):
            Board(size=1)

    def test_place_off_board(self):
        board = Board(size=4)
        with pytest.raises(ValueError):
            board.place((5, 1), Cell.QUEEN_A)

    def test_set_side_to_move(self):
        board = Board.initial_standard()
        board.set_side_to_move(Side.B)
        assert board.side_to_move == Side.B

    def test_opponent(self):
        assert Side.A.opponent == Side.B
        assert Board.opponent(Side.B) == Side.A


class TestMove:
    """Tests for the Move value type."""

    def test_lists_become_tuples(self):
        move = Move([4, 1], [5, 1], [4, 1])

        assert move.queen_from == (4, 1)
        assert move == Move((4, 1), (5, 1), (4, 1))
        assert hash(move) == hash(Move((4, 1), (5, 1), (4, 1)))

    def test_triple_conversion(self):
        triple = ((4, 1), (5, 1), (6, 1))
        move = Move.from_triple(triple)

        assert move.to_triple() == triple

    def test_str(self):
        assert str(Move((4, 1), (5, 1), (4, 1))) == "Q(4,1)->(5,1) A(4,1)"

    def test_immutable(self):
        move = Move((4, 1), (5, 1), (4, 1))
        with pytest.raises(AttributeError):
            move.queen_to = (6, 1)
