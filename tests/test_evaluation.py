"""
Unit Tests for Move Evaluation

Tests for the individual heuristics, the phase tables and the combined
HeuristicEvaluator.
"""

import math

import pytest

from amazons_engine.board import (
    Board,
    Move,
    Side,
    generate_moves,
    is_terminal,
    queen_mobility,
)
from amazons_engine.evaluation import (
    DEFAULT_PHASE_TABLE,
    HeuristicEvaluator,
    HeuristicWeights,
    MoveEvaluator,
    PhaseMultipliers,
    PhaseTable,
)
from amazons_engine.evaluation import heuristics
from amazons_engine.evaluation.weights import (
    EARLY,
    HEURISTIC_NAMES,
    LATE,
    MIDGAME,
    VERY_LATE,
    phase_multipliers,
    turn_for_ply,
)


@pytest.fixture
def open_board():
    """4x4 board, one queen per side, nothing blocked."""
    return Board.from_rows([
        ". . . B",
        ". . . .",
        ". . . .",
        "A . . .",
    ])


@pytest.fixture
def trap_board():
    """3x3 board where A can wall in the B queen with one arrow."""
    return Board.from_rows([
        "B . .",
        "X X .",
        ". . A",
    ])


TRAPPING_MOVE = Move((1, 3), (2, 3), (3, 2))


class TestHeuristics:
    """Tests for the stateless heuristic functions."""

    def test_mobility_uses_board_before_move(self, open_board):
        """(1,2) sees 8 squares while the queen still stands on (1,1)."""
        move = Move((1, 1), (1, 2), (1, 1))
        assert heuristics.mobility(move, open_board) == 8 * 3.0

    def test_mobility_scale(self, open_board):
        move = Move((1, 1), (1, 2), (1, 1))
        weights = HeuristicWeights(mobility_scale=1.0)
        assert heuristics.mobility(move, open_board, weights) == 8.0

    def test_blocking_counts_removed_squares(self, open_board):
        """Arrow on (3,3) cuts the B queen's diagonal: 8 -> 6 squares."""
        move = Move((1, 1), (2, 2), (3, 3))
        assert heuristics.blocking(move, open_board) == 2 * 2.0

    def test_blocking_no_effect(self, open_board):
        move = Move((1, 1), (1, 2), (1, 3))
        assert heuristics.blocking(move, open_board) == 0.0

    def test_blocking_trapped_queen_bonus(self, trap_board):
        assert heuristics.blocking(TRAPPING_MOVE, trap_board) == 2 * 2.0 + 15.0

    def test_territory_after_move(self, trap_board):
        """A reaches all four empty squares, B reaches none."""
        assert heuristics.territory(TRAPPING_MOVE, trap_board) == 4.0

    def test_flood_fill_is_symmetric_in_opening(self):
        board = Board.initial_standard()
        grid = heuristics.padded_grid(board)
        territory_a = heuristics.flood_fill_counts(grid, Side.A)
        territory_b = heuristics.flood_fill_counts(grid, Side.B)

        assert territory_a == territory_b == 92

    def test_reach_counts_match_slides(self):
        board = Board.initial_standard()
        board.apply_move(Move((4, 1), (4, 4), (7, 4)))
        reach = heuristics.reach_counts(heuristics.padded_grid(board))

        for side in (Side.A, Side.B):
            for queen in board.queens(side):
                assert reach[queen] == queen_mobility(board, queen)

    def test_flood_fill_walled_off(self, trap_board):
        after = trap_board.copy()
        after.apply_move(TRAPPING_MOVE)
        grid = heuristics.padded_grid(after)

        assert heuristics.flood_fill_counts(grid, Side.A) == 4
        assert heuristics.flood_fill_counts(grid, Side.B) == 0

    def test_centralization(self, open_board):
        move = Move((1, 1), (1, 2), (1, 1))
        expected = math.hypot(1.5, 1.5) - math.hypot(1.5, 0.5)
        assert heuristics.centralization(move, open_board) == pytest.approx(expected)

    def test_centralization_corner_is_zero(self, open_board):
        move = Move((1, 1), (1, 4), (1, 1))
        assert heuristics.centralization(move, open_board) == pytest.approx(0.0)

    def test_spread(self):
        board = Board.from_rows([
            ". . . B",
            ". . . .",
            ". . . .",
            "A . . A",
        ])
        move = Move((1, 1), (2, 1), (1, 1))
        # Queens end on (2,1) and (1,4)
        assert heuristics.spread(move, board) == 4.0

    def test_spread_single_queen(self, open_board):
        assert heuristics.spread(Move((1, 1), (1, 2), (1, 1)), open_board) == 0.0

    def test_arrow_placement(self, open_board):
        diagonal = Move((1, 1), (1, 2), (1, 1))
        same_column = Move((1, 1), (1, 2), (1, 4))
        off_line = Move((1, 1), (1, 2), (1, 3))

        assert heuristics.arrow_placement(diagonal, open_board) == 1.0
        assert heuristics.arrow_placement(same_column, open_board) == 1.0
        assert heuristics.arrow_placement(off_line, open_board) == 0.0

    def test_risk(self, open_board):
        """Shooting above the queen drops own mobility from 8 to 6."""
        move = Move((1, 1), (1, 2), (2, 2))
        assert heuristics.risk(move, open_board) == 2.0

    def test_risk_never_negative(self, open_board):
        move = Move((1, 1), (2, 2), (3, 3))
        assert heuristics.risk(move, open_board) == 0.0

    def test_heuristics_do_not_mutate(self, trap_board):
        before = trap_board.copy()
        HeuristicEvaluator().score(TRAPPING_MOVE, trap_board)
        assert trap_board == before


class TestDegenerateMoves:
    """Malformed moves score neutral instead of raising."""

    @pytest.fixture
    def evaluator(self):
        return HeuristicEvaluator()

    @pytest.mark.parametrize("move", [
        Move((0, 1), (1, 2), (1, 1)),
        Move((1, 1), (1, 2), (5, 1)),
        Move((1, 1), (1, None), (1, 1)),
        Move((1, 1), (1.5, 1), (1, 1)),
        Move((1, 1), ("1", "2"), (1, 1)),
        Move((1, 1), (1, 2), (True, 1)),
        Move((1, 1), (1, 2, 3), (1, 1)),
        None,
    ])
    def test_neutral_score(self, open_board, evaluator, move):
        assert heuristics.mobility(move, open_board) == 0.0
        assert heuristics.blocking(move, open_board) == 0.0
        assert heuristics.territory(move, open_board) == 0.0
        assert heuristics.centralization(move, open_board) == 0.0
        assert heuristics.spread(move, open_board) == 0.0
        assert heuristics.arrow_placement(move, open_board) == 0.0
        assert heuristics.risk(move, open_board) == 0.0
        assert evaluator.score(move, open_board) == 0.0

    def test_malformed_move_in_batch(self, evaluator):
        """A bad move scores 0.0 without disturbing the rest of the batch."""
        opening = Board.initial_standard()
        good = Move((4, 1), (5, 1), (4, 1))
        bad = Move((4, 1), (5, None), (4, 1))

        scores = evaluator.score_moves([good, bad], opening)

        assert scores[1] == 0.0
        assert scores[0] == pytest.approx(evaluator.score(good, opening))
        assert set(evaluator.rank([bad, good], opening)) == {bad, good}


class TestPhaseTable:
    """Tests for the phase multiplier tables."""

    @pytest.mark.parametrize("turn,expected", [
        (0, EARLY),
        (7, EARLY),
        (8, MIDGAME),
        (19, MIDGAME),
        (20, LATE),
        (29, LATE),
        (30, VERY_LATE),
        (45, VERY_LATE),
    ])
    def test_phase_boundaries(self, turn, expected):
        assert DEFAULT_PHASE_TABLE.multipliers_for(turn) == expected

    def test_phase_index(self):
        assert DEFAULT_PHASE_TABLE.phase_index(0) == 0
        assert DEFAULT_PHASE_TABLE.phase_index(30) == 3

    def test_turn_is_half_ply(self):
        assert turn_for_ply(0) == 0
        assert turn_for_ply(15) == 7
        assert turn_for_ply(16) == 8
        assert phase_multipliers(16) == MIDGAME

    def test_midgame_damps_territory(self):
        assert MIDGAME.territory == 0.7
        assert MIDGAME.mobility == 1.0

    def test_unsorted_rows_rejected(self):
        with pytest.raises(ValueError):
            PhaseTable(rows=((20, MIDGAME), (8, EARLY)), final=LATE)

    def test_custom_table(self):
        flat = PhaseMultipliers()
        table = PhaseTable(rows=(), final=flat, version="flat")

        assert table.multipliers_for(0) is flat
        assert table.multipliers_for(100) is flat

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError, match="mobility"):
            HeuristicWeights(mobility=-0.1)

    def test_weights_as_dict(self):
        assert tuple(HeuristicWeights().as_dict()) == HEURISTIC_NAMES


class TestHeuristicEvaluator:
    """Tests for the combined phase-weighted evaluator."""

    @pytest.fixture
    def evaluator(self):
        return HeuristicEvaluator()

    def test_breakdown_sums_to_score(self, evaluator, open_board):
        move = Move((1, 1), (2, 2), (3, 3))
        breakdown = evaluator.breakdown(move, open_board)

        assert set(breakdown) == set(HEURISTIC_NAMES)
        assert sum(breakdown.values()) == pytest.approx(evaluator.score(move, open_board))

    def test_risk_is_a_penalty(self, evaluator, open_board):
        move = Move((1, 1), (1, 2), (2, 2))
        assert evaluator.breakdown(move, open_board)["risk"] < 0

    def test_weighting(self, evaluator, open_board):
        """Components are raw score * base weight * phase multiplier."""
        move = Move((1, 1), (2, 2), (3, 3))
        breakdown = evaluator.breakdown(move, open_board, multipliers=LATE)

        assert breakdown["blocking"] == pytest.approx(4.0 * 1.0 * 1.2)
        assert breakdown["mobility"] == pytest.approx(
            heuristics.mobility(move, open_board) * 0.3 * 0.8
        )

    def test_multipliers_follow_ply(self, evaluator):
        assert evaluator.multipliers_for(Board.initial_standard()) == EARLY

    def test_rank_orders_best_first(self, evaluator, open_board):
        moves = generate_moves(open_board, Side.A)
        ranked = evaluator.rank(moves, open_board)
        scores = [evaluator.score(move, open_board) for move in ranked]

        assert sorted(ranked) == sorted(moves)
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_rank_limit(self, evaluator, open_board):
        moves = generate_moves(open_board, Side.A)

        assert evaluator.rank(moves, open_board, limit=5) == evaluator.rank(moves, open_board)[:5]
        assert len(evaluator.rank(moves, open_board, limit=10_000)) == len(moves)

    def test_trapping_move_ranks_first(self, evaluator, trap_board):
        moves = generate_moves(trap_board, Side.A)
        best = evaluator.rank(moves, trap_board, limit=1)[0]

        after = trap_board.copy()
        after.apply_move(best)
        assert is_terminal(after, Side.B)


class TestEvaluatorInterface:
    """Tests for the abstract evaluator interface."""

    def test_evaluator_is_abstract(self):
        with pytest.raises(TypeError):
            MoveEvaluator()

    def test_rank_is_stable(self, open_board):
        """Equal scores keep generator order."""

        class ConstantEvaluator(MoveEvaluator):
            def score(self, move, board, multipliers=None):
                return 1.0

        moves = generate_moves(open_board, Side.A)
        assert ConstantEvaluator().rank(moves, open_board) == moves
        assert repr(ConstantEvaluator()) == "ConstantEvaluator()"


# ============================================================================
# Performance Tests
# ============================================================================

class TestEvaluationPerformance:
    """Ranking cost on the full opening move list."""

    @pytest.fixture
    def evaluator(self):
        return HeuristicEvaluator()

    @pytest.fixture
    def opening(self):
        return Board.initial_standard()

    def test_opening_rank_speed(self, evaluator, opening):
        """
        Ranking every opening move must leave time for search.

        A one-second decision expands its first node with this call.
        """
        import time

        moves = generate_moves(opening, Side.A)
        assert len(moves) == 2176

        start = time.monotonic()
        ranked = evaluator.rank(moves, opening, limit=20)
        elapsed = time.monotonic() - start

        assert len(ranked) == 20
        assert elapsed < 1.0, f"Ranking too slow: {elapsed:.2f}s for {len(moves)} moves"

    def test_batch_scores_match_single_scores(self, evaluator, opening):
        moves = generate_moves(opening, Side.A)
        scores = evaluator.score_moves(moves, opening)

        for index in range(0, len(moves), 97):
            assert scores[index] == pytest.approx(evaluator.score(moves[index], opening))

    def test_rank_matches_full_sort(self, evaluator, opening):
        moves = generate_moves(opening, Side.A)
        scores = evaluator.score_moves(moves, opening).tolist()
        by_score = sorted(range(len(moves)), key=scores.__getitem__, reverse=True)

        assert evaluator.rank(moves, opening, limit=50) == [moves[i] for i in by_score[:50]]
