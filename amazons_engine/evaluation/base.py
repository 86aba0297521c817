"""
Abstract Move Evaluator Interface

This module defines the abstract base class for all move evaluators.
By defining a common interface, we can swap between evaluators without
modifying the search algorithm.

Key Principles:
    1. Evaluators are stateless
    2. score() rates a candidate move for board.side_to_move
    3. Higher = more promising; scores only bias search, never legality
    4. Degenerate moves score 0.0 rather than raising

Usage in search:
    - Ordering untried moves before expansion (best first)
    - Capping how many candidate moves per node are considered
"""

import heapq
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from amazons_engine.board.representation import Board, Move
from amazons_engine.evaluation.weights import PhaseMultipliers


class MoveEvaluator(ABC):
    """
    Abstract base class for move evaluation.

    All evaluator implementations must inherit from this class and implement
    the score() method. This ensures compatibility with the MCTS engine.
    """

    @abstractmethod
    def score(
        self,
        move: Move,
        board: Board,
        multipliers: Optional[PhaseMultipliers] = None,
    ) -> float:
        """
        Score a candidate move for board.side_to_move.

        Args:
            move: Candidate move (assumed legal)
            board: Position before the move
            multipliers: Phase multipliers for this decision; evaluators
                         derive them from board.ply when omitted

        Returns:
            float: Heuristic score (higher is better)
        """
        pass

    def rank(
        self,
        moves: Sequence[Move],
        board: Board,
        limit: Optional[int] = None,
        multipliers: Optional[PhaseMultipliers] = None,
    ) -> List[Move]:
        """
        Order moves best first and keep at most `limit` of them.

        Selection is stable, so equal scores keep generator order.

        Args:
            moves: Candidate moves
            board: Position before the moves
            limit: Maximum number of moves to keep (None = all)
            multipliers: Phase multipliers passed through to score()

        Returns:
            List of moves sorted by descending score
        """
        moves = list(moves)
        keep = len(moves) if limit is None else limit
        return heapq.nlargest(
            keep,
            moves,
            key=lambda move: self.score(move, board, multipliers),
        )

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
