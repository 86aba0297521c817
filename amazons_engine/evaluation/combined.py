"""
Combined Heuristic Evaluation

Weighted sum of the move heuristics, scaled by phase multipliers:

    score = blocking * w_b * p_b
          + mobility * w_m * p_m
          + territory * w_t * p_t
          + centralization * w_c * p_c
          + spread * w_s * p_s
          + arrow_placement * w_a * p_a
          - risk * w_r * p_r

where w_* are the base weights (HeuristicWeights) and p_* the multipliers of
the current game phase (PhaseTable).

All scoring goes through one MoveBatch per call: rank() applies each candidate
move once and scores the whole list in a few numpy passes, and score() is the
same computation on a batch of one, so both agree exactly.
"""

import heapq
from typing import Dict, List, Optional, Sequence

import numpy as np

from amazons_engine.board.representation import Board, Move
from amazons_engine.evaluation import heuristics
from amazons_engine.evaluation.base import MoveEvaluator
from amazons_engine.evaluation.heuristics import MoveBatch
from amazons_engine.evaluation.weights import (
    DEFAULT_PHASE_TABLE,
    DEFAULT_WEIGHTS,
    HeuristicWeights,
    PhaseMultipliers,
    PhaseTable,
    turn_for_ply,
)


class HeuristicEvaluator(MoveEvaluator):
    """
    Phase-weighted combination of the seven move heuristics.

    Attributes:
        weights: Base weights and scaling constants
        phase_table: Turn number → phase multipliers
    """

    def __init__(
        self,
        weights: HeuristicWeights = DEFAULT_WEIGHTS,
        phase_table: PhaseTable = DEFAULT_PHASE_TABLE,
    ):
        self.weights = weights
        self.phase_table = phase_table

    def multipliers_for(self, board: Board) -> PhaseMultipliers:
        return self.phase_table.multipliers_for(turn_for_ply(board.ply))

    def component_scores(
        self,
        moves: Sequence[Move],
        board: Board,
        multipliers: Optional[PhaseMultipliers] = None,
    ) -> Dict[str, np.ndarray]:
        """
        Weighted contribution of each heuristic, for every move at once.

        Risk is reported as a negative contribution so that the components sum
        to the combined score.

        Returns:
            Dict mapping heuristic name → float64 array aligned with moves
        """
        if multipliers is None:
            multipliers = self.multipliers_for(board)
        w = self.weights
        p = multipliers
        batch = MoveBatch(board, moves)

        return {
            "mobility": heuristics.mobility_scores(batch, w) * w.mobility * p.mobility,
            "blocking": heuristics.blocking_scores(batch, w) * w.blocking * p.blocking,
            "territory": heuristics.territory_scores(batch) * w.territory * p.territory,
            "center": heuristics.centralization_scores(batch) * w.center * p.center,
            "spread": heuristics.spread_scores(batch) * w.spread * p.spread,
            "arrow": heuristics.arrow_scores(batch) * w.arrow * p.arrow,
            "risk": -heuristics.risk_scores(batch) * w.risk * p.risk,
        }

    def score_moves(
        self,
        moves: Sequence[Move],
        board: Board,
        multipliers: Optional[PhaseMultipliers] = None,
    ) -> np.ndarray:
        """Combined score of every move, aligned with moves."""
        if not moves:
            return np.zeros(0)
        return sum(self.component_scores(moves, board, multipliers).values())

    def breakdown(
        self,
        move: Move,
        board: Board,
        multipliers: Optional[PhaseMultipliers] = None,
    ) -> Dict[str, float]:
        """Weighted contribution of each heuristic to the score of one move."""
        components = self.component_scores([move], board, multipliers)
        return {name: float(values[0]) for name, values in components.items()}

    def score(
        self,
        move: Move,
        board: Board,
        multipliers: Optional[PhaseMultipliers] = None,
    ) -> float:
        return float(self.score_moves([move], board, multipliers)[0])

    def rank(
        self,
        moves: Sequence[Move],
        board: Board,
        limit: Optional[int] = None,
        multipliers: Optional[PhaseMultipliers] = None,
    ) -> List[Move]:
        """Rank moves from a single batched scoring pass."""
        moves = list(moves)
        scores = self.score_moves(moves, board, multipliers).tolist()
        keep = len(moves) if limit is None else limit
        best = heapq.nlargest(keep, range(len(moves)), key=scores.__getitem__)
        return [moves[i] for i in best]

    def __repr__(self) -> str:
        return f"HeuristicEvaluator(phase_table=v{self.phase_table.version})"
