"""
Evaluation Module

This module provides move evaluation for the Amazons engine. The key design
principle is that evaluators are SWAPPABLE - the MCTS engine works with any
evaluator that implements the base interface.

Key Components:
    - MoveEvaluator (ABC): Abstract base class defining the evaluation interface
    - HeuristicEvaluator: Phase-weighted sum of seven move heuristics
    - HeuristicWeights / PhaseTable: Versioned tuning tables

Data Flow:
    (move, board) → evaluator.score() → float
                                         Higher = more promising for
                                         board.side_to_move
"""

from amazons_engine.evaluation.base import MoveEvaluator
from amazons_engine.evaluation.combined import HeuristicEvaluator
from amazons_engine.evaluation.weights import (
    DEFAULT_PHASE_TABLE,
    DEFAULT_WEIGHTS,
    HeuristicWeights,
    PhaseMultipliers,
    PhaseTable,
)

__all__ = [
    'MoveEvaluator',
    'HeuristicEvaluator',
    'HeuristicWeights',
    'PhaseMultipliers',
    'PhaseTable',
    'DEFAULT_WEIGHTS',
    'DEFAULT_PHASE_TABLE',
]
