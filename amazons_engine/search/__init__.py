"""
Search Module

This module implements the Monte Carlo Tree Search decision engine. Each
decision builds a fresh tree rooted at the current position, grows it with
heuristically ordered expansions and random playouts until the time/memory
budget runs out, and returns the root move with the best win ratio.

Key Components:
    - MCTSEngine: Selection → Expansion → Simulation → Backpropagation
    - SearchNode: Tree node with weak parent link and owned children
    - SearchConfig: Tunables and the per-decision schedule
    - SearchBudget: Wall-clock, memory and iteration limits
    - NoLegalMoveError / SearchError: "game lost" vs "engine failed"
"""

from amazons_engine.search.budget import SearchBudget
from amazons_engine.search.config import DecisionSchedule, SearchConfig
from amazons_engine.search.mcts import (
    ChildStats,
    MCTSEngine,
    NoLegalMoveError,
    SearchError,
    SearchResult,
)
from amazons_engine.search.node import SearchNode

__all__ = [
    'MCTSEngine',
    'SearchNode',
    'SearchConfig',
    'DecisionSchedule',
    'SearchBudget',
    'SearchResult',
    'ChildStats',
    'NoLegalMoveError',
    'SearchError',
]
