"""Heuristic MCTS agent."""

from typing import Optional

from amazons_engine.agents.base import Agent
from amazons_engine.board.representation import Board, Move, Side
from amazons_engine.evaluation.base import MoveEvaluator
from amazons_engine.search.config import SearchConfig
from amazons_engine.search.mcts import MCTSEngine, SearchResult


class MCTSAgent(Agent):
    """
    Agent backed by the MCTS engine.

    Attributes:
        engine: Search engine (a fresh tree is built for every decision)
        last_result: Statistics of the most recent search, for diagnostics
    """

    name = "mcts"

    def __init__(
        self,
        side: Side = Side.A,
        config: Optional[SearchConfig] = None,
        evaluator: Optional[MoveEvaluator] = None,
    ):
        super().__init__(side)
        self.engine = MCTSEngine(evaluator=evaluator, config=config)
        self.last_result: Optional[SearchResult] = None

    def select_move(self, board: Board, time_limit: Optional[float]) -> Move:
        self.last_result = self.engine.search(board, time_limit=time_limit)
        return self.last_result.move
