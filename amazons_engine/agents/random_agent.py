"""Uniformly random legal-move agent, used as a baseline opponent."""

import random
from typing import Optional

from amazons_engine.agents.base import Agent
from amazons_engine.board.movegen import generate_moves
from amazons_engine.board.representation import Board, Move, Side
from amazons_engine.search.mcts import NoLegalMoveError


class RandomAgent(Agent):
    """Plays a uniformly random legal move."""

    name = "random"

    def __init__(self, side: Side = Side.A, seed: Optional[int] = None):
        super().__init__(side)
        self.rng = random.Random(seed)

    def select_move(self, board: Board, time_limit: Optional[float]) -> Move:
        moves = generate_moves(board, board.side_to_move)
        if not moves:
            raise NoLegalMoveError(f"Side {board.side_to_move.name} has no legal move")
        return self.rng.choice(moves)
