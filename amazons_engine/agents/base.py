"""
Agent Interface

The narrow capability the session/transport/GUI adapter depends on. An agent
owns the live game board for one side and exposes exactly the operations the
adapter needs:

    on_game_start(side)      → reset to the standard opening
    on_opponent_move(move)   → replay a confirmed opponent move
    choose_move(time_limit)  → decide, apply to the live board, return move

Strategies (random, heuristic MCTS) implement select_move() and always work
on a copy of the live board.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from amazons_engine.board.movegen import is_legal_move
from amazons_engine.board.representation import Board, Move, Side

logger = logging.getLogger(__name__)


class Agent(ABC):
    """
    Base class for Amazons playing strategies.

    Attributes:
        side: The side this agent plays
        board: Live game board, mutated only by confirmed moves
    """

    name = "agent"

    def __init__(self, side: Side = Side.A):
        self.side = Side(side)
        self.board = Board.initial_standard()

    def on_game_start(self, side: Side) -> None:
        """Start a new game from the standard opening, playing `side`."""
        self.side = Side(side)
        self.board = Board.initial_standard()
        logger.info(f"{self.name}: new game as side {self.side.name}")

    def on_opponent_move(self, move: Move) -> None:
        """
        Replay a confirmed opponent move into the live board.

        Raises:
            ValueError: If it is not the opponent's turn or the move is not
                        legal for the opponent
        """
        opponent = self.side.opponent
        if self.board.side_to_move != opponent:
            raise ValueError(f"It is not side {opponent.name}'s turn")
        if not is_legal_move(self.board, move, opponent):
            logger.error(f"{self.name}: illegal opponent move {move}")
            raise ValueError(f"Illegal move for side {opponent.name}: {move}")

        self.board.apply_move(move)
        logger.debug(f"{self.name}: opponent played {move}")

    def choose_move(self, time_limit: Optional[float] = None) -> Move:
        """
        Decide on a move, apply it to the live board and return it.

        Args:
            time_limit: Seconds available for this decision

        Returns:
            The chosen move

        Raises:
            NoLegalMoveError: If this side has no legal move (the game is lost)
            SearchError: If the strategy failed to produce a move
        """
        if self.board.side_to_move != self.side:
            raise ValueError(f"It is not side {self.side.name}'s turn")

        move = self.select_move(self.board.copy(), time_limit)
        self.board.apply_move(move)
        logger.info(f"{self.name}: playing {move}")
        return move

    @abstractmethod
    def select_move(self, board: Board, time_limit: Optional[float]) -> Move:
        """
        Pick a move for board.side_to_move.

        Args:
            board: Private copy of the live board
            time_limit: Seconds available (strategies may ignore it)
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(side={self.side.name})"
