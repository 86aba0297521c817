"""
Search tree nodes.

Ownership is strictly top-down: a node owns its children in an insertion
ordered list, and holds only a weak reference back to its parent for UCT
lookups and backpropagation. The whole tree lives only as long as the root
held by the engine for one decision.
"""

import math
import weakref
from typing import Iterator, List, Optional

from amazons_engine.board.movegen import generate_moves
from amazons_engine.board.representation import Board, Move, Side

UCT_EPSILON = 1e-10


class SearchNode:
    """
    One position in the MCTS tree.

    Attributes:
        board: Position snapshot owned by this node
        move: Move that led here from the parent (None at the root)
        children: Expanded children, in expansion order
        untried_moves: Legal moves not yet expanded, computed at creation
        ranked: True once untried_moves has been ordered and truncated
        visits: Playouts through this node
        wins: Playouts through this node won by the deciding bot
    """

    def __init__(self, board: Board, parent: Optional["SearchNode"] = None, move: Optional[Move] = None):
        self.board = board
        self.move = move
        self._parent = weakref.ref(parent) if parent is not None else None
        self.depth = parent.depth + 1 if parent is not None else 0

        self.children: List["SearchNode"] = []
        self.untried_moves: List[Move] = generate_moves(board, board.side_to_move)
        self.ranked = False
        self.terminal = not self.untried_moves

        self.visits = 0
        self.wins = 0

    @property
    def parent(self) -> Optional["SearchNode"]:
        return self._parent() if self._parent is not None else None

    @property
    def side_to_move(self) -> Side:
        return self.board.side_to_move

    @property
    def win_ratio(self) -> float:
        if self.visits == 0:
            return 0.0
        return self.wins / self.visits

    def add_child(self, move: Move) -> "SearchNode":
        """Apply move to a copy of this node's board and attach the result."""
        child_board = self.board.copy()
        child_board.apply_move(move)
        child = SearchNode(child_board, parent=self, move=move)
        self.children.append(child)
        return child

    def uct_value(self, child: "SearchNode", exploration_c: float, bot_side: Side) -> float:
        """
        UCT score of child as seen from this node.

        Wins are counted for the deciding bot, so the exploitation term is
        flipped when the opponent is the one choosing at this node.
        """
        exploitation = child.win_ratio
        if self.side_to_move != bot_side:
            exploitation = 1.0 - exploitation
        parent_visits = max(self.visits, 1)
        exploration = exploration_c * math.sqrt(
            math.log(parent_visits) / (child.visits + UCT_EPSILON)
        )
        return exploitation + exploration

    def best_uct_child(self, exploration_c: float, bot_side: Side) -> Optional["SearchNode"]:
        """Child with the highest UCT value; the first one wins ties."""
        best_child = None
        best_value = -math.inf
        for child in self.children:
            value = self.uct_value(child, exploration_c, bot_side)
            if value > best_value:
                best_value = value
                best_child = child
        return best_child

    def path_to_root(self) -> Iterator["SearchNode"]:
        node: Optional[SearchNode] = self
        while node is not None:
            yield node
            node = node.parent

    def __repr__(self) -> str:
        return (
            f"SearchNode(move={self.move}, visits={self.visits}, wins={self.wins}, "
            f"children={len(self.children)}, untried={len(self.untried_moves)})"
        )
