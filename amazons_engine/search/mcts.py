"""
Monte Carlo Tree Search

This module implements the decision engine. Every call builds a fresh tree
rooted at a copy of the given board, grows it until the budget runs out, and
returns the root child with the best win ratio. The tree is then discarded.

Iteration:
    1. Selection: from the root, while the node is non-terminal and within the
       depth limit, stop at the first node with untried moves, otherwise
       descend to the child with the highest UCT value
    2. Expansion: order the node's untried moves by heuristic score, keep the
       top `move_choices`, and expand the best one into a new child
    3. Simulation: play uniformly random legal moves on a private board copy
       until a side cannot move (or the optional depth cap is hit)
    4. Backpropagation: add the playout result to every node up to the root

UCT:
    UCT = exploitation + C * sqrt(ln(parent_visits) / (child_visits + eps))
    exploitation = wins / visits, flipped (1 - x) at opponent-to-move nodes

Concurrency:
    With workers > 1, threads share one tree. A single lock serializes
    Selection + Expansion and Backpropagation; Simulation runs outside it.

References:
    - MCTS: https://www.chessprogramming.org/Monte-Carlo_Tree_Search
    - UCT: Kocsis & Szepesvari, "Bandit based Monte-Carlo Planning" (2006)
"""

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from amazons_engine.board.movegen import generate_move_triples, is_terminal, total_mobility
from amazons_engine.board.representation import Board, Move, Side
from amazons_engine.evaluation.base import MoveEvaluator
from amazons_engine.evaluation.combined import HeuristicEvaluator
from amazons_engine.search.budget import BudgetTracker, SearchBudget
from amazons_engine.search.config import DecisionSchedule, SearchConfig
from amazons_engine.search.node import SearchNode

logger = logging.getLogger(__name__)

MB = 1024 * 1024
TOP_MOVES_TO_LOG = 5


class NoLegalMoveError(ValueError):
    """The side to move has no legal move: the game is over and that side lost."""


class SearchError(RuntimeError):
    """The engine finished without producing a move."""


@dataclass
class ChildStats:
    """Visit statistics of one root child."""

    move: Move
    visits: int
    wins: int

    @property
    def win_rate(self) -> float:
        return self.wins / self.visits if self.visits else 0.0


@dataclass
class SearchResult:
    """
    Outcome of one decision.

    Attributes:
        move: The selected move
        iterations: Completed MCTS iterations
        elapsed: Wall-clock seconds spent
        stop_reason: Which budget limit ended the search
        root_visits: Visits of the root node
        children: Statistics for every root child, in expansion order
    """

    move: Move
    iterations: int
    elapsed: float
    stop_reason: Optional[str]
    root_visits: int
    children: List[ChildStats] = field(default_factory=list)


class MCTSEngine:
    """
    Heuristically biased, budget-bounded Monte Carlo Tree Search.

    Attributes:
        evaluator: Move evaluator used to order and cap expansions
        config: Search tunables
    """

    def __init__(
        self,
        evaluator: Optional[MoveEvaluator] = None,
        config: Optional[SearchConfig] = None,
    ):
        self.evaluator = evaluator if evaluator else HeuristicEvaluator()
        self.config = config if config else SearchConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def choose_move(self, board: Board, time_limit: Optional[float] = None) -> Move:
        """Run a search on board and return only the selected move."""
        return self.search(board, time_limit=time_limit).move

    def search(
        self,
        board: Board,
        time_limit: Optional[float] = None,
        budget: Optional[SearchBudget] = None,
    ) -> SearchResult:
        """
        Search for the best move for board.side_to_move.

        Args:
            board: Position to decide on (never modified)
            time_limit: Seconds to search (defaults to config.time_limit)
            budget: Full budget; overrides time_limit when given

        Returns:
            SearchResult with the selected move and statistics

        Raises:
            NoLegalMoveError: If the side to move has no legal move
            SearchError: If the budget ran out before any move was expanded
        """
        bot_side = board.side_to_move
        if is_terminal(board, bot_side):
            raise NoLegalMoveError(f"Side {bot_side.name} has no legal move")

        if budget is None:
            budget = self._default_budget(time_limit)

        schedule = self.config.schedule(board.ply)
        root = SearchNode(board.copy())
        tracker = budget.start()

        logger.info(
            f"Search started: side={bot_side.name}, ply={schedule.ply}, "
            f"choices={schedule.move_choices}, depth={schedule.max_depth}, "
            f"legal={len(root.untried_moves)}, workers={self.config.workers}"
        )

        iterations, stop_reason = self._run(root, bot_side, schedule, tracker)
        elapsed = tracker.elapsed

        logger.info(
            f"Search stopped ({stop_reason}): iterations={iterations}, "
            f"root_children={len(root.children)}, time={elapsed * 1000:.0f}ms"
        )
        if logger.isEnabledFor(logging.DEBUG):
            self._log_top_moves(root, schedule)

        best = self.best_child(root)
        return SearchResult(
            move=best.move,
            iterations=iterations,
            elapsed=elapsed,
            stop_reason=stop_reason,
            root_visits=root.visits,
            children=[ChildStats(c.move, c.visits, c.wins) for c in root.children],
        )

    # ------------------------------------------------------------------
    # Iteration driver
    # ------------------------------------------------------------------

    def _default_budget(self, time_limit: Optional[float]) -> SearchBudget:
        max_memory = self.config.max_memory_mb
        return SearchBudget(
            time_limit=self.config.time_limit if time_limit is None else time_limit,
            max_memory_bytes=max_memory * MB if max_memory is not None else None,
            max_iterations=self.config.max_iterations,
        )

    def _run(
        self,
        root: SearchNode,
        bot_side: Side,
        schedule: DecisionSchedule,
        tracker: BudgetTracker,
    ):
        """Run worker loops until the budget is exhausted."""
        lock = threading.Lock()
        state = {"iterations": 0, "stop_reason": None}
        errors: List[BaseException] = []

        def worker(index: int):
            seed = self.config.seed
            rng = random.Random(seed + index if seed is not None else None)
            try:
                self._worker_loop(root, bot_side, schedule, tracker, lock, state, rng)
            except Exception as e:
                logger.error(f"Search worker {index} failed: {e}", exc_info=True)
                with lock:
                    errors.append(e)
                    state["stop_reason"] = state["stop_reason"] or "error"

        if self.config.workers == 1:
            worker(0)
        else:
            threads = [
                threading.Thread(target=worker, args=(i,), name=f"mcts-worker-{i}")
                for i in range(self.config.workers)
            ]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        if errors:
            raise errors[0]

        return state["iterations"], state["stop_reason"]

    def _worker_loop(self, root, bot_side, schedule, tracker, lock, state, rng):
        while True:
            with lock:
                if state["stop_reason"] is None:
                    state["stop_reason"] = tracker.exhausted(state["iterations"])
                if state["stop_reason"] is not None:
                    return

                leaf = self.select(root, bot_side, schedule)
                simulation_board = leaf.board.copy()

            result = self.simulate(simulation_board, bot_side, rng)

            with lock:
                self.backpropagate(leaf, result)
                state["iterations"] += 1

    # ------------------------------------------------------------------
    # MCTS phases
    # ------------------------------------------------------------------

    def select(self, root: SearchNode, bot_side: Side, schedule: DecisionSchedule) -> SearchNode:
        """
        Selection + Expansion (tree policy).

        Returns:
            The newly expanded child, or the node where descent stopped
        """
        node = root
        while not node.terminal and node.depth - root.depth < schedule.max_depth:
            if node.untried_moves:
                return self.expand(node, schedule)
            if not node.children:
                break
            node = node.best_uct_child(self.config.exploration_c, bot_side)
        return node

    def expand(self, node: SearchNode, schedule: DecisionSchedule) -> SearchNode:
        """Expand the best-scoring untried move of node into a new child."""
        if not node.ranked:
            node.untried_moves = self.evaluator.rank(
                node.untried_moves,
                node.board,
                limit=schedule.move_choices,
                multipliers=schedule.multipliers,
            )
            node.ranked = True

        move = node.untried_moves.pop(0)
        return node.add_child(move)

    def simulate(self, board: Board, bot_side: Side, rng: random.Random) -> int:
        """
        Random playout on board (mutated in place).

        Returns:
            1 if the bot's side wins (the opponent runs out of moves), else 0.
            With a depth cap, a truncated playout is a win when the bot has
            more total mobility than the opponent.
        """
        depth_cap = self.config.simulation_depth
        plies = 0

        while depth_cap is None or plies < depth_cap:
            side = board.side_to_move
            triples = generate_move_triples(board, side)
            if not triples:
                return 1 if side != bot_side else 0
            board.apply_move(Move(*rng.choice(triples)))
            plies += 1

        ours = total_mobility(board, bot_side)
        theirs = total_mobility(board, bot_side.opponent)
        return 1 if ours > theirs else 0

    def backpropagate(self, node: SearchNode, result: int) -> None:
        """Record one playout on node and all of its ancestors."""
        for current in node.path_to_root():
            current.visits += 1
            current.wins += result

    def best_child(self, root: SearchNode) -> SearchNode:
        """
        Root child with the highest wins/visits ratio (first one wins ties).

        Raises:
            SearchError: If the root has no children or the best one has no move
        """
        best = None
        best_ratio = -1.0
        for child in root.children:
            if child.win_ratio > best_ratio:
                best_ratio = child.win_ratio
                best = child

        if best is None:
            raise SearchError("Search expanded no moves before the budget ran out")
        if best.move is None:
            raise SearchError("Selected child has no associated move")
        return best

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _log_top_moves(self, root: SearchNode, schedule: DecisionSchedule) -> None:
        ranked = sorted(root.children, key=lambda c: c.visits, reverse=True)
        logger.debug("Top moves:")
        for i, child in enumerate(ranked[:TOP_MOVES_TO_LOG], start=1):
            parts = ""
            if isinstance(self.evaluator, HeuristicEvaluator):
                breakdown = self.evaluator.breakdown(child.move, root.board, schedule.multipliers)
                parts = "  " + "  ".join(f"{k[0].upper()}:{v:.2f}" for k, v in breakdown.items())
            logger.debug(
                f"{i}. {child.move}  visits={child.visits}  "
                f"win_rate={100.0 * child.win_ratio:.2f}%{parts}"
            )
        logger.debug(f"Total moves considered: {len(root.children)}, turn={schedule.turn}")
