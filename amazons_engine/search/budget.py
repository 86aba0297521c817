"""
Search budget: wall clock, process memory and iteration caps.

The budget is checked once per MCTS iteration, never during one, so the real
elapsed time may overshoot the deadline by the cost of a single playout.
"""

import time
from dataclasses import dataclass
from typing import Optional

import psutil

STOP_TIME = "time"
STOP_MEMORY = "memory"
STOP_ITERATIONS = "iterations"


@dataclass(frozen=True)
class SearchBudget:
    """Resource limits for a single decision.

    Attributes:
        time_limit: Seconds of wall clock (None = unlimited)
        max_memory_bytes: Allowed growth of process RSS (None = unlimited)
        max_iterations: Iteration cap (None = unlimited)
    """

    time_limit: Optional[float] = None
    max_memory_bytes: Optional[int] = None
    max_iterations: Optional[int] = None

    def __post_init__(self):
        if self.time_limit is None and self.max_memory_bytes is None and self.max_iterations is None:
            raise ValueError("SearchBudget needs at least one limit")

    def start(self) -> "BudgetTracker":
        return BudgetTracker(self)


class BudgetTracker:
    """Running view of a SearchBudget for one search."""

    def __init__(self, budget: SearchBudget):
        self.budget = budget
        self.start_time = time.monotonic()
        self.deadline = (
            self.start_time + budget.time_limit if budget.time_limit is not None else None
        )
        self._process = psutil.Process() if budget.max_memory_bytes is not None else None
        self.initial_rss = self._process.memory_info().rss if self._process else 0

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.start_time

    def memory_growth(self) -> int:
        if self._process is None:
            return 0
        return self._process.memory_info().rss - self.initial_rss

    def exhausted(self, iterations: int = 0) -> Optional[str]:
        """
        Check every limit.

        Args:
            iterations: Iterations completed so far

        Returns:
            The stop reason, or None while the budget lasts
        """
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return STOP_TIME
        if (
            self.budget.max_memory_bytes is not None
            and self.memory_growth() > self.budget.max_memory_bytes
        ):
            return STOP_MEMORY
        if self.budget.max_iterations is not None and iterations >= self.budget.max_iterations:
            return STOP_ITERATIONS
        return None
