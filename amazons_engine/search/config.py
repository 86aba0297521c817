"""
Search configuration for the MCTS engine.

SearchConfig holds every tunable of the engine. Nothing here is global or
mutated during play: the growing move-choice cap, the growing selection depth
and the phase multipliers are all derived per decision by schedule(ply).
"""

from dataclasses import dataclass
from typing import Optional

from amazons_engine.evaluation.weights import (
    DEFAULT_PHASE_TABLE,
    PhaseMultipliers,
    PhaseTable,
    turn_for_ply,
)


@dataclass(frozen=True)
class DecisionSchedule:
    """Per-decision search parameters derived from the ply count."""

    ply: int
    turn: int
    move_choices: int
    max_depth: int
    multipliers: PhaseMultipliers


@dataclass
class SearchConfig:
    """Configuration for Monte Carlo Tree Search.

    The growth schedules have no derivation beyond hand tuning; they are kept
    as parameters so they can be changed without touching the algorithm.
    """

    # Selection
    exploration_c: float = 0.9
    """Exploration constant C in the UCT formula"""

    # Expansion
    move_choices: int = 20
    """Candidate moves kept per node at turn 0"""

    move_choices_step: int = 3
    """Extra candidate moves kept per turn played"""

    max_depth: int = 1
    """Selection depth limit at turn 0"""

    depth_increase_every: int = 10
    """Turns between selection depth increments (0 = never grow)"""

    # Simulation
    simulation_depth: Optional[int] = None
    """Playout ply cap; None plays out to the end of the game"""

    # Resources
    workers: int = 1
    """Threads sharing the tree"""

    time_limit: float = 5.0
    """Default wall-clock budget per decision, in seconds"""

    max_memory_mb: Optional[int] = 4096
    """Process memory growth ceiling per decision (None = unlimited)"""

    max_iterations: Optional[int] = None
    """Optional iteration cap, mostly for reproducible runs"""

    # Reproducibility
    seed: Optional[int] = None
    """Random seed for playouts (None for random)"""

    phase_table: PhaseTable = DEFAULT_PHASE_TABLE
    """Heuristic phase multipliers by turn"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.exploration_c < 0:
            raise ValueError(f"exploration_c must be non-negative, got {self.exploration_c}")

        if self.move_choices <= 0:
            raise ValueError(f"move_choices must be positive, got {self.move_choices}")

        if self.move_choices_step < 0:
            raise ValueError(
                f"move_choices_step must be non-negative, got {self.move_choices_step}"
            )

        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

        if self.depth_increase_every < 0:
            raise ValueError(
                f"depth_increase_every must be non-negative, got {self.depth_increase_every}"
            )

        if self.simulation_depth is not None and self.simulation_depth <= 0:
            raise ValueError(
                f"simulation_depth must be positive or None, got {self.simulation_depth}"
            )

        if self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

        if self.time_limit < 0:
            raise ValueError(f"time_limit must be non-negative, got {self.time_limit}")

        if self.max_memory_mb is not None and self.max_memory_mb <= 0:
            raise ValueError(f"max_memory_mb must be positive or None, got {self.max_memory_mb}")

        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError(
                f"max_iterations must be non-negative or None, got {self.max_iterations}"
            )

    def schedule(self, ply: int) -> DecisionSchedule:
        """
        Derive the search parameters for a decision at `ply`.

        move_choices = move_choices + move_choices_step * turn
        max_depth    = max_depth + turn // depth_increase_every
        """
        turn = turn_for_ply(ply)
        depth = self.max_depth
        if self.depth_increase_every:
            depth += turn // self.depth_increase_every

        return DecisionSchedule(
            ply=ply,
            turn=turn,
            move_choices=self.move_choices + self.move_choices_step * turn,
            max_depth=depth,
            multipliers=self.phase_table.multipliers_for(turn),
        )

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"SearchConfig(\n"
            f"  UCT: C={self.exploration_c}\n"
            f"  Expansion: choices={self.move_choices}+{self.move_choices_step}/turn, "
            f"depth={self.max_depth}+1/{self.depth_increase_every} turns\n"
            f"  Simulation: depth={self.simulation_depth or 'full game'}\n"
            f"  Resources: workers={self.workers}, time={self.time_limit}s, "
            f"memory={self.max_memory_mb}MB\n"
            f")"
        )
