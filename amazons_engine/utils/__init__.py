"""
Utilities Module

This module provides logging setup plus testing and benchmarking helpers.

Key Components:
    - setup_logger: File (and optional console) logging for engine runs
    - perft: Move generation verification
    - play_game / run_match: Self-play between agents

Success Metrics:
    - perft(opening, 1) = 2176
    - MCTS agent should beat the random agent in the large majority of games
"""

from amazons_engine.utils.log import setup_logger
from amazons_engine.utils.testing import (
    GameRecord,
    perft,
    play_game,
    run_match,
)

__all__ = [
    'setup_logger',
    'GameRecord',
    'perft',
    'play_game',
    'run_match',
]
