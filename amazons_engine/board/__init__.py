"""
Board Module

This module provides the Amazons board model and the legal move generator.

Key Components:
    - Board: Mutable 1-indexed grid plus side-to-move flag
    - Move: Fixed-shape (queen_from, queen_to, arrow_to) value
    - generate_moves: Full legal move enumeration for a side
    - is_terminal: True when a side has no legal move (a loss)

Data Flow:
    Board.initial_standard() → generate_moves(board, side) → [Move, ...]
                             → board.apply_move(move)
"""

from amazons_engine.board.representation import (
    BOARD_SIZE,
    QUEENS_PER_SIDE,
    Board,
    Cell,
    Move,
    Position,
    Side,
)
from amazons_engine.board.movegen import (
    generate_move_triples,
    generate_moves,
    has_legal_move,
    is_legal_move,
    is_terminal,
    queen_mobility,
    slide,
    total_mobility,
)

__all__ = [
    'BOARD_SIZE',
    'QUEENS_PER_SIDE',
    'Board',
    'Cell',
    'Move',
    'Position',
    'Side',
    'generate_move_triples',
    'generate_moves',
    'has_legal_move',
    'is_legal_move',
    'is_terminal',
    'queen_mobility',
    'slide',
    'total_mobility',
]
