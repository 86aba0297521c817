"""
Engine Testing and Benchmarking

This module provides tools for verifying move generation and for measuring
playing strength.

Tools:
    1. Perft: Count leaf positions of the full move tree to a fixed depth
       - perft(opening, 1) = 2176 is the standard regression baseline
       - Depth 2 already exceeds four million positions

    2. Self-play: Play complete games between two agents
       - Sides alternate between games to cancel first-move advantage
       - Every move goes through the agents' public interface, exactly as
         an external adapter would drive them

Evaluation Metrics:
    - Wins per agent
    - Average game length (plies)
    - Average thinking time per move
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from amazons_engine.agents.base import Agent
from amazons_engine.board.movegen import generate_moves, is_terminal
from amazons_engine.board.representation import Board, Move, Side


def perft(board: Board, depth: int) -> int:
    """
    Count leaf nodes of the legal move tree.

    Args:
        board: Starting position (not modified)
        depth: Plies to expand

    Returns:
        Number of positions reachable in exactly `depth` plies
    """
    if depth <= 0:
        return 1

    moves = generate_moves(board, board.side_to_move)
    if depth == 1:
        return len(moves)

    total = 0
    for move in moves:
        child = board.copy()
        child.apply_move(move)
        total += perft(child, depth - 1)
    return total


@dataclass
class GameRecord:
    """
    Result of one self-play game.

    Attributes:
        winner: Side that made the last legal move
        moves: Every move played, in order
        board: Final position
        move_times: Seconds spent on each move
    """
    winner: Optional[Side]
    moves: List[Move] = field(default_factory=list)
    board: Optional[Board] = None
    move_times: List[float] = field(default_factory=list)

    @property
    def plies(self) -> int:
        return len(self.moves)


def play_game(
    agent_a: Agent,
    agent_b: Agent,
    time_limit: Optional[float] = None,
    max_plies: Optional[int] = None,
) -> GameRecord:
    """
    Play one game from the standard opening.

    Args:
        agent_a: Agent playing side A (moves first)
        agent_b: Agent playing side B
        time_limit: Seconds per move passed to choose_move()
        max_plies: Stop early after this many plies (winner is then None)

    Returns:
        GameRecord with the winner and the move list
    """
    agent_a.on_game_start(Side.A)
    agent_b.on_game_start(Side.B)
    agents = {Side.A: agent_a, Side.B: agent_b}

    board = Board.initial_standard()
    record = GameRecord(winner=None)

    while max_plies is None or record.plies < max_plies:
        side = board.side_to_move
        if is_terminal(board, side):
            record.winner = side.opponent
            break

        start = time.monotonic()
        move = agents[side].choose_move(time_limit)
        record.move_times.append(time.monotonic() - start)

        agents[side.opponent].on_opponent_move(move)
        board.apply_move(move)
        record.moves.append(move)

    record.board = board
    return record


def run_match(
    make_first: Callable[[], Agent],
    make_second: Callable[[], Agent],
    games: int = 2,
    time_limit: Optional[float] = None,
    on_game_end: Optional[Callable[[int, GameRecord], None]] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Play a series of games, swapping sides every game.

    Args:
        make_first: Factory for the first agent
        make_second: Factory for the second agent
        games: Number of games
        time_limit: Seconds per move
        on_game_end: Optional callback(game_index, record), e.g. a progress bar
        verbose: If True, print a line per game

    Returns:
        Dictionary with match results:
            - first_wins / second_wins: Games won by each agent
            - games: Number of games played
            - avg_plies: Average game length
            - avg_move_time: Average seconds per move
            - records: List of GameRecord objects
    """
    first_wins = 0
    second_wins = 0
    records = []

    for index in range(games):
        first, second = make_first(), make_second()
        first_plays_a = index % 2 == 0
        agent_a, agent_b = (first, second) if first_plays_a else (second, first)

        record = play_game(agent_a, agent_b, time_limit=time_limit)
        records.append(record)

        if record.winner is not None:
            first_side = Side.A if first_plays_a else Side.B
            if record.winner == first_side:
                first_wins += 1
            else:
                second_wins += 1

        if verbose:
            winner = record.winner.name if record.winner else "-"
            print(f"Game {index + 1}: winner={winner}, plies={record.plies}")
        if on_game_end is not None:
            on_game_end(index, record)

    all_times = [t for r in records for t in r.move_times]
    return {
        'first_wins': first_wins,
        'second_wins': second_wins,
        'games': games,
        'avg_plies': sum(r.plies for r in records) / games if games else 0,
        'avg_move_time': sum(all_times) / len(all_times) if all_times else 0,
        'records': records,
    }
