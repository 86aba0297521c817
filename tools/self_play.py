#!/usr/bin/env python3
"""
Self-Play Match Runner

Plays a series of games between two agents, alternating sides, and prints a
summary. Useful for checking that a tuning change actually helps.

Usage:
    python tools/self_play.py [--first mcts] [--second random] [--games 4]
                              [--time-limit 2.0] [--workers 1] [--verbose]
"""

import sys
import argparse
from pathlib import Path

from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent.parent))

from amazons_engine.agents import AGENTS, create_agent
from amazons_engine.search.config import SearchConfig
from amazons_engine.utils.log import setup_logger
from amazons_engine.utils.testing import run_match


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def agent_factory(name: str, config: SearchConfig, seed=None):
    """Return a zero-argument factory for the named agent."""
    def make():
        if name == "mcts":
            return create_agent(name, config=config)
        return create_agent(name, seed=seed)
    return make


def run_self_play(args):
    config = SearchConfig(
        time_limit=args.time_limit,
        workers=args.workers,
        simulation_depth=args.simulation_depth,
        seed=args.seed,
    )

    print("=" * 80)
    print("SELF-PLAY MATCH - Amazons Engine")
    print("=" * 80)
    print(f"First agent:  {args.first}")
    print(f"Second agent: {args.second}")
    print(f"Games: {args.games}, time per move: {format_time(args.time_limit)}")
    print(config)
    print("=" * 80)

    with tqdm(total=args.games, desc="Games", unit="game") as progress:
        result = run_match(
            agent_factory(args.first, config, args.seed),
            agent_factory(args.second, config, args.seed),
            games=args.games,
            time_limit=args.time_limit,
            on_game_end=lambda index, record: progress.update(1),
            verbose=args.verbose,
        )

    print("\n" + "=" * 80)
    print("SUMMARY")
    print("=" * 80)
    print(f"{args.first} (first):  {result['first_wins']}/{result['games']}")
    print(f"{args.second} (second): {result['second_wins']}/{result['games']}")
    print(f"Average game length: {result['avg_plies']:.1f} plies")
    print(f"Average move time: {format_time(result['avg_move_time'])}")
    print("=" * 80)

    return result


def main():
    parser = argparse.ArgumentParser(
        description="Play a self-play match between two Amazons agents"
    )
    parser.add_argument("--first", choices=sorted(AGENTS), default="mcts",
                        help="First agent (default: mcts)")
    parser.add_argument("--second", choices=sorted(AGENTS), default="random",
                        help="Second agent (default: random)")
    parser.add_argument("--games", type=int, default=4,
                        help="Number of games (default: 4)")
    parser.add_argument("--time-limit", type=float, default=2.0,
                        help="Seconds per MCTS move (default: 2.0)")
    parser.add_argument("--workers", type=int, default=1,
                        help="MCTS worker threads (default: 1)")
    parser.add_argument("--simulation-depth", type=int, default=None,
                        help="Playout ply cap (default: play to the end)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")
    parser.add_argument("--debug", action="store_true",
                        help="Log at DEBUG level to ~/.amazons_engine/engine.log")
    parser.add_argument("--verbose", action="store_true",
                        help="Print a line per game")

    args = parser.parse_args()
    setup_logger(debug=args.debug)

    try:
        run_self_play(args)
    except KeyboardInterrupt:
        print("\n\nMatch interrupted by user")
        sys.exit(1)
    except ValueError as e:
        print(f"\n\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
