"""
Amazons Engine

A heuristic Monte Carlo Tree Search decision engine for the Game of Amazons.

## Architecture

The engine is organized into several key modules:

1. **board**: Board model and legal move generation
   - 10x10, 1-indexed grid with 4 queens per side
   - Full (queen move, arrow shot) enumeration

2. **evaluation**: Move heuristics
   - Abstract MoveEvaluator interface (swappable design)
   - HeuristicEvaluator: mobility, blocking, territory, centralization,
     spread, arrow placement and risk, weighted by game phase

3. **search**: Monte Carlo Tree Search
   - UCT selection, heuristic expansion, random playouts
   - Wall-clock / memory budget, optional worker threads

4. **agents**: The interface an external game adapter talks to
   - on_game_start / on_opponent_move / choose_move
   - RandomAgent and MCTSAgent strategies

5. **utils**: Logging, perft and self-play helpers

## Quick Start

```python
from amazons_engine.board import Board
from amazons_engine.search import MCTSEngine, SearchConfig

board = Board.initial_standard()
engine = MCTSEngine(config=SearchConfig(time_limit=5.0))
move = engine.choose_move(board)
print(f"Best move: {move}")
```

### Self-play

```bash
python tools/self_play.py --games 4 --time-limit 2
```
"""

__version__ = "0.1.0"
__license__ = "MIT"

from amazons_engine.agents import Agent, MCTSAgent, RandomAgent, create_agent
from amazons_engine.board import Board, Move, Side, generate_moves, is_terminal
from amazons_engine.evaluation import HeuristicEvaluator, MoveEvaluator
from amazons_engine.search import MCTSEngine, NoLegalMoveError, SearchConfig, SearchError

__all__ = [
    'Agent',
    'MCTSAgent',
    'RandomAgent',
    'create_agent',
    'Board',
    'Move',
    'Side',
    'generate_moves',
    'is_terminal',
    'HeuristicEvaluator',
    'MoveEvaluator',
    'MCTSEngine',
    'NoLegalMoveError',
    'SearchConfig',
    'SearchError',
]
