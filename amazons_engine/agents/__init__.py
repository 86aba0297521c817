"""
Agents Module

Playing strategies behind the narrow Agent interface that an external
session/transport/GUI adapter talks to.

Adapter Flow:
    game start      → agent.on_game_start(side)
    opponent moved  → agent.on_opponent_move(move)
    our turn        → move = agent.choose_move(time_limit)  → send move

Strategies:
    - "random": RandomAgent, uniform random legal move
    - "mcts": MCTSAgent, heuristic Monte Carlo Tree Search
"""

from amazons_engine.agents.base import Agent
from amazons_engine.agents.mcts_agent import MCTSAgent
from amazons_engine.agents.random_agent import RandomAgent

AGENTS = {
    RandomAgent.name: RandomAgent,
    MCTSAgent.name: MCTSAgent,
}


def create_agent(name: str, **kwargs) -> Agent:
    """
    Create an agent by strategy name.

    Raises:
        ValueError: If no strategy has that name
    """
    try:
        agent_cls = AGENTS[name]
    except KeyError:
        raise ValueError(f"Unknown agent {name!r}, expected one of {sorted(AGENTS)}") from None
    return agent_cls(**kwargs)


__all__ = ['Agent', 'RandomAgent', 'MCTSAgent', 'AGENTS', 'create_agent']
