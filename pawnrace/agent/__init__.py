from __future__ import annotations

from typing import Dict, List, Optional, Type

from pawnrace.config import EngineConfig
from pawnrace.engine.errors import UnknownAgent

from .policies import Agent, FirstMoveAgent, GreedyAgent, RandomAgent, SearchAgent


AGENTS: Dict[str, Type[Agent]] = {
    FirstMoveAgent.name: FirstMoveAgent,
    RandomAgent.name: RandomAgent,
    GreedyAgent.name: GreedyAgent,
    SearchAgent.name: SearchAgent,
}


def available_agents() -> List[str]:
    return list(AGENTS.keys())


def create_agent(name: str, config: Optional[EngineConfig] = None) -> Agent:
    """Create an agent by name, configured from ``config``.

    Raises:
        UnknownAgent: If ``name`` is not registered.
    """
    cfg = config or EngineConfig()
    key = name.strip().lower()
    if key not in AGENTS:
        raise UnknownAgent(f"unknown agent {name!r}; available: {available_agents()}")
    if key == RandomAgent.name:
        return RandomAgent(seed=cfg.seed)
    if key == SearchAgent.name:
        return SearchAgent(depth=cfg.search_depth)
    return AGENTS[key]()


__all__ = [
    "AGENTS",
    "Agent",
    "FirstMoveAgent",
    "GreedyAgent",
    "RandomAgent",
    "SearchAgent",
    "available_agents",
    "create_agent",
]
