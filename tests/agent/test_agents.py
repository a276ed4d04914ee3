from __future__ import annotations

import pytest

from pawnrace.agent import AGENTS, available_agents, create_agent
from pawnrace.agent.policies import FirstMoveAgent, GreedyAgent, RandomAgent, SearchAgent
from pawnrace.config import EngineConfig
from pawnrace.engine.errors import UnknownAgent
from pawnrace.engine.game import Game
from pawnrace.engine.move import parse_move


def test_first_agent_follows_generation_order() -> None:
    g = Game.new()
    agent = FirstMoveAgent()
    assert agent.choose(g) == parse_move("a2a3")
    g.apply_move(parse_move("e2e4"))
    # black's first generated move, reported in absolute squares
    assert agent.choose(g) == parse_move("h7h6")


def test_greedy_prefers_win_then_capture() -> None:
    agent = GreedyAgent()
    capture = Game.from_layout("8/8/8/3p4/4P3/8/8/8 w -")
    assert agent.choose(capture).to_text() == "e4d5"
    win = Game.from_layout("8/4P3/8/8/8/8/p7/8 w -")
    assert agent.choose(win).to_text() == "e7e8"


def test_greedy_pushes_most_advanced_pawn() -> None:
    g = Game.from_layout("8/7p/8/8/8/5P2/P7/8 w -")
    assert GreedyAgent().choose(g).to_text() == "f3f4"


def test_random_agent_is_seeded() -> None:
    g = Game.new()
    picks_a = [RandomAgent(seed=7).choose(g) for _ in range(3)]
    picks_b = [RandomAgent(seed=7).choose(g) for _ in range(3)]
    assert picks_a == picks_b
    assert all(m in g.legal_moves() for m in picks_a)


def test_search_agent_moves_and_wins() -> None:
    g = Game.new()
    move = SearchAgent(depth=1).choose(g)
    assert move in g.legal_moves()
    win = Game.from_layout("8/4P3/8/8/8/8/p7/8 w -")
    assert SearchAgent(depth=2).choose(win).to_text() == "e7e8"


def test_no_move_when_game_is_over() -> None:
    blocked = Game.from_layout("8/8/8/p7/P7/8/8/8 w -")
    for name in available_agents():
        assert create_agent(name).choose(blocked) is None


def test_registry_and_factory() -> None:
    assert set(available_agents()) == {"first", "random", "greedy", "search"}
    cfg = EngineConfig(seed=3, search_depth=4)
    search = create_agent("Search", cfg)
    assert isinstance(search, SearchAgent) and search.depth == 4
    assert isinstance(create_agent("random", cfg), RandomAgent)
    for name, cls in AGENTS.items():
        assert cls.name == name


def test_unknown_agent_raises() -> None:
    with pytest.raises(UnknownAgent):
        create_agent("stockfish")
