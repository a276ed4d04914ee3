from __future__ import annotations

from pawnrace.engine.board import Board
from pawnrace.engine.game import Game
from pawnrace.engine.position import Position
from pawnrace.eval import _files_by_rank, evaluate, is_passed


def test_start_position_is_balanced() -> None:
    assert evaluate(Board.initial()) == 0


def test_passed_pawn_detected_and_bonused() -> None:
    # White pawn on e6, black pawn far away on a7 -> passed
    passed = Game.from_layout("8/p7/4P3/8/8/8/8/8 w -")
    # Black pawn on f7 (ahead on adjacent file) -> not passed
    blocked = Game.from_layout("8/5p2/4P3/8/8/8/8/8 w -")
    assert evaluate(passed.board) > evaluate(blocked.board)


def test_passed_pawn_bonus_grows_with_advancement() -> None:
    e4 = Game.from_layout("8/8/8/8/4P3/8/8/8 w -")
    e6 = Game.from_layout("8/8/4P3/8/8/8/8/8 w -")
    assert evaluate(e6.board) > evaluate(e4.board)


def test_score_is_from_the_movers_side() -> None:
    # same pieces, opposite side to move: scores mirror each other
    white = Game.from_layout("8/p7/4P3/8/8/8/8/8 w -")
    black = Game.from_layout("8/p7/4P3/8/8/8/8/8 b -")
    assert evaluate(white.board) > 0
    assert evaluate(black.board) < 0


def test_is_passed_ignores_pawns_behind() -> None:
    cols = _files_by_rank([Position.parse("d3"), Position.parse("h7")])
    assert is_passed(Position.parse("e4"), cols)
    assert not is_passed(Position.parse("g4"), cols)
    assert not is_passed(Position.parse("h2"), cols)
