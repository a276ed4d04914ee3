from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from pawnrace.engine.colour import Colour
from pawnrace.engine.layout import START_LAYOUT
from pawnrace.protocol.bridge import BridgeEngine, run_bridge
from pawnrace.protocol.error import BridgeError, error_line, exception_line


def capture_writer(buf: List[str]):
    def _w(line: str) -> None:
        buf.append(line)

    return _w


def script_reader(lines: Iterable[str]) -> Callable[[], Optional[str]]:
    it = iter(lines)

    def _r() -> Optional[str]:
        return next(it, None)

    return _r


def _send(eng: BridgeEngine, *lines: str) -> List[str]:
    out: List[str] = []
    for line in lines:
        eng.handle(line, capture_writer(out))
    return out


def test_isready() -> None:
    assert _send(BridgeEngine(), "isready") == ["readyok"]


def test_colour_then_go_plays_a_move() -> None:
    eng = BridgeEngine()
    out = _send(eng, "colour W", "go")
    assert len(out) == 1 and out[0].startswith("move ")
    assert eng.game.side_to_move is Colour.BLACK


def test_bare_colour_letter_is_accepted() -> None:
    eng = BridgeEngine()
    assert _send(eng, "B") == []
    assert eng.colour is Colour.BLACK


def test_bad_colour() -> None:
    out = _send(BridgeEngine(), "colour X")
    assert out[0].startswith("error invalid_colour")


def test_move_errors() -> None:
    eng = BridgeEngine()
    out = _send(eng, "move e2e5", "move zz", "move", "fly")
    assert out[0].startswith("error illegal_move")
    assert out[1].startswith("error invalid_move")
    assert out[2].startswith("error invalid_move")
    assert out[3].startswith("error unknown_command")
    assert _send(eng, "board") == [f"board {START_LAYOUT}"]


def test_position_with_moves_and_board() -> None:
    eng = BridgeEngine()
    assert _send(eng, "board") == [f"board {START_LAYOUT}"]
    _send(eng, "position startpos moves e2e4 d7d5")
    assert _send(eng, "board") == ["board 8/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/8 w d5"]
    moves = _send(eng, "moves")[0].split()
    assert moves[0] == "moves"
    assert "e4d5" in moves


def test_bad_position_keeps_previous_game() -> None:
    eng = BridgeEngine()
    _send(eng, "position startpos moves e2e4")
    out = _send(eng, "position 8/8 w -", "position startpos moves e2e4 e2e4")
    assert out[0].startswith("error invalid_layout")
    assert out[1].startswith("error illegal_move")
    assert _send(eng, "board") == ["board 8/pppppppp/8/8/4P3/8/PPPP1PPP/8 b e4"]


def test_go_out_of_turn() -> None:
    eng = BridgeEngine()
    out = _send(eng, "colour B", "go")
    assert out[0].startswith("error not_our_turn")


def test_winning_move_reports_result_and_ends_game() -> None:
    eng = BridgeEngine()
    out = _send(eng, "position 8/4P3/8/8/8/8/p7/8 w -", "move e7e8", "go", "move a2a1")
    assert out[0] == "result W"
    assert out[1].startswith("error game_over")
    assert out[2].startswith("error game_over")


def test_go_reports_result_after_engine_win() -> None:
    eng = BridgeEngine()
    out = _send(eng, "position 8/4P3/8/8/8/8/p7/8 w -", "go")
    assert out == ["move e7e8", "result W"]


def test_display_writes_grid() -> None:
    out = _send(BridgeEngine(), "display")
    assert len(out) == 11
    assert out[-1] == "     A B C D E F G H"


def test_setoption_switches_agent() -> None:
    eng = BridgeEngine()
    out = _send(eng, "setoption name agent value first", "go")
    assert out == ["move a2a3"]
    out = _send(eng, "setoption name agent value nobody", "go")
    assert out[0].startswith("error unknown_agent")


def test_setoption_ignores_unknown_option() -> None:
    eng = BridgeEngine()
    assert _send(eng, "setoption name hash value 64") == []
    assert eng.config.agent == "greedy"


def test_run_bridge_stops_on_quit() -> None:
    out: List[str] = []
    eng = run_bridge(script_reader(["isready", "", "quit", "isready"]), capture_writer(out))
    assert out == ["readyok"]
    assert isinstance(eng, BridgeEngine)


def test_run_bridge_stops_at_end_of_input() -> None:
    out: List[str] = []
    run_bridge(script_reader(["W", "go"]), capture_writer(out), colour=None)
    assert len(out) == 1 and out[0].startswith("move ")


def test_error_lines_are_single_line() -> None:
    assert error_line(code="invalid_move", message="bad\nmove  text") == "error invalid_move bad move text"
    assert error_line(code="game_over", message="") == "error game_over"
    assert exception_line(BridgeError("not_our_turn", "black to move")) == "error not_our_turn black to move"


def test_unexpected_exception_is_internal_error() -> None:
    assert exception_line(RuntimeError("boom")) == "error internal_error internal error"
