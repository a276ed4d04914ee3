from __future__ import annotations

import logging
import sys
from typing import Callable, List, Optional

from ..agent import Agent, create_agent
from ..config import EngineConfig
from ..engine.colour import Colour
from ..engine.game import Game
from ..engine.move import parse_move
from ..engine.render import RenderOptions
from .error import BridgeError, exception_line


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]
Reader = Callable[[], Optional[str]]


class BridgeEngine:
    """Line protocol adapter around the core engine.

    Notes:
    - Core remains pure; I/O is isolated here and limited to the injected
      reader and writer callables.
    - Moves on the wire are absolute squares (``e2e4``); boards travel as
      layout text (``board <layout>``) or as rendered grids (``display``).
    """

    def __init__(self, config: Optional[EngineConfig] = None, colour: Optional[Colour] = None) -> None:
        self.config = config or EngineConfig()
        self.game: Game = Game.new()
        self.colour: Optional[Colour] = colour
        self._agent: Optional[Agent] = None

    # ---- Command handlers ----
    def cmd_colour(self, args: List[str]) -> None:
        if len(args) != 1:
            raise BridgeError("invalid_colour", "expected one colour: W or B")
        self.colour = Colour.parse(args[0])
        self.game = Game.new()
        logger.info("new game", extra={"colour": self.colour.letter})

    def cmd_newgame(self) -> None:
        self.game = Game.new()

    def cmd_isready(self, write: Writer) -> None:
        write("readyok")

    def cmd_position(self, args: List[str]) -> None:
        # position <placement> <side> <ep> [moves m1 m2 ...]
        if "moves" in args:
            idx = args.index("moves")
            layout_tokens, move_tokens = args[:idx], args[idx + 1 :]
        else:
            layout_tokens, move_tokens = args, []
        if layout_tokens == ["startpos"]:
            game = Game.new()
        else:
            game = Game.from_layout(" ".join(layout_tokens))
        # all moves must apply or the previous position is kept
        for tok in move_tokens:
            game.apply_move(parse_move(tok))
        self.game = game

    def cmd_move(self, args: List[str], write: Writer) -> None:
        if len(args) != 1:
            raise BridgeError("invalid_move", "expected one move")
        self._ensure_running()
        self.game.apply_move(parse_move(args[0]))
        self._report_result(write)

    def cmd_go(self, write: Writer) -> None:
        self._ensure_running()
        if self.colour is not None and self.colour is not self.game.side_to_move:
            raise BridgeError("not_our_turn", f"{self.game.side_to_move} to move")
        move = self.agent.choose(self.game)
        if move is None:
            raise BridgeError("game_over", "no move available")
        played = self.game.apply_move(move)
        write(f"move {played.to_text()}")
        self._report_result(write)

    def cmd_moves(self, write: Writer) -> None:
        moves = " ".join(m.to_text() for m in self.game.legal_moves())
        write(f"moves {moves}".rstrip())

    def cmd_board(self, write: Writer) -> None:
        write(f"board {self.game.to_layout()}")

    def cmd_display(self, write: Writer) -> None:
        options = RenderOptions(swap_glyphs=self.config.swap_glyphs)
        for line in self.game.render(options).splitlines():
            write(line)

    def cmd_setoption(self, args: List[str]) -> None:
        # setoption name <name> [value <value>]
        i = 0
        if args and args[i] == "name":
            i += 1
        name_tokens: List[str] = []
        while i < len(args) and args[i] != "value":
            name_tokens.append(args[i])
            i += 1
        value_tokens: List[str] = []
        if i < len(args) and args[i] == "value":
            value_tokens = args[i + 1 :]
        name = " ".join(name_tokens)
        if self.config.set_option(name, " ".join(value_tokens)):
            # rebuild lazily with the new settings
            self._agent = None
        else:
            logger.info("option ignored", extra={"option": name})

    # ---- Utilities ----
    @property
    def agent(self) -> Agent:
        if self._agent is None:
            self._agent = create_agent(self.config.agent, self.config)
        return self._agent

    def _ensure_running(self) -> None:
        if self.game.is_finished():
            raise BridgeError("game_over", f"result {self.game.result()}")

    def _report_result(self, write: Writer) -> None:
        res = self.game.result()
        if res is not None:
            logger.info("game over", extra={"result": res})
            write(f"result {res}")

    def handle(self, line: str, write: Writer) -> bool:
        """Dispatch one input line; return False when the session should end."""
        parts = line.split()
        if not parts:
            return True
        cmd, args = parts[0], parts[1:]
        try:
            if cmd == "quit":
                return False
            if cmd in ("W", "B") and not args:
                self.cmd_colour([cmd])
            elif cmd == "colour":
                self.cmd_colour(args)
            elif cmd == "newgame":
                self.cmd_newgame()
            elif cmd == "isready":
                self.cmd_isready(write)
            elif cmd == "position":
                self.cmd_position(args)
            elif cmd == "move":
                self.cmd_move(args, write)
            elif cmd == "go":
                self.cmd_go(write)
            elif cmd == "moves":
                self.cmd_moves(write)
            elif cmd == "board":
                self.cmd_board(write)
            elif cmd == "display":
                self.cmd_display(write)
            elif cmd == "setoption":
                self.cmd_setoption(args)
            else:
                raise BridgeError("unknown_command", f"unknown command: {cmd}")
        except Exception as exc:
            write(exception_line(exc))
        return True


def run_bridge(
    read: Reader,
    write: Writer,
    config: Optional[EngineConfig] = None,
    colour: Optional[Colour] = None,
) -> BridgeEngine:
    """Serve commands from ``read`` until it returns None or ``quit`` arrives."""
    eng = BridgeEngine(config, colour)
    while True:
        raw = read()
        if raw is None:
            break
        line = raw.strip()
        if not line:
            continue
        logger.debug("command", extra={"line": line})
        if not eng.handle(line, write):
            break
    return eng


def _stdin_reader() -> Optional[str]:
    raw = sys.stdin.readline()
    return raw if raw else None


def _default_writer(line: str) -> None:
    # Ensure newline termination and immediate flush
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_stdio(config: Optional[EngineConfig] = None, colour: Optional[Colour] = None) -> None:
    run_bridge(_stdin_reader, _default_writer, config, colour)
