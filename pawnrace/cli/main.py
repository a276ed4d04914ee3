from __future__ import annotations

import argparse
import logging
import time
from typing import List, Optional

from ..agent import available_agents, create_agent
from ..config import LOG_LEVELS, EngineConfig
from ..engine.colour import Colour
from ..engine.errors import InvalidLayout
from ..engine.game import Game
from ..engine.layout import START_LAYOUT, parse_layout
from ..engine.perft import divide, perft
from ..engine.render import RenderOptions, render
from ..protocol.bridge import run_stdio


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pawnrace", description="Pawn Race engine")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO")
    parser.add_argument("--agent", choices=available_agents(), default="greedy")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random agent")
    parser.add_argument("--depth", type=int, default=2, help="Search agent depth (default: 2)")
    parser.add_argument("--swap-glyphs", action="store_true", help="Swap pawn glyphs (dark terminals)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_bridge = sub.add_parser("bridge", help="Serve the line protocol on stdin/stdout")
    p_bridge.add_argument("--colour", type=Colour.parse, default=None, help="W or B")

    p_perft = sub.add_parser("perft", help="Count leaf nodes of the move tree")
    p_perft.add_argument("--layout", type=str, default=START_LAYOUT, help="Layout (default: start)")
    p_perft.add_argument("--depth", dest="perft_depth", type=int, default=3)
    p_perft.add_argument("--divide", action="store_true", help="Print per-move counts")

    p_show = sub.add_parser("show", help="Render a layout")
    p_show.add_argument("--layout", type=str, default=START_LAYOUT)

    p_self = sub.add_parser("selfplay", help="Let two agents play each other")
    p_self.add_argument("--white", choices=available_agents(), default=None)
    p_self.add_argument("--black", choices=available_agents(), default=None)
    p_self.add_argument("--max-plies", type=int, default=200)
    return parser


def _config_from_args(args: argparse.Namespace) -> EngineConfig:
    cfg = EngineConfig(
        agent=args.agent,
        seed=args.seed,
        swap_glyphs=args.swap_glyphs,
        log_level=args.log_level,
    )
    cfg.set_option("depth", str(args.depth))
    return cfg


def selfplay(cfg: EngineConfig, white: str, black: str, max_plies: int = 200) -> Game:
    game = Game.new()
    agents = {
        Colour.WHITE: create_agent(white, cfg),
        Colour.BLACK: create_agent(black, cfg),
    }
    for _ in range(max_plies):
        if game.is_finished():
            break
        move = agents[game.side_to_move].choose(game)
        if move is None:
            break
        game.apply_move(move)
    logger.info(
        "selfplay finished",
        extra={"result": game.result(), "plies": len(game.move_stack)},
    )
    return game


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level)
    cfg = _config_from_args(args)
    options = RenderOptions(swap_glyphs=cfg.swap_glyphs)

    if args.command == "bridge":
        run_stdio(cfg, args.colour)
        return 0

    if args.command == "perft":
        try:
            board, _ = parse_layout(args.layout)
        except InvalidLayout as e:
            parser.error(str(e))
        start = time.perf_counter()
        if args.divide:
            counts = divide(board, args.perft_depth)
            for mv, n in counts.items():
                print(f"{mv}: {n}")
            nodes = sum(counts.values())
        else:
            nodes = perft(board, args.perft_depth)
        dt = time.perf_counter() - start
        print(f"nodes={nodes} depth={args.perft_depth} time_ms={int(dt*1000)}")
        return 0

    if args.command == "show":
        try:
            board, mover = parse_layout(args.layout)
        except InvalidLayout as e:
            parser.error(str(e))
        print(render(board, mover, options), end="")
        return 0

    if args.command == "selfplay":
        game = selfplay(cfg, args.white or cfg.agent, args.black or cfg.agent, args.max_plies)
        print(game.render(options), end="")
        print(" ".join(game.move_history()))
        print(f"result {game.result() or 'unfinished'}")
        return 0

    parser.error(f"unknown command {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
