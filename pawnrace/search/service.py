from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from pawnrace.engine.board import Board
from pawnrace.engine.move import Move
from pawnrace.engine.position import BOARD_SIZE, Position
from pawnrace.engine.square import Square
from pawnrace.eval import evaluate


logger = logging.getLogger(__name__)

INF = 10_000_000
WIN_SCORE = 1_000_000  # wins are within +/- WIN_SCORE window


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: Optional[int]
    pv: List[Move]
    nodes: int
    depth: int
    time_ms: int
    iters: List[Dict[str, int]] = field(default_factory=list)


def _lost(board: Board) -> bool:
    # opponent pawn on our first rank reached its own last rank
    for f in range(BOARD_SIZE):
        if board.at(Position.of(f, 0)) is Square.OPPONENT:
            return True
    return next(board.pieces(), None) is None


def _order_key(move: Move) -> Tuple[int, int]:
    # captures first, then pawns furthest up the board
    return (0 if move.is_capture() else 1, -move.destination.rank.index)


class SearchService:
    """Negamax alpha-beta over flipped boards.

    Works purely in the mover's frame: every child is ``apply`` then ``flip``,
    so scores alternate sign. Returned moves are in the frame of the board
    passed in.
    """

    def search(
        self,
        board: Board,
        depth: int = 2,
        movetime_ms: Optional[int] = None,
    ) -> SearchResult:
        if depth < 1:
            raise ValueError("depth must be >= 1")
        nodes = 0

        start = time.perf_counter()
        time_up = False

        def out_of_time() -> bool:
            nonlocal time_up
            if movetime_ms is None or time_up:
                return time_up
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            if elapsed_ms >= movetime_ms:
                time_up = True
            return time_up

        def negamax(b: Board, d: int, alpha: int, beta: int, ply: int) -> Tuple[int, List[Move]]:
            nonlocal nodes
            nodes += 1
            if _lost(b):
                return -WIN_SCORE + ply, []
            moves = sorted(b.moves(), key=_order_key)
            if not moves:
                return 0, []  # no move available: draw
            if d == 0 or out_of_time():
                return evaluate(b), []

            best = -INF
            best_pv: List[Move] = []
            for m in moves:
                score, child_pv = negamax(b.apply(m).flip(), d - 1, -beta, -alpha, ply + 1)
                score = -score
                if score > best:
                    best = score
                    best_pv = [m] + [c.flip() for c in child_pv]
                if best > alpha:
                    alpha = best
                if alpha >= beta:
                    break
            return best, best_pv

        best_move: Optional[Move] = None
        best_score: Optional[int] = None
        best_pv: List[Move] = []
        iters: List[Dict[str, int]] = []
        reached = 0
        # iterative deepening; an interrupted iteration is discarded
        for d in range(1, depth + 1):
            score, pv = negamax(board, d, -INF, INF, 0)
            if time_up and best_move is not None:
                break
            reached = d
            best_score = score
            best_pv = pv
            best_move = pv[0] if pv else None
            iters.append({"depth": d, "score": score, "nodes": nodes})
            if time_up or abs(score) >= WIN_SCORE - 64:
                break

        time_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "search done",
            extra={"depth": reached, "nodes": nodes, "score": best_score, "time_ms": time_ms},
        )
        return SearchResult(
            best_move=best_move,
            score=best_score,
            pv=best_pv,
            nodes=nodes,
            depth=reached,
            time_ms=time_ms,
            iters=iters,
        )
