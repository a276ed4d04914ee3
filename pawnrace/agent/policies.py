from __future__ import annotations

import logging
import random
from typing import List, Optional

from pawnrace.engine.board import Board
from pawnrace.engine.colour import Colour
from pawnrace.engine.game import LAST_RANK, Game
from pawnrace.engine.move import Move
from pawnrace.search.service import SearchService


logger = logging.getLogger(__name__)


class Agent:
    """Base class for move-selection policies.

    Subclasses pick from the moves of a board expressed for the side to move;
    :meth:`choose` translates the pick back to absolute coordinates.
    """

    name = "base"
    description = "Abstract agent"

    def choose(self, game: Game) -> Optional[Move]:
        """Return the move to play for the side to move, or None if there is none."""
        if game.is_finished():
            return None
        move = self.choose_framed(game.board)
        if move is None:
            return None
        if game.side_to_move is Colour.BLACK:
            move = move.flip()
        logger.debug("agent move", extra={"agent": self.name, "move": move.to_text()})
        return move

    def choose_framed(self, board: Board) -> Optional[Move]:
        raise NotImplementedError


class FirstMoveAgent(Agent):
    name = "first"
    description = "Plays the first generated move"

    def choose_framed(self, board: Board) -> Optional[Move]:
        return next(board.moves(), None)


class RandomAgent(Agent):
    name = "random"
    description = "Plays a uniformly random move"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_framed(self, board: Board) -> Optional[Move]:
        moves = list(board.moves())
        if not moves:
            return None
        return self._rng.choice(moves)


class GreedyAgent(Agent):
    name = "greedy"
    description = "Wins if it can, otherwise captures, otherwise pushes the most advanced pawn"

    def choose_framed(self, board: Board) -> Optional[Move]:
        moves: List[Move] = list(board.moves())
        if not moves:
            return None
        for m in moves:
            if m.destination.rank.index == LAST_RANK:
                return m
        captures = [m for m in moves if m.is_capture()]
        if captures:
            return max(captures, key=lambda m: m.destination.rank.index)
        # max() keeps the first of equal keys, so ties follow generation order
        return max(moves, key=lambda m: m.source.rank.index)


class SearchAgent(Agent):
    name = "search"
    description = "Negamax alpha-beta search with a pawn-race evaluation"

    def __init__(self, depth: int = 2, movetime_ms: Optional[int] = None) -> None:
        self.depth = depth
        self.movetime_ms = movetime_ms
        self.service = SearchService()

    def choose_framed(self, board: Board) -> Optional[Move]:
        res = self.service.search(board, depth=self.depth, movetime_ms=self.movetime_ms)
        if res.best_move is not None:
            return res.best_move
        return next(board.moves(), None)
