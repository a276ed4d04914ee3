from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board
from .colour import Colour
from .errors import IllegalMove
from .layout import format_layout, parse_layout
from .move import Move
from .position import BOARD_SIZE
from .render import RenderOptions, render
from .square import Square


logger = logging.getLogger(__name__)

# Rank index a pawn has to reach, in its own frame
LAST_RANK = BOARD_SIZE - 1


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: track whose turn it is, expose legal moves in absolute
    (white-oriented) coordinates, apply moves, keep history.

    ``board`` is always expressed for ``side_to_move``; when black is to move
    it is the 180-degree rotation of the white view.
    """

    board: Board
    side_to_move: Colour = Colour.WHITE
    move_stack: List[Move] = field(default_factory=list)
    _boards: List[Board] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.initial())

    @classmethod
    def from_layout(cls, text: str) -> "Game":
        board, mover = parse_layout(text)
        return cls(board=board, side_to_move=mover)

    def to_layout(self) -> str:
        return format_layout(self.board, self.side_to_move)

    def board_from(self, colour: Colour) -> Board:
        """The current board expressed for ``colour``."""
        return self.board if colour is self.side_to_move else self.board.flip()

    def legal_moves(self) -> List[Move]:
        moves = list(self.board.moves())
        if self.side_to_move is Colour.BLACK:
            return [m.flip() for m in moves]
        return moves

    def apply_move(self, move: Move) -> Move:
        """Play ``move`` (absolute coordinates) for the side to move.

        The en-passant flag of ``move`` is ignored; it is taken from the
        matching generated move, which is returned.

        Raises:
            IllegalMove: If the game is over or the move is not generated by
                the current board.
        """
        if self.winner() is not None:
            raise IllegalMove("game is over")
        framed = move.flip() if self.side_to_move is Colour.BLACK else move
        match = next(
            (
                m
                for m in self.board.moves()
                if m.source == framed.source and m.destination == framed.destination
            ),
            None,
        )
        if match is None:
            raise IllegalMove(f"illegal move: {move.to_text()}")
        played = match.flip() if self.side_to_move is Colour.BLACK else match
        self._boards.append(self.board)
        self.board = self.board.apply(match).flip()
        self.move_stack.append(played)
        logger.debug(
            "move applied",
            extra={"side": self.side_to_move.letter, "move": played.to_text()},
        )
        self.side_to_move = self.side_to_move.opponent
        return played

    def undo_move(self) -> None:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        self.move_stack.pop()
        self.board = self._boards.pop()
        self.side_to_move = self.side_to_move.opponent

    # --- State flags ---
    def winner(self) -> Optional[Colour]:
        """Side that reached its last rank or captured every enemy pawn."""
        for colour in (self.side_to_move, self.side_to_move.opponent):
            own = self.board_from(colour)
            if any(p.position.rank.index == LAST_RANK for p in own.pieces()):
                return colour
        if self.board.count(Square.MOVER) == 0:
            return self.side_to_move.opponent
        if self.board.count(Square.OPPONENT) == 0:
            return self.side_to_move
        return None

    def is_stalemate(self) -> bool:
        return self.winner() is None and next(self.board.moves(), None) is None

    def is_finished(self) -> bool:
        return self.winner() is not None or self.is_stalemate()

    def result(self) -> Optional[str]:
        """``"W"``, ``"B"``, ``"draw"`` or ``None`` while the game is running."""
        w = self.winner()
        if w is not None:
            return w.letter
        if self.is_stalemate():
            return "draw"
        return None

    def move_history(self) -> List[str]:
        return [m.to_text() for m in self.move_stack]

    def render(self, options: RenderOptions = RenderOptions()) -> str:
        return render(self.board, self.side_to_move, options)
