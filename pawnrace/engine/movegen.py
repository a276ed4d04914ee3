from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional

from .move import Move
from .position import Position
from .square import Square

if TYPE_CHECKING:  # pragma: no cover
    from .board import Piece


# Rank index the mover's pawns start on (rank 2)
START_RANK = 1


class MoveEnumerator:
    """Lazy, single-pass enumeration of one pawn's pseudo-moves.

    The enumerator walks six stages in a fixed order and evaluates each at
    most once:

    1. single step forward
    2. double step forward (starting rank only, never over an occupied square)
    3. capture diagonally left
    4. capture diagonally right
    5. en passant to the left
    6. en passant to the right

    All stages read the same board snapshot; nothing is mutated. A pawn on the
    last rank produces nothing because there is no promotion.
    """

    def __init__(self, piece: "Piece") -> None:
        self.piece = piece
        self._stage = 0
        self._double_enabled = piece.position.rank.index == START_RANK
        self._passant_enabled = piece.board.en_passant is not None
        self._stages: List[Callable[[], Optional[Move]]] = [
            self._forward,
            self._double_forward,
            self._capture_left,
            self._capture_right,
            self._passant_left,
            self._passant_right,
        ]

    def __iter__(self) -> "MoveEnumerator":
        return self

    def __next__(self) -> Move:
        while self._stage < len(self._stages):
            stage = self._stages[self._stage]
            self._stage += 1
            move = stage()
            if move is not None:
                return move
        raise StopIteration

    # ---- Stages ----
    def _forward(self) -> Optional[Move]:
        dest = self.piece.position.front()
        if dest is not None and self._is_empty(dest):
            return self._move(dest)
        # blocked or last rank: no jumping over
        self._double_enabled = False
        return None

    def _double_forward(self) -> Optional[Move]:
        if not self._double_enabled:
            return None
        front = self.piece.position.front()
        dest = front.front() if front is not None else None
        if dest is not None and self._is_empty(dest):
            return self._move(dest)
        return None

    def _capture_left(self) -> Optional[Move]:
        return self._capture(self.piece.position.diag_left())

    def _capture_right(self) -> Optional[Move]:
        return self._capture(self.piece.position.diag_right())

    def _passant_left(self) -> Optional[Move]:
        pos = self.piece.position
        return self._passant(pos.left(), pos.diag_left())

    def _passant_right(self) -> Optional[Move]:
        pos = self.piece.position
        return self._passant(pos.right(), pos.diag_right())

    # ---- Helpers ----
    def _capture(self, dest: Optional[Position]) -> Optional[Move]:
        if dest is not None and self.piece.board.at(dest) is Square.OPPONENT:
            return self._move(dest)
        return None

    def _passant(self, beside: Optional[Position], dest: Optional[Position]) -> Optional[Move]:
        if not self._passant_enabled or beside is None:
            return None
        if beside != self.piece.board.en_passant:
            return None
        if dest is not None and self._is_empty(dest):
            return self._move(dest, en_passant=True)
        return None

    def _is_empty(self, pos: Position) -> bool:
        return self.piece.board.at(pos).is_empty()

    def _move(self, dest: Position, en_passant: bool = False) -> Move:
        return Move(self.piece.position, dest, en_passant)
