from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .bits import MASK128, get_field, reverse_bits, set_field
from .move import Move
from .movegen import MoveEnumerator
from .position import BOARD_SIZE, Position
from .square import Square


# Mover pawns (01) on rank 2, opponent pawns (10) on rank 7
INITIAL_RAW = 0x0000AAAA000000000000000055550000


def _shift(pos: Position) -> int:
    return 2 * (BOARD_SIZE * pos.rank.index + pos.file.index)


@dataclass(frozen=True)
class Board:
    """Pawn Race board packed into a single 128-bit integer.

    Notes:
    - Each square is 2 bits at ``2 * (8 * rank + file)``: ``01`` mover pawn,
      ``10`` opponent pawn, ``00``/``11`` empty.
    - The board is always expressed from the point of view of the side to
      move ("the mover"), whose pawns advance towards rank 8. Reversing all
      128 bits rotates the board by 180 degrees and swaps ``01``/``10``, so
      :meth:`flip` hands the move to the other side without colour-specific
      move generation.
    - ``en_passant`` is the square of a pawn that double-stepped on the
      previous ply (not the square it skipped).
    - Boards are values; :meth:`flip` and :meth:`apply` return new boards.
    """

    raw: int
    en_passant: Optional[Position] = None

    @classmethod
    def initial(cls) -> "Board":
        return cls(INITIAL_RAW)

    @classmethod
    def empty(cls) -> "Board":
        return cls(0)

    def at(self, pos: Position) -> Square:
        return Square.decode(get_field(self.raw, _shift(pos)))

    def with_square(self, pos: Position, square: Square) -> "Board":
        """Return a copy with ``pos`` set to ``square``; other squares untouched."""
        return Board(set_field(self.raw, _shift(pos), square.encode()), self.en_passant)

    def with_en_passant(self, pos: Optional[Position]) -> "Board":
        return Board(self.raw, pos)

    def flip(self) -> "Board":
        ep = self.en_passant.flip() if self.en_passant is not None else None
        return Board(reverse_bits(self.raw & MASK128), ep)

    def apply(self, move: Move) -> "Board":
        """Return the board after the mover plays ``move``.

        Precondition: ``move`` was produced by this board's :meth:`moves`.
        Anything else gives an unspecified board; use
        :meth:`pawnrace.engine.game.Game.apply_move` for checked application.

        The result is still expressed for the same mover; call :meth:`flip`
        to hand the turn over.
        """
        raw = self.raw
        raw = set_field(raw, _shift(move.source), Square.EMPTY.encode())
        raw = set_field(raw, _shift(move.destination), Square.MOVER.encode())
        if move.en_passant and self.en_passant is not None:
            # captured pawn sits on the registered square, not the destination
            raw = set_field(raw, _shift(self.en_passant), Square.EMPTY.encode())
        ep = move.destination if move.is_double_step() else None
        return Board(raw, ep)

    def pieces(self) -> Iterator["Piece"]:
        """Yield every mover pawn, scanning A1, B1, .., H8."""
        for pos in Position.all():
            if self.at(pos) is Square.MOVER:
                yield Piece(pos, self)

    def moves(self) -> Iterator[Move]:
        """Yield all pseudo-moves, grouped by piece in scan order."""
        for piece in self.pieces():
            yield from piece.moves()

    def count(self, square: Square) -> int:
        return sum(1 for pos in Position.all() if self.at(pos) is square)

    def positions(self, square: Square) -> Iterator[Position]:
        return (pos for pos in Position.all() if self.at(pos) is square)

    def __eq__(self, other: object) -> bool:
        # 00 and 11 both decode as empty, so compare decoded squares
        if not isinstance(other, Board):
            return NotImplemented
        if self.en_passant != other.en_passant:
            return False
        return all(self.at(pos) is other.at(pos) for pos in Position.all())

    def __hash__(self) -> int:
        return hash((tuple(self.at(pos).value for pos in Position.all()), self.en_passant))


@dataclass(frozen=True)
class Piece:
    """A mover pawn together with the board it was found on."""

    position: Position
    board: Board

    def moves(self) -> MoveEnumerator:
        return MoveEnumerator(self)
