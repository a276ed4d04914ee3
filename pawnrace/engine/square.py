from __future__ import annotations

from enum import Enum


class Square(Enum):
    """Decoded content of one 2-bit board field.

    ``01`` is a mover pawn and ``10`` an opponent pawn, so reversing the bits of
    a field swaps the two. ``00`` and ``11`` both read as empty; writes always
    use ``00``.
    """

    EMPTY = 0b00
    MOVER = 0b01
    OPPONENT = 0b10

    @classmethod
    def decode(cls, bits: int) -> "Square":
        if bits == 0b01:
            return cls.MOVER
        if bits == 0b10:
            return cls.OPPONENT
        return cls.EMPTY

    def encode(self) -> int:
        return self.value

    def flip(self) -> "Square":
        if self is Square.MOVER:
            return Square.OPPONENT
        if self is Square.OPPONENT:
            return Square.MOVER
        return Square.EMPTY

    def is_empty(self) -> bool:
        return self is Square.EMPTY
