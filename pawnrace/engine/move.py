from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidCoordinate, InvalidMove
from .position import Position


@dataclass(frozen=True)
class Move:
    """A pawn move, relative to the board that generated it.

    Attributes:
        source (Position): Square the pawn leaves.
        destination (Position): Square the pawn lands on.
        en_passant (bool): True for an en-passant capture; the captured pawn
            sits beside ``source``, not on ``destination``.
    """

    source: Position
    destination: Position
    en_passant: bool = False

    @property
    def rank_delta(self) -> int:
        return self.destination.rank.index - self.source.rank.index

    def is_double_step(self) -> bool:
        return self.rank_delta == 2

    def is_capture(self) -> bool:
        return self.source.file != self.destination.file

    def flip(self) -> "Move":
        """Same move expressed on the flipped board."""
        return Move(self.source.flip(), self.destination.flip(), self.en_passant)

    def to_text(self) -> str:
        """Serialize as source and destination squares, e.g. ``"e2e4"``."""
        return str(self.source) + str(self.destination)

    def __str__(self) -> str:
        return self.to_text()


def parse_move(text: str) -> Move:
    """Parse move text such as ``"e2e4"`` (``"e2-e4"`` is accepted too).

    The en-passant flag cannot be recovered from text; callers resolve it by
    matching against generated moves.

    Raises:
        InvalidMove: If the text has the wrong shape or names a bad square.
    """
    s = text.strip().replace("-", "")
    if len(s) != 4:
        raise InvalidMove(f"invalid move length: {text!r}")
    try:
        return Move(Position.parse(s[0:2]), Position.parse(s[2:4]))
    except InvalidCoordinate as e:
        raise InvalidMove(f"invalid move squares: {text!r}") from e
