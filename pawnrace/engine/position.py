from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .errors import InvalidCoordinate


BOARD_SIZE = 8
FILE_LETTERS = "abcdefgh"


@dataclass(frozen=True, order=True)
class File:
    """Board file as a 0-based index (0 = A .. 7 = H).

    Construction outside ``[0, 7]`` raises :class:`InvalidCoordinate`; stepping
    off the board returns ``None`` instead of wrapping around.
    """

    index: int

    def __post_init__(self) -> None:
        if not isinstance(self.index, int) or not 0 <= self.index < BOARD_SIZE:
            raise InvalidCoordinate(f"file index out of range: {self.index!r}")

    @classmethod
    def from_number(cls, n: int) -> "File":
        """Build from a 1-based file number (1 = A)."""
        if not isinstance(n, int) or not 1 <= n <= BOARD_SIZE:
            raise InvalidCoordinate(f"file number must be in 1..8: {n!r}")
        return cls(n - 1)

    @classmethod
    def parse(cls, ch: str) -> "File":
        if not isinstance(ch, str) or len(ch) != 1 or ch.lower() not in FILE_LETTERS:
            raise InvalidCoordinate(f"invalid file: {ch!r}")
        return cls(FILE_LETTERS.index(ch.lower()))

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def letter(self) -> str:
        return FILE_LETTERS[self.index].upper()

    def is_start(self) -> bool:
        return self.index == 0

    def is_end(self) -> bool:
        return self.index == BOARD_SIZE - 1

    def incr(self) -> Optional["File"]:
        return None if self.is_end() else File(self.index + 1)

    def decr(self) -> Optional["File"]:
        return None if self.is_start() else File(self.index - 1)

    def flip(self) -> "File":
        return File(BOARD_SIZE - 1 - self.index)

    def __str__(self) -> str:
        return self.letter


@dataclass(frozen=True, order=True)
class Rank:
    """Board rank as a 0-based index (0 = rank 1 .. 7 = rank 8)."""

    index: int

    def __post_init__(self) -> None:
        if not isinstance(self.index, int) or not 0 <= self.index < BOARD_SIZE:
            raise InvalidCoordinate(f"rank index out of range: {self.index!r}")

    @classmethod
    def from_number(cls, n: int) -> "Rank":
        """Build from a 1-based rank number."""
        if not isinstance(n, int) or not 1 <= n <= BOARD_SIZE:
            raise InvalidCoordinate(f"rank number must be in 1..8: {n!r}")
        return cls(n - 1)

    @classmethod
    def parse(cls, ch: str) -> "Rank":
        if not isinstance(ch, str) or len(ch) != 1 or ch < "1" or ch > "8":
            raise InvalidCoordinate(f"invalid rank: {ch!r}")
        return cls(int(ch) - 1)

    @property
    def number(self) -> int:
        return self.index + 1

    def is_start(self) -> bool:
        return self.index == 0

    def is_end(self) -> bool:
        return self.index == BOARD_SIZE - 1

    def incr(self) -> Optional["Rank"]:
        return None if self.is_end() else Rank(self.index + 1)

    def decr(self) -> Optional["Rank"]:
        return None if self.is_start() else Rank(self.index - 1)

    def flip(self) -> "Rank":
        return Rank(BOARD_SIZE - 1 - self.index)

    def __str__(self) -> str:
        return str(self.number)


@dataclass(frozen=True)
class Position:
    """A square on the board.

    Directions are relative to the side the board is expressed for: ``front``
    is towards rank 8, ``left`` is towards file A.
    """

    file: File
    rank: Rank

    @classmethod
    def of(cls, file_index: int, rank_index: int) -> "Position":
        """Build from 0-based file and rank indices."""
        return cls(File(file_index), Rank(rank_index))

    @classmethod
    def from_algebraic(cls, letter: str, number: int) -> "Position":
        """Build from a file letter and a 1-based rank, e.g. ``("e", 4)``."""
        return cls(File.parse(letter), Rank.from_number(number))

    @classmethod
    def from_index(cls, idx: int) -> "Position":
        if not isinstance(idx, int) or not 0 <= idx < BOARD_SIZE * BOARD_SIZE:
            raise InvalidCoordinate(f"invalid square index: {idx!r}")
        return cls.of(idx % BOARD_SIZE, idx // BOARD_SIZE)

    @classmethod
    def parse(cls, s: str) -> "Position":
        """Parse a square name such as ``"e4"`` (file letter case-insensitive).

        Raises:
            InvalidCoordinate: If ``s`` is not a valid square name.
        """
        if not isinstance(s, str) or len(s) != 2:
            raise InvalidCoordinate(f"invalid square: {s!r}")
        return cls(File.parse(s[0]), Rank.parse(s[1]))

    @classmethod
    def all(cls) -> Iterator["Position"]:
        """All 64 squares in scan order: A1, B1, .., H1, A2, .., H8."""
        pos: Optional[Position] = cls.of(0, 0)
        while pos is not None:
            yield pos
            pos = pos.incr()

    @property
    def index(self) -> int:
        return self.rank.index * BOARD_SIZE + self.file.index

    def flip(self) -> "Position":
        """Rotate by 180 degrees, matching a bit-reversed board."""
        return Position(self.file.flip(), self.rank.flip())

    def incr(self) -> Optional["Position"]:
        """Next square in scan order, or ``None`` after H8."""
        nf = self.file.incr()
        if nf is not None:
            return Position(nf, self.rank)
        nr = self.rank.incr()
        if nr is None:
            return None
        return Position(File(0), nr)

    def decr(self) -> Optional["Position"]:
        """Previous square in scan order, or ``None`` before A1."""
        pf = self.file.decr()
        if pf is not None:
            return Position(pf, self.rank)
        pr = self.rank.decr()
        if pr is None:
            return None
        return Position(File(BOARD_SIZE - 1), pr)

    def left(self) -> Optional["Position"]:
        f = self.file.decr()
        return None if f is None else Position(f, self.rank)

    def right(self) -> Optional["Position"]:
        f = self.file.incr()
        return None if f is None else Position(f, self.rank)

    def front(self) -> Optional["Position"]:
        r = self.rank.incr()
        return None if r is None else Position(self.file, r)

    def back(self) -> Optional["Position"]:
        r = self.rank.decr()
        return None if r is None else Position(self.file, r)

    def diag_left(self) -> Optional["Position"]:
        f = self.front()
        return None if f is None else f.left()

    def diag_right(self) -> Optional["Position"]:
        f = self.front()
        return None if f is None else f.right()

    def is_start(self) -> bool:
        return self.file.is_start() and self.rank.is_start()

    def is_end(self) -> bool:
        return self.file.is_end() and self.rank.is_end()

    def __str__(self) -> str:
        return FILE_LETTERS[self.file.index] + str(self.rank.number)
