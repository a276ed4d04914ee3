from __future__ import annotations


class PawnRaceError(ValueError):
    """Base class for engine errors.

    Derives from ``ValueError`` so callers that guard with ``except ValueError``
    keep working.
    """


class InvalidCoordinate(PawnRaceError):
    """A file or rank outside the board, or an unparsable square name."""


class InvalidColour(PawnRaceError):
    """Colour text other than ``"W"`` or ``"B"``."""


class InvalidMove(PawnRaceError):
    """Move text that cannot be parsed."""


class IllegalMove(PawnRaceError):
    """A well-formed move that the current board does not generate."""


class InvalidLayout(PawnRaceError):
    """Malformed board layout text."""


class UnknownAgent(PawnRaceError):
    """Agent name not present in the registry."""
