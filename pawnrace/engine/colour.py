from __future__ import annotations

from enum import Enum

from .errors import InvalidColour


class Colour(Enum):
    WHITE = "W"
    BLACK = "B"

    @classmethod
    def parse(cls, text: str) -> "Colour":
        """Parse the single-letter colour code used by the driver.

        Raises:
            InvalidColour: For anything other than ``"W"`` or ``"B"``.
        """
        if text == "W":
            return cls.WHITE
        if text == "B":
            return cls.BLACK
        raise InvalidColour(f"invalid colour: {text!r}")

    @property
    def letter(self) -> str:
        return self.value

    @property
    def opponent(self) -> "Colour":
        return Colour.BLACK if self is Colour.WHITE else Colour.WHITE

    def __str__(self) -> str:
        return "white" if self is Colour.WHITE else "black"
