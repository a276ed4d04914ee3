from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .board import Board
from .colour import Colour
from .position import BOARD_SIZE, FILE_LETTERS, Position
from .square import Square


WHITE_GLYPH = "\u2659"  # ♙
BLACK_GLYPH = "\u265f"  # ♟
BORDER = "    " + "-" * (2 * BOARD_SIZE + 1)


@dataclass(frozen=True)
class RenderOptions:
    """Rendering switches.

    ``swap_glyphs`` exchanges the outline and filled pawn glyphs, which reads
    better on dark terminals.
    """

    swap_glyphs: bool = False

    def glyph(self, colour: Colour) -> str:
        white, black = WHITE_GLYPH, BLACK_GLYPH
        if self.swap_glyphs:
            white, black = black, white
        return white if colour is Colour.WHITE else black


def render_lines(board: Board, mover: Colour = Colour.WHITE, options: RenderOptions = RenderOptions()) -> List[str]:
    """Render ``board`` (expressed for ``mover``) from white's side.

    Rank 8 is printed first; files run A..H left to right.
    """
    absolute = board if mover is Colour.WHITE else board.flip()
    lines = [BORDER]
    for rank_idx in range(BOARD_SIZE - 1, -1, -1):
        cells = []
        for file_idx in range(BOARD_SIZE):
            sq = absolute.at(Position.of(file_idx, rank_idx))
            if sq is Square.MOVER:
                cells.append(options.glyph(Colour.WHITE))
            elif sq is Square.OPPONENT:
                cells.append(options.glyph(Colour.BLACK))
            else:
                cells.append(" ")
        lines.append(f" {rank_idx + 1} | " + " ".join(cells) + " |")
    lines.append(BORDER)
    lines.append("     " + " ".join(FILE_LETTERS.upper()))
    return lines


def render(board: Board, mover: Colour = Colour.WHITE, options: RenderOptions = RenderOptions()) -> str:
    return "\n".join(render_lines(board, mover, options)) + "\n"
