from __future__ import annotations

from typing import List, Optional, Tuple

from .board import Board
from .colour import Colour
from .errors import InvalidCoordinate, InvalidLayout
from .position import BOARD_SIZE, Position
from .square import Square


START_LAYOUT = "8/pppppppp/8/8/8/8/PPPPPPPP/8 w -"

PAWN_CHARS = {Colour.WHITE: "P", Colour.BLACK: "p"}


def parse_layout(text: str) -> Tuple[Board, Colour]:
    """Parse layout text into a board expressed for the side to move.

    The format is FEN-like with three fields: piece placement (rank 8 first,
    ``P`` white pawn, ``p`` black pawn, digits for runs of empty squares), side
    to move (``w``/``b``) and the square of the pawn that just double-stepped
    (``-`` for none).

    Args:
        text (str): Layout such as ``"8/pppppppp/8/8/8/8/PPPPPPPP/8 w -"``.

    Returns:
        tuple[Board, Colour]: Board in the mover's frame, and the mover.

    Raises:
        InvalidLayout: If any field is malformed.
    """
    if not text or not isinstance(text, str):
        raise InvalidLayout("layout must be a non-empty string")
    parts = text.strip().split()
    if len(parts) != 3:
        raise InvalidLayout("layout must have 3 fields")
    placement, side, ep = parts

    if side not in ("w", "b"):
        raise InvalidLayout("side to move must be 'w' or 'b'")
    mover = Colour.WHITE if side == "w" else Colour.BLACK

    ranks = placement.split("/")
    if len(ranks) != BOARD_SIZE:
        raise InvalidLayout("layout board must have 8 ranks")
    board = Board.empty()
    for rank_idx, row in enumerate(ranks[::-1]):  # rank 1 first
        file_idx = 0
        for ch in row:
            if ch.isdigit():
                n = int(ch)
                if n < 1 or n > BOARD_SIZE:
                    raise InvalidLayout("invalid empty count in layout rank")
                file_idx += n
                continue
            if ch not in ("P", "p"):
                raise InvalidLayout(f"invalid piece in layout: {ch!r}")
            if file_idx >= BOARD_SIZE:
                raise InvalidLayout("too many squares in layout rank")
            square = Square.MOVER if ch == "P" else Square.OPPONENT
            board = board.with_square(Position.of(file_idx, rank_idx), square)
            file_idx += 1
        if file_idx != BOARD_SIZE:
            raise InvalidLayout("rank does not sum to 8 squares in layout")

    ep_pos: Optional[Position] = None
    if ep != "-":
        try:
            ep_pos = Position.parse(ep)
        except InvalidCoordinate as e:
            raise InvalidLayout("invalid en passant square") from e
        # a black pawn lands on rank 5 after a double step, a white one on rank 4
        if mover is Colour.WHITE:
            expected, expected_rank = Square.OPPONENT, 4
        else:
            expected, expected_rank = Square.MOVER, 3
        if ep_pos.rank.index != expected_rank or board.at(ep_pos) is not expected:
            raise InvalidLayout("en passant square does not hold a double-stepped pawn")
    board = board.with_en_passant(ep_pos)

    # placement above is white-oriented; re-express for black
    if mover is Colour.BLACK:
        board = board.flip()
    return board, mover


def format_layout(board: Board, mover: Colour) -> str:
    """Serialize a board expressed for ``mover`` into layout text."""
    absolute = board if mover is Colour.WHITE else board.flip()
    rows: List[str] = []
    for rank_idx in range(BOARD_SIZE - 1, -1, -1):
        run = 0
        row: List[str] = []
        for file_idx in range(BOARD_SIZE):
            sq = absolute.at(Position.of(file_idx, rank_idx))
            if sq is Square.EMPTY:
                run += 1
                continue
            if run > 0:
                row.append(str(run))
                run = 0
            row.append("P" if sq is Square.MOVER else "p")
        if run > 0:
            row.append(str(run))
        rows.append("".join(row))
    side = "w" if mover is Colour.WHITE else "b"
    ep = str(absolute.en_passant) if absolute.en_passant is not None else "-"
    return f"{'/'.join(rows)} {side} {ep}"
