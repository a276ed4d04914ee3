"""Evaluation heuristics for Pawn Race positions.

Pure, deterministic, and side-effect free. Scores are centipawns from the
mover's point of view.
"""

from __future__ import annotations

from typing import Final, Iterable, List

from pawnrace.engine.board import Board
from pawnrace.engine.position import BOARD_SIZE, Position
from pawnrace.engine.square import Square


# Material value of a pawn in centipawns
P_VAL: Final = 100

# Advancement bonus by rank index in the pawn's own frame (0..7)
ADVANCE_BONUS: Final = (0, 0, 5, 12, 24, 45, 80, 0)

# Passed pawn bonus by rank index in the pawn's own frame
PASSED_BONUS: Final = (0, 10, 15, 25, 45, 80, 140, 0)

# Extra weight when the passed pawn's side is also to move
TEMPO_BONUS: Final = 10


def _files_by_rank(positions: Iterable[Position]) -> List[List[int]]:
    # cols[file] = rank indices occupied on that file
    cols: List[List[int]] = [[] for _ in range(BOARD_SIZE)]
    for pos in positions:
        cols[pos.file.index].append(pos.rank.index)
    return cols


def is_passed(pos: Position, opponent_cols: List[List[int]]) -> bool:
    """True if no opponent pawn stands ahead of ``pos`` on its or adjacent files.

    ``opponent_cols`` holds opponent pawn ranks in the same frame as ``pos``.
    """
    f = pos.file.index
    for df in (-1, 0, 1):
        nf = f + df
        if not 0 <= nf < BOARD_SIZE:
            continue
        if any(r > pos.rank.index for r in opponent_cols[nf]):
            return False
    return True


def _side_score(own: List[Position], enemy_cols: List[List[int]]) -> int:
    score = 0
    for pos in own:
        score += P_VAL + ADVANCE_BONUS[pos.rank.index]
        if is_passed(pos, enemy_cols):
            score += PASSED_BONUS[pos.rank.index]
    return score


def evaluate(board: Board) -> int:
    """Static evaluation from the mover's perspective."""
    mine = list(board.positions(Square.MOVER))
    enemy = list(board.positions(Square.OPPONENT))
    # opponent pawns seen from their own frame
    theirs = [p.flip() for p in enemy]

    enemy_cols = _files_by_rank(enemy)
    mine_in_their_frame = _files_by_rank(p.flip() for p in mine)

    score = _side_score(mine, enemy_cols) - _side_score(theirs, mine_in_their_frame)
    if any(is_passed(p, enemy_cols) for p in mine):
        score += TEMPO_BONUS
    return score
