from __future__ import annotations

from typing import Dict

from .board import Board


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for `board` at `depth`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all child positions' perft(depth-1).

    Children are produced with ``apply`` followed by ``flip`` so the same
    generator serves both sides. A side without moves contributes no leaves.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1
    if depth == 1:
        return sum(1 for _ in board.moves())

    nodes = 0
    for m in board.moves():
        nodes += perft(board.apply(m).flip(), depth - 1)
    return nodes


def divide(board: Board, depth: int) -> Dict[str, int]:
    """Per-root-move perft counts keyed by move text (mover frame)."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    return {m.to_text(): perft(board.apply(m).flip(), depth - 1) for m in board.moves()}
