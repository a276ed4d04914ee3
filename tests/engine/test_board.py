from __future__ import annotations

from pawnrace.engine.board import INITIAL_RAW, Board
from pawnrace.engine.position import Position
from pawnrace.engine.square import Square


def _sq(s: str) -> Position:
    return Position.parse(s)


def test_initial_layout() -> None:
    b = Board.initial()
    assert b.raw == INITIAL_RAW
    assert b.en_passant is None
    for pos in Position.all():
        if pos.rank.number == 2:
            assert b.at(pos) is Square.MOVER
        elif pos.rank.number == 7:
            assert b.at(pos) is Square.OPPONENT
        else:
            assert b.at(pos) is Square.EMPTY
    assert b.count(Square.MOVER) == 8
    assert b.count(Square.OPPONENT) == 8


def test_flip_involution() -> None:
    b = (
        Board.initial()
        .with_square(_sq("e2"), Square.EMPTY)
        .with_square(_sq("e4"), Square.MOVER)
        .with_square(_sq("d5"), Square.OPPONENT)
        .with_en_passant(_sq("e4"))
    )
    assert b.flip().flip() == b
    assert b.flip().flip().raw == b.raw
    assert b.flip().flip().en_passant == b.en_passant


def test_flip_swaps_sides_and_rotates() -> None:
    b = Board.empty().with_square(_sq("b3"), Square.MOVER).with_en_passant(_sq("b3"))
    f = b.flip()
    assert f.at(_sq("g6")) is Square.OPPONENT
    assert f.at(_sq("b3")) is Square.EMPTY
    assert f.en_passant == _sq("g6")
    assert f.count(Square.MOVER) == 0
    # the start position looks the same from both sides
    assert Board.initial().flip() == Board.initial()


def test_bit_isolation() -> None:
    base = Board.initial()
    for target in Position.all():
        for square in (Square.MOVER, Square.OPPONENT, Square.EMPTY):
            b = base.with_square(target, square)
            assert b.at(target) is square
            for other in Position.all():
                if other != target:
                    assert b.at(other) is base.at(other)


def test_with_square_returns_new_value() -> None:
    b = Board.initial()
    b2 = b.with_square(_sq("a2"), Square.EMPTY)
    assert b.at(_sq("a2")) is Square.MOVER
    assert b2.at(_sq("a2")) is Square.EMPTY


def test_both_empty_encodings_decode_as_empty() -> None:
    shift = 2 * _sq("c3").index
    b = Board(0b11 << shift)
    assert b.at(_sq("c3")) is Square.EMPTY
    assert b == Board.empty()
    assert hash(b) == hash(Board.empty())
    # flipping 11 stays 11, still empty
    assert b.flip().at(_sq("f6")) is Square.EMPTY


def test_pieces_scan_order() -> None:
    b = (
        Board.empty()
        .with_square(_sq("a2"), Square.MOVER)
        .with_square(_sq("h1"), Square.MOVER)
        .with_square(_sq("b1"), Square.MOVER)
        .with_square(_sq("c1"), Square.OPPONENT)
        .with_square(_sq("a1"), Square.MOVER)
        .with_square(_sq("h8"), Square.MOVER)
    )
    found = [str(p.position) for p in b.pieces()]
    assert found == ["a1", "b1", "h1", "a2", "h8"]
    assert all(p.board is b for p in b.pieces())


def test_pieces_and_moves_are_single_pass() -> None:
    b = Board.initial()
    pieces = b.pieces()
    assert len(list(pieces)) == 8
    assert list(pieces) == []
    moves = b.moves()
    assert len(list(moves)) == 16
    assert list(moves) == []
    # a fresh call starts over
    assert len(list(b.moves())) == 16
