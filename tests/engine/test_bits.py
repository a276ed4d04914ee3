from __future__ import annotations

import pytest

from pawnrace.engine.bits import MASK128, get_field, reverse_bits, set_field


def test_reverse_bits_moves_low_bit_to_top() -> None:
    assert reverse_bits(1, 128) == 1 << 127
    assert reverse_bits(1 << 127, 128) == 1
    assert reverse_bits(0b01, 128) == 1 << 127
    assert reverse_bits(MASK128, 128) == MASK128


@pytest.mark.parametrize(
    ("value", "width", "expected"),
    [
        (0b1, 12, 0b100000000000),
        (0b110, 3, 0b011),
        (0b1011, 4, 0b1101),
        (0x01, 8, 0x80),
        (0x0F, 16, 0xF000),
    ],
)
def test_reverse_bits_generic_widths(value: int, width: int, expected: int) -> None:
    assert reverse_bits(value, width) == expected


def test_reverse_bits_is_an_involution() -> None:
    for value in (0, 1, 0xDEADBEEF, 0x0000AAAA000000000000000055550000, MASK128 >> 3):
        assert reverse_bits(reverse_bits(value, 128), 128) == value


def test_reverse_bits_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        reverse_bits(1, 0)
    with pytest.raises(ValueError):
        reverse_bits(-1, 8)


def test_set_field_only_touches_its_bits() -> None:
    raw = MASK128
    raw = set_field(raw, 10, 0b00)
    assert get_field(raw, 10) == 0
    assert raw == MASK128 & ~(0b11 << 10)
    raw = set_field(raw, 10, 0b10)
    assert get_field(raw, 10) == 0b10
    assert get_field(raw, 8) == 0b11
    assert get_field(raw, 12) == 0b11
