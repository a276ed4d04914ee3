from __future__ import annotations

from typing import List


BOARD_BITS = 128
MASK128 = (1 << BOARD_BITS) - 1


def _build_byte_table() -> List[int]:
    table = [0] * 256
    for b in range(256):
        r = 0
        for i in range(8):
            if (b >> i) & 1:
                r |= 1 << (7 - i)
        table[b] = r
    return table


# Bit-reversed value of every byte
REVERSED_BYTE = _build_byte_table()


def reverse_bits(value: int, width: int = BOARD_BITS) -> int:
    """Reverse the lowest ``width`` bits of ``value``.

    Bit ``i`` moves to bit ``width - 1 - i``. Works for any positive width; the
    bulk is handled one byte at a time and a trailing partial byte is shifted
    into place.

    Args:
        value (int): Non-negative integer; bits above ``width`` are ignored.
        width (int): Number of bits to reverse.

    Returns:
        int: The reversed value, always below ``1 << width``.

    Raises:
        ValueError: If ``width`` is not positive or ``value`` is negative.
    """
    if width <= 0:
        raise ValueError(f"width must be positive: {width}")
    if value < 0:
        raise ValueError("value must be non-negative")
    value &= (1 << width) - 1
    full, rest = divmod(width, 8)
    out = 0
    for _ in range(full):
        out = (out << 8) | REVERSED_BYTE[value & 0xFF]
        value >>= 8
    if rest:
        # remaining high bits: reverse within `rest` positions
        out = (out << rest) | (REVERSED_BYTE[value & 0xFF] >> (8 - rest))
    return out


def get_field(raw: int, shift: int, mask: int = 0b11) -> int:
    return (raw >> shift) & mask


def set_field(raw: int, shift: int, field: int, mask: int = 0b11) -> int:
    """Return ``raw`` with the bits at ``shift`` replaced by ``field``."""
    raw &= ~(mask << shift) & MASK128
    return raw | ((field & mask) << shift)
