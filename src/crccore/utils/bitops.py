from __future__ import annotations


def _reflect_bits(x: int, width: int) -> int:
    r = 0
    for _ in range(width):
        r = (r << 1) | (x & 1)
        x >>= 1
    return r


# Bit-reversed value of every byte, indexed by the byte.
_REFLECT8 = tuple(_reflect_bits(b, 8) for b in range(256))


def reflect(value: int, width: int) -> int:
    """
    Reverse the low `width` bits of `value` (bit 0 <-> bit width-1).

    Bits above `width` are discarded first. Byte-multiple widths go through
    the byte table; anything else falls back to the bit loop.
    """
    value &= (1 << width) - 1
    if width % 8:
        return _reflect_bits(value, width)

    r = 0
    for _ in range(width // 8):
        r = (r << 8) | _REFLECT8[value & 0xFF]
        value >>= 8
    return r


def reflect8(value: int) -> int:
    return _REFLECT8[value & 0xFF]


def reflect16(value: int) -> int:
    return reflect(value, 16)


def reflect32(value: int) -> int:
    return reflect(value, 32)
