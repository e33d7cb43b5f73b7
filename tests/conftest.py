from __future__ import annotations

import random

from crccore.crc.definition import Definition


# The catalogue "check" input.
CHECK_INPUT = b"123456789"


def reflect_reference(x: int, width: int) -> int:
    r = 0
    for _ in range(width):
        r = (r << 1) | (x & 1)
        x >>= 1
    return r


def reference_crc(definition: Definition, data: bytes) -> int:
    """
    Bit-serial MSB-first CRC straight from the definition's parameters.
    Slow and independent of the table code; used as an oracle.
    """
    width = definition.width
    mask = (1 << width) - 1
    top = 1 << (width - 1)

    crc = definition.initializer
    for b in data:
        if definition.reverse_data_bytes:
            b = reflect_reference(b, 8)
        crc ^= b << (width - 8)
        for _ in range(8):
            if crc & top:
                crc = ((crc << 1) ^ definition.truncated_polynomial) & mask
            else:
                crc = (crc << 1) & mask

    if definition.reverse_result_before_final_xor:
        crc = reflect_reference(crc, width)
    return (crc ^ definition.final_xor_value) & mask


def random_bytes(n: int, seed: int = 1234) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(256) for _ in range(n))
