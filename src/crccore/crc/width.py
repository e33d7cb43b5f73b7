from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from crccore.utils.bitops import reflect


MIN_BITS = 8
MAX_BITS = 64


@dataclass(frozen=True)
class Width:
    """
    Unsigned register width used by the table generator and the engine.

    bits: register size; a multiple of 8 in [8, 64] so the register can be
          fed, shifted and serialized a whole byte at a time.
    """
    bits: int

    def __post_init__(self) -> None:
        if not isinstance(self.bits, int) or isinstance(self.bits, bool):
            raise TypeError("width.bits must be int")
        if not (MIN_BITS <= self.bits <= MAX_BITS) or self.bits % 8:
            raise ValueError(
                f"width.bits must be a multiple of 8 in [{MIN_BITS},{MAX_BITS}], got {self.bits}"
            )

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def top_bit(self) -> int:
        return 1 << (self.bits - 1)

    @property
    def index_shift(self) -> int:
        """Right shift that brings the high byte of the register down to bits 0..7."""
        return self.bits - 8

    @property
    def byte_size(self) -> int:
        return self.bits // 8

    @property
    def dtype(self) -> np.dtype:
        """Smallest unsigned numpy dtype that holds one register value."""
        for candidate in (np.uint8, np.uint16, np.uint32, np.uint64):
            if np.dtype(candidate).itemsize * 8 >= self.bits:
                return np.dtype(candidate)
        raise ValueError(f"no unsigned dtype holds {self.bits} bits")  # unreachable after __post_init__

    def truncate(self, value: int) -> int:
        return value & self.mask

    def reflect(self, value: int) -> int:
        return reflect(value, self.bits)

    def to_bytes(self, value: int) -> bytes:
        """Little-endian serialization at the register's byte size."""
        return self.truncate(value).to_bytes(self.byte_size, "little")


@lru_cache(maxsize=None, typed=True)
def width_for(bits: int) -> Width:
    return Width(bits)


WIDTH8 = width_for(8)
WIDTH16 = width_for(16)
WIDTH32 = width_for(32)
WIDTH64 = width_for(64)
