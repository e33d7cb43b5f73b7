from __future__ import annotations

from typing import Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np

from crccore.crc.cache import TableCache, default_cache
from crccore.crc.definition import Definition
from crccore.crc.presets import get_preset
from crccore.crc.table import LookupTable, as_lookup_table

BytesLike = Union[bytes, bytearray, memoryview]


@runtime_checkable
class IncrementalChecksum(Protocol):
    """
    What a streaming hash harness needs from a checksum:
      initialize() -> start (or restart) a computation
      update(data) -> feed the next chunk
      finalize()   -> fixed-width result bytes
    """

    def initialize(self) -> None: ...

    def update(self, data: BytesLike) -> None: ...

    def finalize(self) -> bytes: ...


class Crc:
    """
    Table-driven CRC accumulator for any Definition.

    Usage:
      crc = Crc(CRC32_IEEE)
      crc.update(b"1234")
      crc.update(b"56789")
      crc.result      # 0xCBF43926
      crc.finalize()  # b"\\x26\\x39\\xf4\\xcb"

    `result` and `finalize()` do not end the computation; more data can be
    fed afterwards. `initialize()` starts over with the same table.

    An instance is not thread-safe. Lookup tables are read-only and shared.
    """

    def __init__(
        self,
        definition: Definition,
        lookup_table: Optional[Union[Sequence[int], np.ndarray]] = None,
        *,
        cache: Optional[TableCache] = None,
    ):
        if definition is None:
            raise ValueError("definition must not be None")
        if not isinstance(definition, Definition):
            raise TypeError(f"definition must be a Definition, got {type(definition).__name__}")

        self._definition = definition
        self._width = definition.register

        # `_entries` is the plain-int form the byte loop reads; numpy scalars
        # are slow to index and mix with ints.
        if lookup_table is None:
            if cache is None:
                cache = default_cache()
            self._lookup_table, self._entries = cache.lookup(definition)
        else:
            self._lookup_table = as_lookup_table(lookup_table, self._width)
            self._entries = tuple(self._lookup_table.tolist())
        self._remainder = 0
        self.initialize()

    @classmethod
    def from_preset(cls, name: str, *, cache: Optional[TableCache] = None) -> "Crc":
        return cls(get_preset(name), cache=cache)

    # ----------------------------
    # State
    # ----------------------------

    @property
    def definition(self) -> Definition:
        return self._definition

    @property
    def lookup_table(self) -> LookupTable:
        return self._lookup_table

    @property
    def remainder(self) -> int:
        return self._remainder

    @property
    def digest_size(self) -> int:
        return self._width.byte_size

    def initialize(self) -> None:
        """Reset the remainder to the (possibly reflected) initializer."""
        self._remainder = self._definition.reflected_initializer

    def update(self, data: BytesLike) -> None:
        """
        Fold `data` into the remainder, one table lookup per byte.

        Per byte, in this order:
          1. index from the current remainder: low byte when reflected,
             high byte otherwise, XOR the data byte
          2. shift that byte out of the remainder (right when reflected, left otherwise)
          3. XOR in table[index]
        """
        if isinstance(data, memoryview):
            data = data.cast("B")
        elif not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"update: data must be bytes-like, got {type(data).__name__}")

        entries = self._entries
        remainder = self._remainder

        if self._definition.reverse_data_bytes:
            for b in data:
                index = (remainder ^ b) & 0xFF
                remainder >>= 8
                remainder ^= entries[index]
        else:
            shift = self._width.index_shift
            mask = self._width.mask
            for b in data:
                index = ((remainder >> shift) ^ b) & 0xFF
                remainder = (remainder << 8) & mask
                remainder ^= entries[index]

        self._remainder = remainder

    @property
    def result(self) -> int:
        """Externally visible CRC of everything fed since the last initialize()."""
        d = self._definition
        remainder = self._remainder
        # Reflected input already leaves the register LSB-first; only a
        # disagreement between the two flags needs another reflection.
        if d.reverse_result_before_final_xor != d.reverse_data_bytes:
            remainder = self._width.reflect(remainder)
        return self._width.truncate(remainder ^ d.final_xor_value)

    def finalize(self) -> bytes:
        """`result` as little-endian bytes of the register's width."""
        return self._width.to_bytes(self.result)

    def copy(self) -> "Crc":
        """Independent accumulator with the same state, sharing the table."""
        other = Crc.__new__(Crc)
        other._definition = self._definition
        other._width = self._width
        other._lookup_table = self._lookup_table
        other._entries = self._entries
        other._remainder = self._remainder
        return other

    def __repr__(self) -> str:
        label = self._definition.name or f"width={self._width.bits}"
        return f"Crc({label}, remainder=0x{self._remainder:0{self._width.byte_size * 2}X})"
