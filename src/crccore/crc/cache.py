from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Tuple

from crccore.crc.definition import Definition
from crccore.crc.table import LookupTable, generate_lookup_table

_LOGGER = logging.getLogger(__name__)

_Key = Tuple[int, int]  # (width, truncated_polynomial)
Entries = Tuple[int, ...]


class TableCache:
    """
    Get-or-create store of lookup tables, one per
    (reflected input, width, truncated polynomial).

    Each table is stored with its entries as plain ints, which is the form
    the engine's byte loop reads; both are shared by every engine using the key.

    Safe to share between threads. Two threads missing on the same key may
    both generate, but only the first table published is ever returned for
    that key. Entries are never evicted.
    """

    def __init__(self, generator: Callable[[Definition], LookupTable] = generate_lookup_table):
        self._generator = generator
        self._normal: Dict[_Key, Tuple[LookupTable, Entries]] = {}
        self._reversed: Dict[_Key, Tuple[LookupTable, Entries]] = {}
        self._lock = threading.Lock()

    def _tables_for(self, definition: Definition) -> Dict[_Key, Tuple[LookupTable, Entries]]:
        return self._reversed if definition.reverse_data_bytes else self._normal

    @staticmethod
    def _key(definition: Definition) -> _Key:
        return (definition.width, definition.truncated_polynomial)

    def lookup(self, definition: Definition) -> Tuple[LookupTable, Entries]:
        """Table for `definition` and its entries as ints, generated on first use."""
        if definition is None:
            raise ValueError("definition must not be None")
        if not isinstance(definition, Definition):
            raise TypeError("definition must be a Definition")

        tables = self._tables_for(definition)
        key = self._key(definition)

        found = tables.get(key)
        if found is not None:
            return found

        # Generation runs outside the lock; losers of a race are discarded.
        table = self._generator(definition)
        candidate = (table, tuple(table.tolist()))
        with self._lock:
            found = tables.setdefault(key, candidate)

        if found is candidate:
            _LOGGER.debug(
                "Published %s table for width=%d poly=0x%X",
                "reversed" if definition.reverse_data_bytes else "normal",
                key[0],
                key[1],
            )
        return found

    def get_or_create(self, definition: Definition) -> LookupTable:
        return self.lookup(definition)[0]

    def __contains__(self, definition: object) -> bool:
        if not isinstance(definition, Definition):
            return False
        return self._key(definition) in self._tables_for(definition)

    def __len__(self) -> int:
        return len(self._normal) + len(self._reversed)

    def __bool__(self) -> bool:
        # An empty cache is still a cache.
        return True


_DEFAULT_CACHE = TableCache()


def default_cache() -> TableCache:
    """Process-wide cache used by engines that are not given one."""
    return _DEFAULT_CACHE
