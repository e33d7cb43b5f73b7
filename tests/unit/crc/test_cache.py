import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from crccore.crc.cache import TableCache, default_cache
from crccore.crc.definition import Definition
from crccore.crc.presets import CRC16_ARC, CRC16_XMODEM, CRC32_BZIP2, CRC32_IEEE, CRC32_MPEG2
from crccore.crc.table import generate_lookup_table


class CountingGenerator:
    def __init__(self):
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, definition):
        with self._lock:
            self.calls += 1
        return generate_lookup_table(definition)


def test_get_or_create_generates_once_per_key():
    gen = CountingGenerator()
    cache = TableCache(generator=gen)

    t1 = cache.get_or_create(CRC32_BZIP2)
    t2 = cache.get_or_create(CRC32_MPEG2)  # same poly, same family
    assert t1 is t2
    assert gen.calls == 1
    assert len(cache) == 1


def test_families_are_separate():
    gen = CountingGenerator()
    cache = TableCache(generator=gen)

    normal = cache.get_or_create(CRC32_BZIP2)
    reversed_ = cache.get_or_create(CRC32_IEEE)
    assert normal is not reversed_
    assert not np.array_equal(normal, reversed_)
    assert gen.calls == 2
    assert len(cache) == 2


def test_widths_are_separate():
    cache = TableCache()
    d8 = Definition(width=8, truncated_polynomial=0x07)
    d16 = Definition(width=16, truncated_polynomial=0x07)
    assert cache.get_or_create(d8).dtype == np.uint8
    assert cache.get_or_create(d16).dtype == np.uint16
    assert len(cache) == 2


def test_contains():
    cache = TableCache()
    assert CRC16_ARC not in cache
    cache.get_or_create(CRC16_ARC)
    assert CRC16_ARC in cache
    assert CRC16_XMODEM not in cache
    assert "CRC-16/ARC" not in cache


def test_equal_definitions_share_a_table():
    cache = TableCache()
    a = Definition(width=16, truncated_polynomial=0x1021)
    b = Definition(width=16, truncated_polynomial=0x1021, initializer=0xFFFF)
    assert cache.get_or_create(a) is cache.get_or_create(b)


def test_concurrent_get_or_create_publishes_single_table():
    gen = CountingGenerator()
    cache = TableCache(generator=gen)
    barrier = threading.Barrier(16)

    def worker(_):
        barrier.wait()
        return cache.get_or_create(CRC32_IEEE)

    with ThreadPoolExecutor(max_workers=16) as pool:
        tables = list(pool.map(worker, range(16)))

    first = tables[0]
    assert all(t is first for t in tables)
    assert cache.get_or_create(CRC32_IEEE) is first
    assert 1 <= gen.calls <= 16


def test_get_or_create_rejects_missing_definition():
    cache = TableCache()
    with pytest.raises(ValueError):
        cache.get_or_create(None)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        cache.get_or_create(object())  # type: ignore[arg-type]


def test_default_cache_is_process_wide():
    assert default_cache() is default_cache()
    assert default_cache().get_or_create(CRC32_IEEE) is default_cache().get_or_create(CRC32_IEEE)


def test_empty_cache_is_truthy():
    cache = TableCache()
    assert len(cache) == 0
    assert cache


def test_concurrent_get_or_create_different_keys():
    gen = CountingGenerator()
    cache = TableCache(generator=gen)
    definitions = [
        Definition(width=16, truncated_polynomial=poly, reverse_data_bytes=reflected)
        for poly in (0x1021, 0x8005, 0x3D65, 0x8BB7)
        for reflected in (False, True)
    ]
    jobs = definitions * 4
    barrier = threading.Barrier(len(jobs))

    def worker(d):
        barrier.wait()
        return d, cache.get_or_create(d)

    with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
        results = list(pool.map(worker, jobs))

    assert len(cache) == len(definitions)
    for d, table in results:
        assert table is cache.get_or_create(d)
        assert np.array_equal(table, generate_lookup_table(d))


def test_lookup_returns_shared_entries():
    cache = TableCache()
    table, entries = cache.lookup(CRC32_IEEE)
    again_table, again_entries = cache.lookup(CRC32_IEEE)
    assert again_table is table
    assert again_entries is entries
    assert isinstance(entries, tuple)
    assert entries == tuple(table.tolist())
