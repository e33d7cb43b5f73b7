# protocol/crc.py
from __future__ import annotations

import dataclasses
from typing import Optional, Union

from crccore.crc.cache import TableCache
from crccore.crc.definition import Definition
from crccore.crc.engine import BytesLike, Crc
from crccore.crc.presets import (
    CRC16_CCITT_FALSE,
    CRC32_IEEE,
    DEFAULT_CRC16,
    DEFAULT_CRC32,
    get_preset,
)

DefinitionLike = Union[Definition, str]


def _resolve(definition: DefinitionLike) -> Definition:
    if isinstance(definition, str):
        return get_preset(definition)
    return definition


def new(definition: DefinitionLike = DEFAULT_CRC32, *, cache: Optional[TableCache] = None) -> Crc:
    """Fresh accumulator for a Definition or preset name."""
    return Crc(_resolve(definition), cache=cache)


def compute(
    data: BytesLike,
    definition: DefinitionLike = DEFAULT_CRC32,
    *,
    cache: Optional[TableCache] = None,
) -> int:
    """CRC of `data` in one call."""
    crc = new(definition, cache=cache)
    crc.update(data)
    return crc.result


def checksum_bytes(
    data: BytesLike,
    definition: DefinitionLike = DEFAULT_CRC32,
    *,
    cache: Optional[TableCache] = None,
) -> bytes:
    """CRC of `data` as little-endian bytes (what a harness appends to a frame)."""
    crc = new(definition, cache=cache)
    crc.update(data)
    return crc.finalize()


def verify(
    data: BytesLike,
    expected: int,
    definition: DefinitionLike = DEFAULT_CRC32,
    *,
    cache: Optional[TableCache] = None,
) -> bool:
    return compute(data, definition, cache=cache) == expected


def crc16_ccitt_false(data: bytes, *, init: int = 0xFFFF) -> int:
    """
    CRC-16/CCITT-FALSE
      width=16 poly=0x1021 init=0xFFFF refin=false refout=false xorout=0x0000
      Check("123456789") = 0x29B1
    """
    definition = CRC16_CCITT_FALSE
    if init != definition.initializer:
        definition = dataclasses.replace(definition, initializer=init, name=None)
    return compute(data, definition)


def crc32_ieee(data: bytes, *, init: int = 0xFFFFFFFF) -> int:
    """
    CRC-32/ISO-HDLC (aka "IEEE 802.3")
      width=32 poly=0x04C11DB7 init=0xFFFFFFFF refin=true refout=true xorout=0xFFFFFFFF
      Check("123456789") = 0xCBF43926
    """
    definition = CRC32_IEEE
    if init != definition.initializer:
        definition = dataclasses.replace(definition, initializer=init, name=None)
    return compute(data, definition)


def crc16(data: bytes) -> int:
    """Convenience alias: default CRC-16 (ARC)."""
    return compute(data, DEFAULT_CRC16)


def crc32(data: bytes) -> int:
    """Convenience alias: default CRC-32 (IEEE)."""
    return compute(data, DEFAULT_CRC32)
