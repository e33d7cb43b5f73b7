from __future__ import annotations

import logging
from typing import Sequence, Union

import numpy as np

from crccore.crc.definition import Definition
from crccore.crc.width import Width
from crccore.utils.bitops import reflect8

_LOGGER = logging.getLogger(__name__)

TABLE_SIZE = 256

LookupTable = np.ndarray


def generate_lookup_table(definition: Definition) -> LookupTable:
    """
    Build the 256-entry remainder table for `definition`.

    Each entry is the bit-serial division of one dividend byte, MSB first.
    For reflected input the table is stored reflected as well: entry
    reflect(remainder) at index reflect8(dividend), so the engine can work on
    an LSB-first register without reflecting every byte.

    Only `width`, `truncated_polynomial` and `reverse_data_bytes` matter.
    The returned array is read-only.
    """
    if not isinstance(definition, Definition):
        raise TypeError("definition must be a Definition")

    w = definition.register
    poly = definition.truncated_polynomial
    top = w.top_bit
    mask = w.mask

    values = [0] * TABLE_SIZE
    for dividend in range(TABLE_SIZE):
        remainder = 0
        bit = 0x80
        while bit:
            if dividend & bit:
                remainder ^= top
            if remainder & top:
                remainder = ((remainder << 1) & mask) ^ poly
            else:
                remainder = (remainder << 1) & mask
            bit >>= 1

        if definition.reverse_data_bytes:
            values[reflect8(dividend)] = w.reflect(remainder)
        else:
            values[dividend] = remainder

    table = np.array(values, dtype=w.dtype)
    table.setflags(write=False)

    if _LOGGER.isEnabledFor(logging.DEBUG):
        _LOGGER.debug(
            "Generated %s lookup table: width=%d poly=0x%0*X",
            "reversed" if definition.reverse_data_bytes else "normal",
            w.bits,
            w.byte_size * 2,
            poly,
        )

    return table


def as_lookup_table(values: Union[Sequence[int], np.ndarray], width: Width) -> LookupTable:
    """
    Validate a caller-supplied table and return it as a read-only array.

    A read-only ndarray of the right dtype and length is returned as is, so it
    stays shared; anything else is copied. Entries must be integers; floats
    and nested sequences are rejected rather than truncated.
    """
    if values is None:
        raise ValueError("lookup_table must not be None")
    if not isinstance(width, Width):
        raise TypeError("width must be a Width")

    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise ValueError(
                f"lookup_table must be one-dimensional, but it has shape {values.shape}"
            )
        if values.dtype.kind not in "ui":
            raise ValueError(
                f"lookup_table must hold integers, but its dtype is {values.dtype}"
            )

    n = len(values)
    if n != TABLE_SIZE:
        raise ValueError(
            f"lookup_table must have {TABLE_SIZE} entries, but it has {n} entries"
        )

    if (
        isinstance(values, np.ndarray)
        and values.dtype == width.dtype
        and not values.flags.writeable
    ):
        return values

    entries = []
    for i, v in enumerate(values):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
            raise ValueError(
                f"lookup_table[{i}] must be an integer, got {type(v).__name__}"
            )
        v = int(v)
        if not (0 <= v <= width.mask):
            raise ValueError(
                f"lookup_table[{i}]=0x{v:X} does not fit in {width.bits} bits"
            )
        entries.append(v)

    table = np.array(entries, dtype=width.dtype)
    table.setflags(write=False)
    return table
