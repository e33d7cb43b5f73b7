from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from crccore.crc.width import Width, width_for


_INT_FIELDS = ("truncated_polynomial", "initializer", "final_xor_value")
_BOOL_FIELDS = ("reverse_data_bytes", "reverse_result_before_final_xor")


@dataclass(frozen=True)
class Definition:
    """
    Parameters of one CRC variant.

    width: register width in bits (multiple of 8, 8..64)
    truncated_polynomial: generator polynomial with the implicit top bit dropped,
        in normal (MSB-first) form, e.g. 0x04C11DB7 for CRC-32
    initializer: remainder start value, given before any input reflection
    final_xor_value: XORed into the remainder at the very end
    reverse_data_bytes: input bytes (and the register) are processed LSB-first
    reverse_result_before_final_xor: the remainder is reflected before the final XOR
    name: label only; not part of equality or hashing

    Integer fields are truncated to `width` on construction.
    """
    width: int
    truncated_polynomial: int
    initializer: int = 0
    final_xor_value: int = 0
    reverse_data_bytes: bool = False
    reverse_result_before_final_xor: bool = False
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        w = width_for(self.width)

        for attr in _INT_FIELDS:
            v = getattr(self, attr)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"definition.{attr} must be int, got {type(v).__name__}")
            object.__setattr__(self, attr, w.truncate(v))

        for attr in _BOOL_FIELDS:
            v = getattr(self, attr)
            if not isinstance(v, bool):
                raise TypeError(f"definition.{attr} must be bool, got {type(v).__name__}")

        if self.name is not None and not isinstance(self.name, str):
            raise TypeError("definition.name must be str or None")

    @property
    def register(self) -> Width:
        return width_for(self.width)

    @property
    def reflected_initializer(self) -> int:
        """The remainder's value right after initialization."""
        if self.reverse_data_bytes:
            return self.register.reflect(self.initializer)
        return self.initializer
