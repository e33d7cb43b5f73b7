from __future__ import annotations

from typing import Dict, List

from crccore.crc.definition import Definition


# ============================
# CRC-16
# ============================

# Used by ARC and LHA. Default CRC-16.
CRC16_ARC = Definition(
    width=16,
    truncated_polynomial=0x8005,
    reverse_data_bytes=True,
    reverse_result_before_final_xor=True,
    name="CRC-16/ARC",
)

# Floppy disk formats; commonly misidentified as CCITT.
CRC16_CCITT_FALSE = Definition(
    width=16,
    truncated_polynomial=0x1021,
    initializer=0xFFFF,
    name="CRC-16/CCITT-FALSE",
)

# Kermit. Appears in "Numerical Recipes in C" as CCITT.
CRC16_CCITT = Definition(
    width=16,
    truncated_polynomial=0x1021,
    reverse_data_bytes=True,
    reverse_result_before_final_xor=True,
    name="CRC-16/CCITT",
)

# XMODEM and ZMODEM.
CRC16_XMODEM = Definition(
    width=16,
    truncated_polynomial=0x1021,
    name="CRC-16/XMODEM",
)

# X.25, V.42, T.30, RFC 1171.
CRC16_X25 = Definition(
    width=16,
    truncated_polynomial=0x1021,
    initializer=0xFFFF,
    final_xor_value=0xFFFF,
    reverse_data_bytes=True,
    reverse_result_before_final_xor=True,
    name="CRC-16/X-25",
)

# Modbus RTU frame check.
CRC16_MODBUS = Definition(
    width=16,
    truncated_polynomial=0x8005,
    initializer=0xFFFF,
    reverse_data_bytes=True,
    reverse_result_before_final_xor=True,
    name="CRC-16/MODBUS",
)


# ============================
# CRC-32
# ============================

# Old IEEE recommendation: Ethernet, zip, PNG. Default CRC-32.
CRC32_IEEE = Definition(
    width=32,
    truncated_polynomial=0x04C11DB7,
    initializer=0xFFFFFFFF,
    final_xor_value=0xFFFFFFFF,
    reverse_data_bytes=True,
    reverse_result_before_final_xor=True,
    name="CRC-32/IEEE",
)

CRC32_BZIP2 = Definition(
    width=32,
    truncated_polynomial=0x04C11DB7,
    initializer=0xFFFFFFFF,
    final_xor_value=0xFFFFFFFF,
    name="CRC-32/BZIP2",
)

# RFC 3720 (iSCSI), SCTP, ext4, Btrfs.
CRC32_CASTAGNOLI = Definition(
    width=32,
    truncated_polynomial=0x1EDC6F41,
    initializer=0xFFFFFFFF,
    final_xor_value=0xFFFFFFFF,
    reverse_data_bytes=True,
    reverse_result_before_final_xor=True,
    name="CRC-32C",
)

CRC32_MPEG2 = Definition(
    width=32,
    truncated_polynomial=0x04C11DB7,
    initializer=0xFFFFFFFF,
    name="CRC-32/MPEG-2",
)

# POSIX cksum. The cksum program also appends the file length to the input.
CRC32_POSIX = Definition(
    width=32,
    truncated_polynomial=0x04C11DB7,
    final_xor_value=0xFFFFFFFF,
    name="CRC-32/POSIX",
)

# Aeronautical Information eXchange Model.
CRC32_AIXM = Definition(
    width=32,
    truncated_polynomial=0x814141AB,
    name="CRC-32/AIXM",
)

# Very old; appears in "Numerical Recipes in C".
CRC32_XFER = Definition(
    width=32,
    truncated_polynomial=0x000000AF,
    name="CRC-32/XFER",
)


# ============================
# Other widths
# ============================

CRC8_SMBUS = Definition(
    width=8,
    truncated_polynomial=0x07,
    name="CRC-8/SMBUS",
)

# RFC 4880 armor checksum.
CRC24_OPENPGP = Definition(
    width=24,
    truncated_polynomial=0x864CFB,
    initializer=0xB704CE,
    name="CRC-24/OPENPGP",
)

CRC64_XZ = Definition(
    width=64,
    truncated_polynomial=0x42F0E1EBA9EA3693,
    initializer=0xFFFFFFFFFFFFFFFF,
    final_xor_value=0xFFFFFFFFFFFFFFFF,
    reverse_data_bytes=True,
    reverse_result_before_final_xor=True,
    name="CRC-64/XZ",
)


DEFAULT_CRC16 = CRC16_ARC
DEFAULT_CRC32 = CRC32_IEEE


# ============================
# Registry
# ============================

_PRESETS: Dict[str, Definition] = {
    d.name: d
    for d in (
        CRC16_ARC,
        CRC16_CCITT_FALSE,
        CRC16_CCITT,
        CRC16_XMODEM,
        CRC16_X25,
        CRC16_MODBUS,
        CRC32_IEEE,
        CRC32_BZIP2,
        CRC32_CASTAGNOLI,
        CRC32_MPEG2,
        CRC32_POSIX,
        CRC32_AIXM,
        CRC32_XFER,
        CRC8_SMBUS,
        CRC24_OPENPGP,
        CRC64_XZ,
    )
}

_ALIASES: Dict[str, str] = {
    "CRC-16": "CRC-16/ARC",
    "ARC": "CRC-16/ARC",
    "LHA": "CRC-16/ARC",
    "CRC-16/IBM-3740": "CRC-16/CCITT-FALSE",
    "CRC-16/KERMIT": "CRC-16/CCITT",
    "KERMIT": "CRC-16/CCITT",
    "ZMODEM": "CRC-16/XMODEM",
    "X-25": "CRC-16/X-25",
    "CRC-16/IBM-SDLC": "CRC-16/X-25",
    "MODBUS": "CRC-16/MODBUS",
    "CRC-32": "CRC-32/IEEE",
    "CRC-32/ISO-HDLC": "CRC-32/IEEE",
    "CRC-32/ADCCP": "CRC-32/IEEE",
    "PKZIP": "CRC-32/IEEE",
    "B-CRC-32": "CRC-32/BZIP2",
    "CRC-32/ISCSI": "CRC-32C",
    "CRC-32/CASTAGNOLI": "CRC-32C",
    "CKSUM": "CRC-32/POSIX",
    "CRC-32/CKSUM": "CRC-32/POSIX",
    "CRC-32Q": "CRC-32/AIXM",
    "XFER": "CRC-32/XFER",
    "CRC-8": "CRC-8/SMBUS",
    "CRC-24": "CRC-24/OPENPGP",
    "CRC-64/GO-ECMA": "CRC-64/XZ",
}

_LOOKUP: Dict[str, str] = {n.upper(): n for n in _PRESETS}
_LOOKUP.update({alias.upper(): target for alias, target in _ALIASES.items()})


def available_presets() -> List[str]:
    """Canonical preset names, sorted."""
    return sorted(_PRESETS)


def get_preset(name: str) -> Definition:
    """Look up a preset by canonical name or alias (case-insensitive)."""
    if not isinstance(name, str) or not name:
        raise ValueError("preset name must be a non-empty string")
    canonical = _LOOKUP.get(name.strip().upper())
    if canonical is None:
        raise KeyError(f"unknown CRC preset '{name}'")
    return _PRESETS[canonical]
