import pytest

from crccore.crc import presets
from crccore.crc.engine import Crc
from crccore.crc.presets import available_presets, get_preset
from tests.conftest import CHECK_INPUT, random_bytes, reference_crc


# Catalogue check values over b"123456789".
CHECK_VALUES = {
    "CRC-16/ARC": 0xBB3D,
    "CRC-16/CCITT-FALSE": 0x29B1,
    "CRC-16/CCITT": 0x2189,
    "CRC-16/XMODEM": 0x31C3,
    "CRC-16/X-25": 0x906E,
    "CRC-16/MODBUS": 0x4B37,
    "CRC-32/IEEE": 0xCBF43926,
    "CRC-32/BZIP2": 0xFC891918,
    "CRC-32C": 0xE3069283,
    "CRC-32/MPEG-2": 0x0376E6E7,
    "CRC-32/POSIX": 0x765E7680,
    "CRC-32/AIXM": 0x3010BF7F,
    "CRC-32/XFER": 0xBD0BE338,
    "CRC-8/SMBUS": 0xF4,
    "CRC-24/OPENPGP": 0x21CF02,
    "CRC-64/XZ": 0x995DC9BBDF1939FA,
}


def test_every_preset_has_a_check_value():
    assert sorted(CHECK_VALUES) == available_presets()


@pytest.mark.parametrize("name", available_presets())
def test_preset_check_value(name):
    crc = Crc.from_preset(name)
    crc.update(CHECK_INPUT)
    assert crc.result == CHECK_VALUES[name], f"{name}: got 0x{crc.result:X}"


@pytest.mark.parametrize("name", available_presets())
def test_preset_matches_bitwise_reference(name):
    definition = get_preset(name)
    data = random_bytes(300, seed=len(name))
    crc = Crc(definition)
    crc.update(data)
    assert crc.result == reference_crc(definition, data)


def test_get_preset_aliases_and_case():
    assert get_preset("crc-32") is presets.CRC32_IEEE
    assert get_preset("PKZIP") is presets.CRC32_IEEE
    assert get_preset("CRC-32/ISCSI") is presets.CRC32_CASTAGNOLI
    assert get_preset("kermit") is presets.CRC16_CCITT
    assert get_preset(" CRC-16/XMODEM ") is presets.CRC16_XMODEM


def test_get_preset_unknown_name():
    with pytest.raises(KeyError, match="CRC-99"):
        get_preset("CRC-99/NOPE")


def test_get_preset_rejects_empty_name():
    with pytest.raises(ValueError):
        get_preset("")


def test_defaults_per_width():
    assert presets.DEFAULT_CRC16 is presets.CRC16_ARC
    assert presets.DEFAULT_CRC32 is presets.CRC32_IEEE


def test_preset_names_match_registry():
    for name in available_presets():
        assert get_preset(name).name == name
