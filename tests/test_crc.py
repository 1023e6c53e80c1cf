from __future__ import annotations

import pytest

from qriskit.crc import crc16_ccitt, format_checksum


class TestCrc16Ccitt:
    def test_standard_check_value(self):
        assert crc16_ccitt("123456789") == "29B1"

    def test_accepts_bytes(self):
        assert crc16_ccitt(b"123456789") == crc16_ccitt("123456789")

    def test_empty_input_returns_initial_register(self):
        assert crc16_ccitt("") == "FFFF"

    def test_is_deterministic(self):
        payload = "00020101021153033605802ID6304"
        assert crc16_ccitt(payload) == crc16_ccitt(payload)

    def test_output_is_uppercase_hex(self):
        result = crc16_ccitt("qriskit")
        assert result == result.upper()
        int(result, 16)


class TestFormatChecksum:
    @pytest.mark.parametrize("legacy", [True, False])
    def test_three_digit_value_is_padded(self, legacy):
        assert format_checksum(0x0ABC, legacy) == "0ABC"

    def test_legacy_leaves_short_values_unpadded(self):
        assert format_checksum(0x00AB, True) == "AB"
        assert format_checksum(0x0007, True) == "7"

    def test_strict_padding_always_four_digits(self):
        assert format_checksum(0x00AB, False) == "00AB"
        assert format_checksum(0x0007, False) == "0007"

    def test_full_width_value_untouched(self):
        assert format_checksum(0xE649, True) == "E649"
