"""CRC16-CCITT implementation."""
from __future__ import annotations

from .config import settings

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF


def format_checksum(checksum: int, legacy_padding: bool) -> str:
    """Render a 16-bit register as upper-case hex.

    Legacy padding only widens 3-digit values; registers below 0x100 stay
    at two digits or fewer.
    """

    if not legacy_padding:
        return f"{checksum:04X}"
    hex_value = f"{checksum:X}"
    return f"0{hex_value}" if len(hex_value) == 3 else hex_value


def crc16_ccitt(data: str | bytes, *, legacy_padding: bool | None = None) -> str:
    """Compute CRC16-CCITT (0x1021) for EMV payload strings."""

    if legacy_padding is None:
        legacy_padding = settings.legacy_crc_padding
    raw = data.encode("utf-8") if isinstance(data, str) else data

    checksum = CRC16_INIT
    for ch in raw:
        checksum ^= ch << 8
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
            checksum &= 0xFFFF
    return format_checksum(checksum, legacy_padding)
