"""CRC16-CCITT implementation."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF


def crc16_ccitt(data: str, encoding: str = "utf-8") -> str:
    """Compute CRC16-CCITT-FALSE (0x1021, init 0xFFFF) for EMV payload strings.

    The string is hashed byte-wise after encoding, so a multi-byte character
    contributes every byte of its encoded form. Characters the encoding cannot
    represent raise ``UnicodeEncodeError``.
    """

    checksum = CRC16_INIT
    for byte in data.encode(encoding):
        checksum ^= byte << 8
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
            checksum &= 0xFFFF
    return f"{checksum:04X}"
