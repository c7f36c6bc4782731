"""Bitwise CRC-32 (IEEE, reflected polynomial)."""

_POLY = 0xEDB88320


def crc32_update(data: bytes, crc: int = 0xFFFFFFFF) -> int:
    """Feed *data* into a running CRC register and return the new register."""
    for byte in data:
        for _ in range(8):
            bit = (byte ^ crc) & 1
            crc >>= 1
            if bit:
                crc ^= _POLY
            byte >>= 1
    return crc


def crc32(data: bytes) -> int:
    """Return the finished CRC-32 of *data*."""
    return ~crc32_update(data) & 0xFFFFFFFF