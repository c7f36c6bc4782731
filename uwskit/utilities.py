"""Small number formatting helpers used when writing HTTP output."""

_U32_MAX = 0xFFFFFFFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF


def hex_u32(value: int) -> str:
    """Format an unsigned 32-bit integer as lower-case hexadecimal digits."""
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"value out of unsigned 32-bit range: {value}")
    return format(value, "x")


def dec_u64(value: int) -> str:
    """Format an unsigned 64-bit integer as decimal digits."""
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"value out of unsigned 64-bit range: {value}")
    return str(value)