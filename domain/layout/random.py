from typing import Callable

Rng = Callable[[], float]

_MASK32 = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _MASK32
    return value - 0x100000000 if value & 0x80000000 else value


def hash_string(value: str) -> int:
    """
    31-multiplier string hash over UTF-16 code units with 32-bit signed
    wraparound, returned as an absolute value. Bit-compatible with the
    browser views so the same labels land in the same sectors.
    """
    data = value.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = _to_int32((h << 5) - h + code_unit)
    return abs(h)


def mulberry32(seed: int) -> Rng:
    """Returns a generator of floats in [0, 1)."""
    state = seed & _MASK32

    def next_float() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK32
        x = ((state ^ (state >> 15)) * (1 | state)) & _MASK32
        x ^= (x + (((x ^ (x >> 7)) * (61 | x)) & _MASK32)) & _MASK32
        return ((x ^ (x >> 14)) & _MASK32) / 4294967296

    return next_float


def derive_rng(*parts) -> Rng:
    """Independent stream per key, e.g. derive_rng(target, node_id)."""
    return mulberry32(hash_string(":".join(str(part) for part in parts)))
