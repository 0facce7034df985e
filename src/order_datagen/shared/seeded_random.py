"""
Seeded pseudo-random number generation keyed by text.

Every random decision made by the order generator is derived from a seed
computed from a stable string key (a date, an item number, or both), never
from wall-clock time or the process-wide ``random`` state. This keeps the
generated orders identical across runs and across processes.

The string hash is the classic ``h * 31 + c`` polynomial over UTF-16 code
units with signed 32-bit wraparound, and the generator is Mulberry32: a
single 32-bit counter mixed through multiply/xorshift steps.
"""

from collections.abc import Iterator

_UINT32_MASK = 0xFFFFFFFF
_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _to_int32(value: int) -> int:
    """Reinterpret the low 32 bits of ``value`` as a signed integer."""
    value &= _UINT32_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def _imul(a: int, b: int) -> int:
    """32-bit integer multiplication keeping only the low 32 bits."""
    return (a * b) & _UINT32_MASK


def hash_string(text: str) -> int:
    """
    Hash a string to a non-negative integer for seeding.

    Args:
        text: Arbitrary string key (e.g. ``"2024-01-01-ITEM-001"``)

    Returns:
        Absolute value of the signed 32-bit rolling hash

    Examples:
        >>> hash_string("")
        0
        >>> hash_string("hello")
        99162322
    """
    # Lone surrogates hash as their raw code unit
    code_units = text.encode("utf-16-le", "surrogatepass")
    hash_value = 0
    for i in range(0, len(code_units), 2):
        char = code_units[i] | (code_units[i + 1] << 8)
        hash_value = _to_int32((hash_value << 5) - hash_value + char)
    return abs(hash_value)


class Mulberry32:
    """
    Reproducible stream of floats in ``[0, 1)``.

    Instances are callable: each call advances the 32-bit state by a fixed
    increment and returns the mixed result scaled to the unit interval.
    Two instances built from the same seed always produce the same stream.

    Attributes:
        seed: Seed the generator was constructed with
    """

    __slots__ = ("seed", "_state")

    def __init__(self, seed: int):
        if seed < 0:
            raise ValueError("seed must be >= 0")
        self.seed = seed
        self._state = seed & _UINT32_MASK

    def __call__(self) -> float:
        self._state = (self._state + _MULBERRY_INCREMENT) & _UINT32_MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _UINT32_MASK
        return ((t ^ (t >> 14)) & _UINT32_MASK) / _TWO_POW_32

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self()

    def __repr__(self) -> str:
        return f"Mulberry32(seed={self.seed})"


def seeded_random(seed: int) -> Mulberry32:
    """Create a fresh Mulberry32 stream for ``seed``."""
    return Mulberry32(seed)


def seeded_random_for_key(key: str) -> Mulberry32:
    """Create a fresh stream seeded by the hash of ``key``."""
    return Mulberry32(hash_string(key))
