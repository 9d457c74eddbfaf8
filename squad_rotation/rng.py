# squad_rotation/rng.py
"""
Seeded randomness for player-order shuffling and objective tie-breaks.

The stream is mulberry32 over unsigned 32-bit arithmetic so a human readable
seed (e.g. a week label) reproduces the same schedule anywhere.
"""
from __future__ import annotations
import math
from datetime import datetime
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_TWO_32 = 4294967296.0
_WEEK_SECONDS = 7 * 24 * 60 * 60


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def make_rng(seed: int) -> Callable[[], float]:
    """Return a stateful generator of floats in [0, 1). Same seed, same stream."""
    state = int(seed) & _MASK32

    def rng() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK32
        t = _imul(state ^ (state >> 15), 1 | state)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_32

    return rng


def hash_to_seed(text: str) -> int:
    """Map any string to a non-negative 32-bit seed (31-multiplier rolling hash)."""
    h = 0
    # surrogatepass keeps lone surrogates as raw code units
    data = str(text).encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (((h << 5) - h) + unit) & _MASK32
    if h & 0x80000000:
        h -= 1 << 32
    return abs(h)


def current_week_label(now: Optional[datetime] = None) -> str:
    """Default seed: 'YYYY-WW', week counted from 1 January."""
    now = now or datetime.now()
    start = datetime(now.year, 1, 1)
    elapsed = (now - start).total_seconds()
    week = math.ceil(elapsed / _WEEK_SECONDS)
    return f"{now.year}-{week:02d}"


def shuffle(items: Sequence[T], rng: Callable[[], float]) -> List[T]:
    """Fisher-Yates on a copy."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = math.floor(rng() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out
