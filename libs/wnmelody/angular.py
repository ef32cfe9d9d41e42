"""Angular generator: deterministic pseudo-chaotic selection.

The sequence ``angular(i, k) = i * i * k (mod tau)`` walks around the circle
in a way that looks irregular for most ``k`` yet is exactly reproducible,
which makes it a drop-in replacement for a seeded RNG when the same piece has
to come out identically on every run.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

TAU = math.tau
PHI = 0.61803398874989484820  # golden ratio conjugate, a well-spread k

# largest double strictly below 1.0
_BELOW_ONE = 1.0 - 2.0 ** -53


def angular(i: float, k: float) -> float:
    """Return ``i * i * k`` reduced modulo tau, in ``[0, tau)``.

    The reduction is applied after each multiplication so large indices never
    lose precision to an overflowing intermediate product.
    """
    a = math.fmod(math.fmod(i, TAU) * i, TAU)
    value = math.fmod(a * k, TAU)
    if value < 0.0:
        value += TAU
        if value >= TAU:
            value = 0.0
    return value


def angular_normalized(i: float, k: float) -> float:
    """Return ``angular(i, k)`` mapped to ``[0, 1)``."""
    return min(angular(i, k) / TAU, _BELOW_ONE)


def select_index(i: float, k: float, n: int) -> int:
    """Pick an index in ``[0, n)``."""
    if n <= 0:
        raise ValueError(f"Cannot select an index from {n} choices (must be positive)")
    return min(int(math.floor(n * angular_normalized(i, k))), n - 1)


def select_from(i: float, k: float, values: Sequence[T]) -> T:
    """Pick an element of ``values``."""
    if len(values) == 0:
        raise ValueError("Cannot select from an empty collection")
    return values[select_index(i, k, len(values))]


def odds(i: float, k: float, threshold: float = 0.5) -> bool:
    """Return True for roughly ``threshold`` of all indices."""
    return angular_normalized(i, k) < threshold


__all__ = [
    "TAU",
    "PHI",
    "angular",
    "angular_normalized",
    "select_index",
    "select_from",
    "odds",
]
