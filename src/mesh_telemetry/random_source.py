"""Injectable randomness for the series generator.

Tests pass a SeededRandomSource and assert exact output; interactive use gets
a SystemRandomSource. Nothing in the engine touches the global `random` state.
"""

from __future__ import annotations

import random
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    def uniform(self, low: float, high: float) -> float:
        """Return a float drawn uniformly from [low, high]."""
        ...


class SeededRandomSource:
    """Deterministic source; the same seed replays the same draws."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._rng = random.Random(seed)  # noqa: S311

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self.seed!r})"


class SystemRandomSource:
    """Non-deterministic source backed by the OS entropy pool."""

    def __init__(self) -> None:
        self._rng = random.SystemRandom()

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)


class FixedRandomSource:
    """Always returns the same point inside the requested band.

    `position` 0.0 yields the low end, 1.0 the high end. Useful for pinning
    a series to its pure oscillation shape.
    """

    def __init__(self, position: float = 0.5) -> None:
        if not 0.0 <= position <= 1.0:
            raise ValueError(f"position must be within [0, 1], got {position}")
        self.position = position

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.position


def make_random_source(seed: int | None = None) -> RandomSource:
    if seed is None:
        return SystemRandomSource()
    return SeededRandomSource(seed)
