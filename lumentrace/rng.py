"""Shared pseudo-random source used throughout the renderer."""

from __future__ import annotations

import random
import time

_generator = random.Random(time.time_ns())


def seed(value: int | float | str | bytes | None) -> None:
    """Reseed the shared generator so that later draws are reproducible."""
    _generator.seed(value)


def rnd_int(low: int, high: int) -> int:
    """Return a random integer in the closed range [low, high]."""
    if high < low:
        raise ValueError(f"empty range: [{low}, {high}]")
    return _generator.randint(low, high)


def rnd_double() -> float:
    """Return a random float in the half-open range [0, 1)."""
    return _generator.random()


def rnd_dbl(low: float, high: float) -> float:
    """Return a random float in the half-open range [low, high)."""
    return low + (high - low) * rnd_double()