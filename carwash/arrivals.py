# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# arrivals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Sources of inter-arrival offsets for the car wash event loop.
#
# Design notes:
#   - A source is any object with next_offset(bound) -> int in [0, bound).
#     The simulator never builds its own RNG when one is injected, which is
#     what makes runs replayable in tests.
#   - UniformArrivals owns a private random.Random so replications seeded
#     differently never share state through the module-level generator.
#
# Usage:
#   from carwash.arrivals import UniformArrivals, FixedArrivals
# -----------------------------------------------------------------------------

from __future__ import annotations
import random
from itertools import cycle
from typing import Iterable, Optional

def car_name(time_index: int) -> str:
    """Queue label for a car arriving at time_index (Car00042)."""
    return f"Car{time_index:05d}"


class UniformArrivals:
    """Uniform integer offsets in [0, bound) from a seeded generator."""
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def next_offset(self, bound: int) -> int:
        return self.rng.randrange(bound)


class FixedArrivals:
    """Replay a fixed offset sequence, cycling when it runs out.

    Offsets are clamped into [0, bound) so a sequence written for one
    arrival interval stays legal under a smaller one.
    """
    def __init__(self, offsets: Iterable[int]):
        self.offsets = list(offsets)
        if not self.offsets:
            raise ValueError("FixedArrivals needs at least one offset")
        if any(o < 0 for o in self.offsets):
            raise ValueError(f"offsets must be non-negative, got {self.offsets}")
        self._it = cycle(self.offsets)
        self.drawn = 0

    def next_offset(self, bound: int) -> int:
        self.drawn += 1
        return min(next(self._it), bound - 1)
