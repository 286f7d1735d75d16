from __future__ import annotations

from typing import Callable, Optional

import numpy as np

INITIAL_COUNT = 50
REINFORCE_INCREMENT = 3
PENALTY_DECREMENT = 1

Sampler = Callable[[np.ndarray], int]


def weighted_sampler(rng: Optional[np.random.Generator] = None) -> Sampler:
    """Return a sampler drawing an index with probability proportional to its count.

    The draw is done on integers so entries with a zero count are never chosen.
    """
    rng = rng or np.random.default_rng()

    def sample(counts: np.ndarray) -> int:
        total = int(counts.sum())
        if total <= 0:
            raise ValueError("Cannot sample from a bag whose counts sum to zero.")
        ticket = int(rng.integers(total))
        return int(np.searchsorted(np.cumsum(counts), ticket, side="right"))

    return sample


class Bag:
    """Weighted move counts for a single decision state."""

    def __init__(self, size: int, *, sampler: Optional[Sampler] = None) -> None:
        if size <= 0:
            raise ValueError(f"Bag size must be positive, got {size}")
        self.counts = np.full(size, INITIAL_COUNT, dtype=np.int64)
        self._sampler = sampler or weighted_sampler()

    def __len__(self) -> int:
        return len(self.counts)

    def __repr__(self) -> str:
        return f"Bag({self.counts.tolist()})"

    def choose(self) -> int:
        choice = int(self._sampler(self.counts))
        if not 0 <= choice < len(self.counts):
            raise RuntimeError(f"sampler returned {choice} for a bag of size {len(self.counts)}")
        return choice

    def reinforce(self, index: int) -> None:
        self.counts[index] += REINFORCE_INCREMENT

    def penalize(self, index: int) -> None:
        if self.counts[index] > 0:
            self.counts[index] -= PENALTY_DECREMENT
        # An all-zero bag would leave nothing to sample; start the state over.
        if int(self.counts.sum()) == 0:
            self.reset()

    def reset(self) -> None:
        self.counts[:] = INITIAL_COUNT

    def snapshot(self) -> np.ndarray:
        return self.counts.copy()
