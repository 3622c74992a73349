"""
Hash-based random sampling for the erosion simulation.

Every scalar is produced by hashing a 32-bit seed. The seeds themselves
come from a caller-owned counter source, so reseeding with the same value
always reproduces the same scalar and the hash keeps no sequence state.
"""

from typing import List, Tuple

import numpy as np

UINT32_MAX = 0xFFFFFFFF


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & UINT32_MAX


def pcg_hash(value: int) -> int:
    """
    PCG hash: multiply, xorshift, multiply, xorshift.

    Pure and deterministic, the same input always yields the same output.
    """
    state = _uint32(_uint32(value) * 747796405 + 2891336453)
    word = _uint32(((state >> ((state >> 28) + 4)) ^ state) * 277803737)
    return _uint32((word >> 22) ^ word)


def random_double(seed: int) -> float:
    """Map a seed to a float in [0, 1]."""
    return pcg_hash(seed) / UINT32_MAX


def random_double_range(seed: int, lo: float, hi: float) -> float:
    """Map a seed to a float in [lo, hi]."""
    return lo + random_double(seed) * (hi - lo)


class RandomStream:
    """
    Explicit random source passed to everything that needs randomness.

    The stream owns the counter that feeds fresh seeds into the hash. The
    counter is a seeded NumPy generator, so two streams built from the same
    seed produce the same draws in the same order.
    """

    def __init__(self, seed=None):
        """Initialize with an integer seed or SeedSequence (None draws one from the OS)."""
        # Add call counter
        self.call_count = 0
        if isinstance(seed, np.random.SeedSequence):
            self._seed_sequence = seed
        else:
            self._seed_sequence = np.random.SeedSequence(seed)
        self._counter = np.random.default_rng(self._seed_sequence)

    @property
    def entropy(self) -> int:
        """Entropy the stream was built from, usable to reproduce a run."""
        return self._seed_sequence.entropy

    def next_seed(self) -> int:
        """Advance the counter and return a fresh 32-bit seed."""
        self.call_count += 1
        return int(self._counter.integers(0, UINT32_MAX, endpoint=True))

    def uniform(self) -> float:
        """Generate next random number in [0, 1]."""
        return random_double(self.next_seed())

    def uniform_range(self, lo: float, hi: float) -> float:
        """Generate next random number in [lo, hi]."""
        return random_double_range(self.next_seed(), lo, hi)

    def random_position(self, width: float, height: float) -> Tuple[float, float]:
        """Draw a point in [0, width] x [0, height] from two independent seeds."""
        x = self.uniform_range(0.0, width)
        y = self.uniform_range(0.0, height)
        return (x, y)

    def spawn(self, n: int) -> List["RandomStream"]:
        """Derive `n` independent, deterministic child streams."""
        return [RandomStream(child) for child in self._seed_sequence.spawn(n)]
