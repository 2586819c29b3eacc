"""Random draws used by the wheel spin and the simulated rival."""

import random

RIVAL_BASELINE_RANGE = (100, 150)
RIVAL_INCREMENT_RANGE = (60, 100)


class RandomSource:
    """Injectable source of randomness.

    Tests subclass this (or pass a seeded ``random.Random``) to force
    deterministic spins and rival scores.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def pick_index(self, count: int) -> int:
        """Uniform index in [0, count)."""
        return self._rng.randrange(count)

    def rival_baseline(self) -> int:
        return self._rng.randrange(*RIVAL_BASELINE_RANGE)

    def rival_increment(self) -> int:
        return self._rng.randrange(*RIVAL_INCREMENT_RANGE)

    def jitter(self, spread: float) -> float:
        """Uniform offset in [-spread, spread)."""
        return self._rng.uniform(-spread, spread)
