"""
Seeded random source for the genetic solver.

A single SeededRandom instance is owned by one run and is the only source of
randomness used by the operators, so a fixed seed reproduces a run exactly.
"""

import hashlib
from typing import Any, Optional

import numpy as np


_SEED_MODULUS = 2 ** 63


def normalize_seed(seed: Any) -> Optional[int]:
    """
    Convert a user supplied seed into an integer usable by numpy.

    Integers (and integer strings) are taken modulo 2**63, which keeps
    negative seeds distinct from positive ones. Any other value is hashed so
    that e.g. a run name can serve as a seed.

    Args:
        seed: Seed value, or None for an entropy-seeded generator

    Returns:
        Non-negative integer seed, or None
    """
    if seed is None:
        return None
    if isinstance(seed, bool):
        return int(seed)
    if isinstance(seed, (int, np.integer)):
        return int(seed) % _SEED_MODULUS
    if isinstance(seed, str) and seed.strip().lstrip('-').isdigit():
        return int(seed) % _SEED_MODULUS

    digest = hashlib.sha256(str(seed).encode('utf-8')).hexdigest()
    return int(digest[:16], 16)


class SeededRandom:
    """Uniform integers and reals in bounded ranges from a seedable generator."""

    def __init__(self, seed: Any = None):
        self.seed = normalize_seed(seed)
        self._generator = np.random.default_rng(self.seed)

    def int_between(self, minimum: int, maximum: int) -> int:
        """Random integer in [minimum, maximum]."""
        if maximum < minimum:
            raise ValueError(f"Empty range: [{minimum}, {maximum}]")
        return int(self._generator.integers(minimum, maximum + 1))

    def real_between(self, minimum: float, maximum: float) -> float:
        """Random real in [minimum, maximum); the upper bound is never returned."""
        if maximum < minimum:
            raise ValueError(f"Empty range: [{minimum}, {maximum}]")
        return float(self._generator.uniform(minimum, maximum))

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed})"
