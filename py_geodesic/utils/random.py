"""
Random number generation utilities.

Every randomized step of network generation draws from a
``numpy.random.Generator`` passed in by the caller, so tests can pin the
stream while production code gets fresh values on each regeneration.
"""

import hashlib
from typing import Union

import numpy as np

Seed = Union[str, int, None]


def seed_to_int(seed: Union[str, int]) -> int:
    """
    Turn a seed string or number into an integer seed.

    Strings are hashed so that "demo" always maps to the same integer
    across processes (``hash()`` is salted per process).
    """
    if isinstance(seed, int):
        return seed
    digest = hashlib.sha256(str(seed).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


def make_rng(seed: Seed = None) -> np.random.Generator:
    """
    Create a generator for one generation pass.

    Args:
        seed: Seed string or number, or None for fresh OS entropy

    Returns:
        numpy Generator
    """
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(seed_to_int(seed))
