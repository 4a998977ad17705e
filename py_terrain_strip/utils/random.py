"""
Random number generation utilities.

Every generation call gets its own ``numpy.random.Generator`` so that a
seed fully determines the output. Nothing here touches NumPy's or Python's
global random state.
"""

import hashlib
from typing import Optional, Union

import numpy as np

Seed = Union[int, str]


def seed_to_int(seed: Seed) -> int:
    """
    Convert a seed into a non-negative integer usable by NumPy.

    Integer seeds are masked to 64 bits; string seeds are hashed so that
    e.g. ``"demo123"`` always maps to the same stream.

    Args:
        seed: Integer or string seed

    Returns:
        Non-negative 64-bit integer
    """
    if isinstance(seed, str):
        digest = hashlib.sha256(seed.encode("utf-8")).digest()
        return int.from_bytes(digest[:8], "little")
    return int(seed) & ((1 << 64) - 1)


def make_rng(seed: Optional[Seed] = None) -> np.random.Generator:
    """
    Create a fresh generator.

    Args:
        seed: Optional integer or string seed; ``None`` draws OS entropy

    Returns:
        numpy Generator instance
    """
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(seed_to_int(seed))
