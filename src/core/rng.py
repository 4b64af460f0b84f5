# core/rng.py
from typing import List, Optional

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Returns a generator of uniform doubles in [0, 1).
    A fixed seed gives a reproducible stream; None draws fresh OS entropy.
    """
    return np.random.default_rng(seed)


def spawn_rngs(seed: Optional[int], n: int) -> List[np.random.Generator]:
    """
    Derives n statistically independent generators from a single seed.
    Each unit of parallel work owns one, so no generator is ever shared.
    """
    children = np.random.SeedSequence(seed).spawn(n)
    return [np.random.default_rng(child) for child in children]
