"""
Random seed management for reproducibility.
"""

from __future__ import annotations

import random
from typing import Optional

import numpy as np


def set_seed(seed: int) -> None:
    """
    Set global random seeds for reproducibility.

    Sets seeds for:
    - Python random
    - NumPy legacy global state

    Args:
        seed: Random seed value
    """
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the generator injected into agents and game controllers.

    Args:
        seed: Random seed value (None draws fresh OS entropy)
    """
    return np.random.default_rng(seed)


def spawn_rngs(seed: Optional[int], count: int) -> list[np.random.Generator]:
    """Create `count` independent generators from one seed."""
    return [np.random.default_rng(s) for s in np.random.SeedSequence(seed).spawn(count)]
