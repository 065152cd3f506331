"""Random seed management for reproducible synthetic systems."""

from __future__ import annotations

import numpy as np


def set_seed(seed: int) -> np.random.Generator:
    """Seed the global NumPy and torch generators.

    Parameters
    ----------
    seed : int
        Random seed value.

    Returns
    -------
    rng : np.random.Generator
        A fresh generator seeded with ``seed``, for callers that prefer
        explicit generator passing.
    """
    np.random.seed(seed)
    try:
        import torch
        torch.manual_seed(seed)
    except ImportError:
        pass
    return np.random.default_rng(seed)
