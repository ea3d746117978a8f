import numpy as np


def get_permutation(size: int) -> np.ndarray:
    """Identity ordering (baseline)."""
    if size <= 0:
        raise ValueError("size must be a positive integer")
    return np.arange(size, dtype=np.int64)
