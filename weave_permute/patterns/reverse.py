import numpy as np


def get_permutation(size: int) -> np.ndarray:
    """Mirror each slice left to right."""
    if size <= 0:
        raise ValueError("size must be a positive integer")
    return np.arange(size, dtype=np.int64)[::-1].copy()
