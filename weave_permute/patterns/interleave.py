import numpy as np


def get_permutation(size: int) -> np.ndarray:
    """Odd columns first, then even columns (1, 3, 5, ..., 2, 4, ...)."""
    if size <= 0:
        raise ValueError("size must be a positive integer")
    cols = np.arange(size, dtype=np.int64)
    return np.concatenate([cols[0::2], cols[1::2]])
