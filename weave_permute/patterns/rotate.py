import numpy as np


def get_permutation(size: int, shift: int = 1) -> np.ndarray:
    """Cyclic shift: destination column j takes source column (j + shift) mod size."""
    if size <= 0:
        raise ValueError("size must be a positive integer")
    return np.roll(np.arange(size, dtype=np.int64), -shift)
