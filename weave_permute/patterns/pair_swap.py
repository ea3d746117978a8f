import numpy as np


def get_permutation(size: int) -> np.ndarray:
    """Swap neighbouring column pairs; an odd last column stays in place."""
    if size <= 0:
        raise ValueError("size must be a positive integer")
    order = np.arange(size, dtype=np.int64)
    even = size - size % 2
    order[:even] = order[:even].reshape(-1, 2)[:, ::-1].reshape(-1)
    return order
