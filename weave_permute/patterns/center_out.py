import numpy as np


def get_permutation(size: int) -> np.ndarray:
    """Start at the middle column and alternate outwards, left side first."""
    if size <= 0:
        raise ValueError("size must be a positive integer")
    mid = (size - 1) // 2
    order = [mid]
    left, right = mid - 1, mid + 1
    while left >= 0 or right < size:
        if left >= 0:
            order.append(left)
            left -= 1
        if right < size:
            order.append(right)
            right += 1
    return np.array(order, dtype=np.int64)
