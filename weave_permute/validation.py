import numbers
import warnings
from dataclasses import dataclass

import numpy as np

from weave_permute.errors import DuplicateValue, InvalidRange, SizeMismatch

RECOMMENDED_MIN_SIZE = 2
RECOMMENDED_MAX_SIZE = 24


def inverse_permutation(idx: np.ndarray) -> np.ndarray:
    """Return the inverse permutation for idx."""
    inv = np.empty_like(idx)
    inv[idx] = np.arange(len(idx), dtype=idx.dtype)
    return inv


def _as_int(value) -> int | None:
    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    return None


@dataclass(frozen=True)
class ValidatedPattern:
    """A permutation of 1..size that passed ``validate_pattern``.

    pattern[j] names the 1-based source column gathered into destination
    column j of every slice.
    """

    size: int
    pattern: tuple[int, ...]

    @property
    def indices(self) -> np.ndarray:
        """0-based gather indices."""
        return np.asarray(self.pattern, dtype=np.int64) - 1

    @property
    def is_identity(self) -> bool:
        return self.pattern == tuple(range(1, self.size + 1))

    def inverse(self) -> "ValidatedPattern":
        inv = inverse_permutation(self.indices)
        return ValidatedPattern(self.size, tuple(int(v) + 1 for v in inv))

    def as_list(self) -> list[int]:
        return list(self.pattern)


def validate_pattern(size, pattern) -> ValidatedPattern:
    """
    Check that pattern is a permutation of 1..size.

    size : int
        Slice width in columns. Any positive integer is accepted; values
        outside [2, 24] only trigger a RuntimeWarning.

    pattern : sequence of int
        For each destination column, the 1-based source column.

    Checks run in order and the first failure is raised: length
    (SizeMismatch), range (InvalidRange), uniqueness (DuplicateValue).

    """
    size_int = _as_int(size)
    if size_int is None or size_int < 1:
        raise SizeMismatch(f"Pattern size must be a positive integer, got {size!r}", value=size)

    values = list(pattern)
    if len(values) != size_int:
        raise SizeMismatch(
            f"Pattern has {len(values)} entries but size is {size_int}",
            value=len(values),
        )

    normalized = []
    for index, value in enumerate(values):
        as_int = _as_int(value)
        if as_int is None or not 1 <= as_int <= size_int:
            raise InvalidRange(
                f"Pattern value {value!r} at position {index + 1} must be an integer between 1 and {size_int}",
                index=index,
                value=value,
            )
        normalized.append(as_int)

    seen = {}
    for index, value in enumerate(normalized):
        if value in seen:
            raise DuplicateValue(
                f"Pattern value {value} at position {index + 1} repeats position {seen[value] + 1}",
                index=index,
                value=value,
            )
        seen[value] = index

    if not RECOMMENDED_MIN_SIZE <= size_int <= RECOMMENDED_MAX_SIZE:
        warnings.warn(
            f"Pattern size {size_int} is outside the recommended range "
            f"[{RECOMMENDED_MIN_SIZE}, {RECOMMENDED_MAX_SIZE}].",
            RuntimeWarning,
        )

    return ValidatedPattern(size_int, tuple(normalized))


def parse_pattern_text(text: str) -> list:
    """Split '3,1,2' into values; non-numeric items are kept so validation can name them."""
    values = []
    for item in text.split(","):
        item = item.strip()
        try:
            values.append(int(item))
        except ValueError:
            values.append(item)
    return values
