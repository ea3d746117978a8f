import numpy as np

from weave_permute.validation import ValidatedPattern, inverse_permutation, validate_pattern

from .identity import get_permutation as identity
from .reverse import get_permutation as reverse
from .interleave import get_permutation as interleave
from .pair_swap import get_permutation as pair_swap
from .center_out import get_permutation as center_out
from .rotate import get_permutation as rotate

PRESETS = {
    "identity": identity,
    "reverse": reverse,
    "interleave": interleave,
    "pair_swap": pair_swap,
    "center_out": center_out,
    "rotate": rotate,
}

ALIASES = {
    "mirror": "reverse",
    "weave": "interleave",
}

__all__ = ["PRESETS", "get_pattern", "get_permutation", "inverse_permutation", "list_patterns"]


def list_patterns() -> list[str]:
    """Return supported canonical preset names."""
    return sorted(PRESETS.keys())


def get_permutation(size: int, name: str | None) -> np.ndarray:
    """Return the 0-based permutation for the given preset name.

    Args:
        size: slice width in columns
        name: preset name; None defaults to identity
    """
    key = "identity" if name is None else name
    key = ALIASES.get(key, key)

    if key not in PRESETS:
        raise ValueError(
            f"Unknown pattern '{name}'. Available patterns: {', '.join(list_patterns())}"
        )

    return PRESETS[key](size)


def get_pattern(size: int, name: str | None) -> ValidatedPattern:
    """Return a preset as a validated 1-based pattern."""
    perm = get_permutation(size, name)
    return validate_pattern(size, (perm + 1).tolist())
