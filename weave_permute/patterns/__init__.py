"""Preset column orderings for pattern slices."""

from .registry import get_pattern, inverse_permutation, list_patterns

__all__ = ["get_pattern", "inverse_permutation", "list_patterns"]
