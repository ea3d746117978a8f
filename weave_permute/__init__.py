"""Pattern-driven column permutation of RGBA images for textile mockups."""

from .engine import PermutationEngine, PermutationRun, SliceProgress, ValidatedPattern, validate_pattern
from .errors import (
    DuplicateValue,
    EmptyBuffer,
    InvalidRange,
    PatternValidationError,
    ProcessingCancelled,
    SizeMismatch,
)
from .utils.pixel_buffer import PixelBuffer

__all__ = [
    "PermutationEngine",
    "PermutationRun",
    "SliceProgress",
    "ValidatedPattern",
    "validate_pattern",
    "PixelBuffer",
    "PatternValidationError",
    "SizeMismatch",
    "InvalidRange",
    "DuplicateValue",
    "EmptyBuffer",
    "ProcessingCancelled",
]
