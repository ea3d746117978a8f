class PatternValidationError(ValueError):
    """Base class for malformed pattern definitions.

    index : position in the pattern that failed, or None
    value : offending value, or None
    """

    def __init__(self, message, index=None, value=None):
        super().__init__(message)
        self.index = index
        self.value = value


class SizeMismatch(PatternValidationError):
    """Pattern length differs from its declared size, or size is not positive."""


class InvalidRange(PatternValidationError):
    """A pattern value is not an integer in [1, size]."""


class DuplicateValue(PatternValidationError):
    """A pattern value appears more than once."""


class EmptyBuffer(ValueError):
    """Pixel buffer has no pixels or inconsistent dimensions."""


class ProcessingCancelled(RuntimeError):
    """Raised when a permutation run is cancelled at a slice boundary."""
