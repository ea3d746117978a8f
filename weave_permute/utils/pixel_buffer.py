from dataclasses import dataclass

import numpy as np

from weave_permute.errors import EmptyBuffer

CHANNELS = 4


def _check_dimensions(width, height):
    if width < 1 or height < 1:
        raise EmptyBuffer(f"Pixel buffer must be at least 1x1, got {width}x{height}")


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Row-major RGBA pixels.

    width, height : int
        Image dimensions in pixels.

    data : ndarray of uint8, shape (height, width, 4)
        Read-only pixel array. The byte of pixel (x, y) channel c sits at
        flat offset ((y * width) + x) * 4 + c of ``to_bytes()``.

    """

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        _check_dimensions(self.width, self.height)
        expected = (self.height, self.width, CHANNELS)
        if self.data.shape != expected:
            raise ValueError(f"Pixel data has shape {self.data.shape}, expected {expected}")
        if self.data.dtype != np.uint8:
            raise ValueError(f"Pixel data must be uint8, got {self.data.dtype}")
        # private copy; the caller's array stays writable
        data = np.array(self.data, copy=True)
        data.flags.writeable = False
        object.__setattr__(self, "data", data)

    @classmethod
    def from_bytes(cls, width: int, height: int, raw) -> "PixelBuffer":
        _check_dimensions(width, height)
        expected = width * height * CHANNELS
        if len(raw) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(raw)}")
        data = np.frombuffer(bytes(raw), dtype=np.uint8).reshape(height, width, CHANNELS)
        return cls(width, height, data)

    @classmethod
    def from_array(cls, array) -> "PixelBuffer":
        """Build a buffer from an (h, w, 4), (h, w, 3) or (h, w) uint8 array.

        Missing channels are filled in as grey / opaque alpha.
        """
        array = np.asarray(array, dtype=np.uint8)
        if array.ndim == 2:
            array = np.repeat(array[:, :, None], 3, axis=2)
        if array.ndim != 3 or array.shape[2] not in (3, CHANNELS):
            raise ValueError(f"Unsupported pixel array shape {array.shape}")
        if array.shape[0] < 1 or array.shape[1] < 1:
            raise EmptyBuffer(f"Pixel buffer must be at least 1x1, got {array.shape[1]}x{array.shape[0]}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=2)
        height, width = array.shape[:2]
        return cls(width, height, array)

    @property
    def nbytes(self) -> int:
        return self.width * self.height * CHANNELS

    def to_bytes(self) -> bytes:
        return self.data.tobytes()

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return tuple(int(v) for v in self.data[y, x])

    def writable_copy(self) -> np.ndarray:
        """Return a fresh, writable copy of the pixel array."""
        return self.data.copy()

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )

    def __repr__(self):
        return f"PixelBuffer(width={self.width}, height={self.height})"
