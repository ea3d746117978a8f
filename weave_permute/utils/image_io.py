import os
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from weave_permute.utils.pixel_buffer import PixelBuffer

SUPPORTED_EXTENSIONS = {".bmp", ".jpg", ".jpeg", ".png"}
DEFAULT_MAX_BYTES = 50 * 1024 * 1024

_SAVE_FORMATS = {
    "png": ("PNG", "png"),
    "jpg": ("JPEG", "jpg"),
    "jpeg": ("JPEG", "jpg"),
    "bmp": ("BMP", "bmp"),
}


class UnsupportedImageError(ValueError):
    """The uploaded file cannot be turned into a pixel buffer."""


def _normalize_format(fmt: str) -> tuple[str, str]:
    key = fmt.lower().lstrip(".")
    if key not in _SAVE_FORMATS:
        raise ValueError(f"Unsupported output format '{fmt}'. Choose from png, jpg, bmp.")
    return _SAVE_FORMATS[key]


def load_image(path, max_bytes: int | None = DEFAULT_MAX_BYTES) -> PixelBuffer:
    """Decode a BMP, JPEG or PNG file into an RGBA PixelBuffer."""
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedImageError(f"Please provide a BMP, JPEG, or PNG image file, got '{path.name}'")
    size = os.path.getsize(path)
    if max_bytes is not None and size > max_bytes:
        raise UnsupportedImageError(
            f"File size must be less than {max_bytes / 1024 / 1024:.0f}MB, got {size / 1024 / 1024:.2f}MB"
        )
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
            array = np.array(rgba, dtype=np.uint8)
    except (UnidentifiedImageError, OSError) as exc:
        raise UnsupportedImageError(f"Failed to load image file '{path.name}'") from exc
    return PixelBuffer.from_array(array)


def to_image(buffer: PixelBuffer) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(buffer.data))


def save_image(buffer: PixelBuffer, path, fmt: str | None = None, jpeg_quality: int = 90) -> Path:
    """
    Encode buffer to disk.

    fmt : 'png', 'jpg' or 'bmp'; inferred from the path suffix when None.
    JPEG has no alpha channel, so alpha is dropped for 'jpg'.

    """
    path = Path(path)
    pil_format, _ = _normalize_format(fmt or path.suffix)
    img = to_image(buffer)
    path.parent.mkdir(parents=True, exist_ok=True)
    if pil_format == "JPEG":
        img.convert("RGB").save(path, format=pil_format, quality=jpeg_quality)
    else:
        img.save(path, format=pil_format)
    return path


def output_path_for(source, fmt: str = "png", suffix: str = "_processed", output_dir=None) -> Path:
    """Return '<stem><suffix>.<ext>' next to source, or inside output_dir."""
    source = Path(source)
    _, extension = _normalize_format(fmt)
    directory = Path(output_dir) if output_dir is not None else source.parent
    return directory / f"{source.stem}{suffix}.{extension}"
