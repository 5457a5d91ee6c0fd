"""
Image decoding.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from electronbeam.core.errors import ImageError

logger = logging.getLogger(__name__)


def load_image(path: Union[str, Path]) -> np.ndarray:
    """
    Decode an image file into an RGBA8 array.

    Args:
        path: Any format Pillow can read (PNG, JPEG, GIF first frame, ...).

    Returns:
        (H, W, 4) uint8 array.

    Raises:
        ImageError: The file is missing or cannot be decoded.
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
    except (FileNotFoundError, UnidentifiedImageError, OSError) as exc:
        raise ImageError(f"Failed to open image: {path}: {exc}") from exc

    logger.info("Loaded %s (%dx%d)", path, rgba.width, rgba.height)
    return np.array(rgba, dtype=np.uint8)


def save_image(frame: np.ndarray, path: Union[str, Path]) -> Path:
    """Write a single RGBA or RGB frame, format chosen by suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        Image.fromarray(np.ascontiguousarray(frame)).save(path)
    except (ValueError, OSError) as exc:
        raise ImageError(f"Failed to save image: {path}: {exc}") from exc
    return path
