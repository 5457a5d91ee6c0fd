"""
RGBA8 canvas helpers.

A canvas is an ``(H, W, 4)`` uint8 numpy array. These helpers allocate
canvases, normalize incoming rasters, resample them with Pillow and
composite the overlays the effects need.
"""

import numpy as np
from PIL import Image

from electronbeam.core.errors import ImageError

TRANSPARENT_BLACK = (0, 0, 0, 0)
OPAQUE_BLACK = (0, 0, 0, 255)


def new_canvas(
    width: int,
    height: int,
    color: tuple[int, int, int, int] = TRANSPARENT_BLACK,
) -> np.ndarray:
    """
    Allocate a canvas filled with a single RGBA color.

    Args:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        color: RGBA fill value.

    Returns:
        (height, width, 4) uint8 array.
    """
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:] = color
    return canvas


def as_rgba(raster) -> np.ndarray:
    """
    Coerce a PIL image or numpy array into an RGBA8 array.

    RGB arrays gain an opaque alpha channel. The result never shares
    memory with the input.
    """
    if isinstance(raster, Image.Image):
        return np.array(raster.convert("RGBA"), dtype=np.uint8)

    arr = np.asarray(raster)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ImageError(
            f"Expected an (H, W, 4) RGBA or (H, W, 3) RGB raster, got shape {arr.shape}"
        )
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ImageError(f"Raster has no pixels: shape {arr.shape}")
    if arr.dtype != np.uint8:
        raise ImageError(f"Expected uint8 pixels, got {arr.dtype}")

    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([arr, alpha], axis=2)
    return arr.copy()


def resize_raster(
    raster: np.ndarray,
    width: int,
    height: int,
    resample: int = Image.LANCZOS,
) -> np.ndarray:
    """
    Resample an RGBA8 raster to ``width`` x ``height``.

    Args:
        raster: (H, W, 4) uint8 array.
        width: Target width.
        height: Target height.
        resample: Pillow resampling filter (Lanczos by default).

    Returns:
        (height, width, 4) uint8 array.
    """
    try:
        img = Image.fromarray(np.ascontiguousarray(raster))
        resized = img.resize((width, height), resample)
    except (ValueError, TypeError, OSError) as exc:
        raise ImageError(f"Failed to resize raster to {width}x{height}: {exc}") from exc
    return np.array(resized, dtype=np.uint8)


def add_highlight(canvas: np.ndarray, intensity: float) -> np.ndarray:
    """
    Add a uniform white highlight to the RGB channels in place.

    Values saturate at 255; alpha is left untouched.

    Args:
        canvas: (H, W, 4) uint8 array, modified in place.
        intensity: Highlight strength (0-1).

    Returns:
        The same canvas.
    """
    value = int(255.0 * intensity)
    if value <= 0:
        return canvas

    rgb = canvas[:, :, :3].astype(np.uint16) + value
    canvas[:, :, :3] = np.minimum(rgb, 255).astype(np.uint8)
    return canvas


def flatten_alpha(
    frame: np.ndarray,
    background: tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """
    Composite an RGBA frame onto an opaque background.

    Args:
        frame: (H, W, 4) uint8 array.
        background: RGB background color.

    Returns:
        (H, W, 3) uint8 RGB array.
    """
    rgb = frame[:, :, :3].astype(np.float32)
    alpha = frame[:, :, 3:4].astype(np.float32) / 255.0
    bg = np.asarray(background, dtype=np.float32)

    out = rgb * alpha + bg * (1.0 - alpha)
    return np.clip(out, 0, 255).astype(np.uint8)
