"""
CRT power-off effects.

Each effect is a pure function of (config, source raster, progress) that
allocates and returns its own (H, W, 4) uint8 canvas. The source is only
ever read.

- Vertical stretch: the R, G and B channels are squeezed towards the
  horizontal centre line by slightly different eased factors, giving the
  colour fringing of a collapsing beam.
- Horizontal stretch: the collapsed picture as a single bright line that
  shrinks towards the centre and dims.
- Scale down: the whole picture shrinks uniformly and dims.
- Fade: alpha ramp.
"""

import numpy as np

from electronbeam.core.canvas import (
    OPAQUE_BLACK,
    TRANSPARENT_BLACK,
    add_highlight,
    new_canvas,
    resize_raster,
)
from electronbeam.core.config import AnimationMode, BeamConfig
from electronbeam.core.easing import scurve

# Steepness of the per-channel easing; the spread between them sets how
# far the colour fringes separate.
RED_STEEPNESS = 7.5
GREEN_STEEPNESS = 8.0
BLUE_STEEPNESS = 8.5

LINE_HEIGHT = 2.0


def fade(config: BeamConfig, source: np.ndarray, level: float) -> np.ndarray:
    """
    Scale the source's alpha channel by the level.

    Warm-up fades in (alpha = level); every other mode fades out
    (alpha = 1 - level). RGB is copied unchanged.
    """
    alpha = level if config.mode is AnimationMode.WARM_UP else 1.0 - level

    canvas = source.copy()
    canvas[:, :, 3] = (source[:, :, 3].astype(np.float32) * alpha).astype(np.uint8)
    return canvas


def scale_down(config: BeamConfig, source: np.ndarray, level: float) -> np.ndarray:
    """
    Shrink the source towards the centre of an opaque black canvas.

    Args:
        config: Renderer configuration.
        source: (H, W, 4) uint8 source raster at config dimensions.
        level: Animation level in [0, 1].

    Returns:
        (H, W, 4) uint8 canvas.
    """
    width, height = config.width, config.height
    canvas = new_canvas(width, height, OPAQUE_BLACK)

    curved = scurve(level, 8.0)
    warming = config.mode is AnimationMode.WARM_UP
    scale = curved if warming else 1.0 - curved

    new_w = int(width * scale)
    new_h = int(height * scale)
    if new_w <= 0 or new_h <= 0:
        return canvas

    if (new_w, new_h) == (width, height):
        scaled = source
    else:
        scaled = resize_raster(source, new_w, new_h)
    offset_x = (width - new_w) // 2
    offset_y = (height - new_h) // 2

    # Shutting off dims faster than it shrinks
    dim_factor = scale if warming else scale * (1.0 - curved * 0.5)
    dimmed = scaled.copy()
    dimmed[:, :, :3] = (scaled[:, :, :3].astype(np.float32) * dim_factor).astype(np.uint8)

    # Slicing clips anything that would land outside the canvas
    region = canvas[offset_y:offset_y + new_h, offset_x:offset_x + new_w]
    region[:] = dimmed[:region.shape[0], :region.shape[1]]
    return canvas


def vertical_stretch(config: BeamConfig, source: np.ndarray, progress: float) -> np.ndarray:
    """
    Render the vertical collapse phase with chromatic separation.

    Each colour channel is sampled with its own eased stretch factor and
    added onto a transparent canvas. Where the three passes overlap they
    recombine into the original colours; as progress grows they drift
    apart into red, green and blue fringes. Cool-down adds a white
    highlight that brightens as the picture collapses.

    Args:
        config: Renderer configuration.
        source: (H, W, 4) uint8 source raster at config dimensions.
        progress: Local progress of the vertical phase in [0, 1].

    Returns:
        (H, W, 4) uint8 canvas.
    """
    canvas = new_canvas(config.width, config.height, TRANSPARENT_BLACK)

    ar = scurve(progress, RED_STEEPNESS)
    ag = scurve(progress, GREEN_STEEPNESS)
    ab = scurve(progress, BLUE_STEEPNESS)

    for channel, factor in enumerate((ar, ag, ab)):
        _stretch_channel(canvas, source, factor, channel)

    if config.mode is AnimationMode.COOL_DOWN:
        add_highlight(canvas, ag)

    return canvas


def _stretch_channel(
    canvas: np.ndarray,
    source: np.ndarray,
    factor: float,
    channel: int,
) -> None:
    """Additively draw one channel of the source, widened and flattened by ``factor``."""
    height, width = canvas.shape[:2]

    stretched_w = width + width * factor
    stretched_h = height - height * factor
    x_offset = (width - stretched_w) * 0.5
    y_offset = (height - stretched_h) * 0.5

    xs = np.arange(width, dtype=np.float64)
    ys = np.arange(height, dtype=np.float64)
    cols = xs[(xs >= x_offset) & (xs < x_offset + stretched_w)]
    rows = ys[(ys >= y_offset) & (ys < y_offset + stretched_h)]
    if cols.size == 0 or rows.size == 0:
        return

    src_x = _source_coords(cols, x_offset, stretched_w, width)
    src_y = _source_coords(rows, y_offset, stretched_h, height)
    sampled = source[src_y[:, None], src_x[None, :], channel]

    dst_y, dst_x = np.ix_(rows.astype(np.intp), cols.astype(np.intp))
    total = canvas[dst_y, dst_x, channel].astype(np.uint16) + sampled
    canvas[dst_y, dst_x, channel] = np.minimum(total, 255).astype(np.uint8)
    canvas[dst_y, dst_x, 3] = 255


def _source_coords(dest: np.ndarray, offset: float, extent: float, size: int) -> np.ndarray:
    """Nearest-neighbour source indices for destination coordinates along one axis."""
    if extent <= 0:
        return np.full(dest.shape, int(size * 0.5), dtype=np.intp)
    coords = (dest - offset) / extent * size
    # Snap values a rounding error below a whole pixel before truncating
    coords = np.floor(coords + 1e-9)
    return np.clip(coords, 0.0, size - 1.0).astype(np.intp)


def horizontal_stretch(config: BeamConfig, progress: float) -> np.ndarray:
    """
    Render the final beam collapse: a shrinking, dimming horizontal line.

    Args:
        config: Renderer configuration.
        progress: Local progress of the horizontal phase; 1 or more means
            fully collapsed.

    Returns:
        (H, W, 4) uint8 canvas, opaque black outside the line.
    """
    width, height = config.width, config.height
    canvas = new_canvas(width, height, OPAQUE_BLACK)

    # NaN falls through here too
    if not progress < 1.0:
        return canvas

    ag = scurve(progress, 8.0)
    line_width = 2.0 * width * (1.0 - ag)
    # Truncated, not rounded, like the line gray below
    x_start = max(0, int((width - line_width) * 0.5))
    x_end = min(int(x_start + line_width), width)

    y_center = height // 2
    half_height = int(LINE_HEIGHT * 0.5)
    y_start = max(y_center - half_height, 0)
    y_end = min(y_center + half_height, height - 1)

    intensity = 1.0 - ag * 0.75
    gray = int(255.0 * intensity)
    canvas[y_start:y_end + 1, x_start:x_end] = (gray, gray, gray, 255)
    return canvas
