"""
Synthetic test images for trying out the animator.

Usage:
    electron-beam-testimages [output_dir]
"""

import argparse
import sys
from pathlib import Path

import numpy as np

from electronbeam.core.errors import ElectronBeamError
from electronbeam.io.loader import save_image

BRIGHT_CYAN = np.array([0, 255, 255], dtype=np.float32)
DIM_CYAN = np.array([0, 180, 180], dtype=np.float32)

RING_COLORS = np.array(
    [
        [255, 80, 80],  # red
        [80, 255, 80],  # green
        [80, 80, 255],  # blue
        [255, 255, 80],  # yellow
    ],
    dtype=np.float32,
)


def _opaque(rgb: np.ndarray) -> np.ndarray:
    h, w = rgb.shape[:2]
    alpha = np.full((h, w, 1), 255, dtype=np.uint8)
    return np.concatenate([rgb.astype(np.uint8), alpha], axis=2)


def create_gradient_image(width: int = 640, height: int = 480) -> np.ndarray:
    """Colour gradient modulated by a soft wave pattern."""
    x = np.arange(width, dtype=np.float32)[None, :]
    y = np.arange(height, dtype=np.float32)[:, None]

    r = np.floor(255.0 * x / width) * np.ones_like(y)
    g = np.floor(255.0 * y / height) * np.ones_like(x)
    b = np.floor(255.0 * (x + y) / (width + height))

    wave_x = np.sin(2.0 * np.pi * x / width * 4.0)
    wave_y = np.sin(2.0 * np.pi * y / height * 3.0)
    wave = ((wave_x + wave_y) * 0.5 + 1.0) * 0.5
    gain = 0.7 + 0.3 * wave

    rgb = np.stack([r * gain, g * gain, b * gain], axis=2)
    return _opaque(np.clip(rgb, 0, 255))


def create_retro_image(width: int = 320, height: int = 240) -> np.ndarray:
    """Concentric coloured rings with a radial pattern and scanlines."""
    cx, cy = width / 2.0, height / 2.0
    y, x = np.mgrid[0:height, 0:width].astype(np.float32)
    dx = x - cx
    dy = y - cy

    distance = np.sqrt(dx * dx + dy * dy)
    angle = np.arctan2(dy, dx)

    ring = (distance / 15.0).astype(np.int64) % len(RING_COLORS)
    base = RING_COLORS[ring]

    radial = (np.sin(angle * 8.0) * 0.5 + 1.0) * 0.5
    scanline = np.where(np.arange(height) % 3 == 0, 0.6, 1.0)[:, None]
    gain = (radial * scanline)[:, :, None]

    return _opaque(np.clip(base * gain, 0, 255))


def create_logo_image(width: int = 400, height: int = 300) -> np.ndarray:
    """A stylized cyan "E" on a dark background with glow and decorations."""
    rgb = np.empty((height, width, 3), dtype=np.float32)
    rgb[:] = (20, 20, 40)

    cx, cy = width // 2, height // 2
    stroke = 10
    letter_w, letter_h = 80, 100
    left = cx - letter_w // 2
    top = cy - letter_h // 2
    bottom = cy + letter_h // 2

    def fill(x0, x1, y0, y1, color):
        x0, y0 = max(x0, 0), max(y0, 0)
        x1, y1 = min(x1, width), min(y1, height)
        if x0 < x1 and y0 < y1:
            rgb[y0:y1, x0:x1] = color

    # Vertical stroke fades from bright to dim
    for yy in range(max(top, 0), min(bottom, height)):
        t = min(max((yy - top) / letter_h, 0.0), 1.0)
        fill(left, left + stroke, yy, yy + 1, np.floor(BRIGHT_CYAN * (1.0 - t) + DIM_CYAN * t))

    fill(left, cx + letter_w // 3 * 2, top, top + stroke, BRIGHT_CYAN)
    fill(left, cx + letter_w // 4, cy - stroke // 2, cy + stroke // 2, BRIGHT_CYAN)
    fill(left, cx + letter_w // 3 * 2, bottom - stroke, bottom, BRIGHT_CYAN)

    # Soft glow around the letter centre, saturating
    glow_radius = 25
    y, x = np.mgrid[0:height, 0:width].astype(np.float32)
    dx = np.abs(x - cx)
    dy = np.abs(y - cy)
    in_box = (dx < letter_w // 2 + glow_radius) & (dy < letter_h // 2 + glow_radius)
    strength = (1.0 - np.minimum(np.sqrt(dx * dx + dy * dy) / glow_radius, 1.0)) * 0.2
    strength = np.where(in_box, strength, 0.0)
    glow = np.floor(strength[:, :, None] * np.array([30.0, 60.0, 60.0], dtype=np.float32))
    rgb = np.minimum(rgb + glow, 255.0)

    # Corner dots
    dot_color = (100, 100, 200)
    for i in range(5):
        _draw_dot(rgb, 20 + i * 15, 20, 3, dot_color)
        _draw_dot(rgb, width - 80 + i * 15, height - 30, 3, dot_color)

    # Dashed side rails
    if width > 21:
        for yy in range(50, height - 50, 8):
            rgb[yy, 10] = (60, 60, 120)
            rgb[yy, width - 11] = (60, 60, 120)

    return _opaque(rgb)


def _draw_dot(rgb: np.ndarray, cx: int, cy: int, radius: int, color):
    height, width = rgb.shape[:2]
    y, x = np.ogrid[0:height, 0:width]
    mask = (x - cx) ** 2 + (y - cy) ** 2 <= radius * radius
    rgb[mask] = color


TEST_IMAGES = {
    "test_gradient.png": (create_gradient_image, 640, 480),
    "test_retro.png": (create_retro_image, 320, 240),
    "test_logo.png": (create_logo_image, 400, 300),
}


def write_test_images(output_dir: Path) -> list[Path]:
    """Write all test images into ``output_dir`` and return their paths."""
    output_dir = Path(output_dir)
    paths = []
    for name, (factory, width, height) in TEST_IMAGES.items():
        path = save_image(factory(width, height), output_dir / name)
        print(f"Created {path}")
        paths.append(path)
    return paths


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="electron-beam-testimages",
        description="Write synthetic PNGs for trying out electron-beam",
    )
    parser.add_argument(
        "output_dir", type=Path, nargs="?", default=Path("."),
        help="Directory to write into (default: current directory)",
    )
    args = parser.parse_args(argv)

    print("Creating test images...")
    try:
        write_test_images(args.output_dir)
    except ElectronBeamError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    d = args.output_dir
    print("\nTry them with:")
    print(f"  electron-beam -i {d / 'test_gradient.png'} -o output_cooldown.gif -m cool-down -f 30 -d 100 --verbose")
    print(f"  electron-beam -i {d / 'test_retro.png'} -o output_warmup.gif -m warm-up -f 20 -d 120 --verbose")
    print(f"  electron-beam -i {d / 'test_logo.png'} -o output_fade.gif -m fade -f 25 -d 80 --verbose")
    print(f"  electron-beam -i {d / 'test_gradient.png'} -o output_scale.gif -m scale-down -f 35 -d 60 --verbose")
    print(
        f"  electron-beam -i {d / 'test_logo.png'} -o output_custom_stretch.gif -m cool-down "
        "-f 30 -d 80 --v-stretch 0.3 --h-stretch 0.7 --verbose"
    )


if __name__ == "__main__":
    main()
