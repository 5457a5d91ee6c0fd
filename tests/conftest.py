"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from electronbeam.core.config import AnimationMode, BeamConfig
from electronbeam.core.renderer import ElectronBeamRenderer


@pytest.fixture
def white_source() -> np.ndarray:
    """A 10x10 fully opaque white raster."""
    return np.full((10, 10, 4), 255, dtype=np.uint8)


@pytest.fixture
def gradient_source() -> np.ndarray:
    """
    A 16x12 RGBA raster with distinct values in every channel.

    Alpha varies too so alpha handling is observable.
    """
    h, w = 12, 16
    y, x = np.mgrid[0:h, 0:w]
    rgba = np.zeros((h, w, 4), dtype=np.uint8)
    rgba[:, :, 0] = (x * 255 // (w - 1)).astype(np.uint8)
    rgba[:, :, 1] = (y * 255 // (h - 1)).astype(np.uint8)
    rgba[:, :, 2] = ((x + y) * 7 % 256).astype(np.uint8)
    rgba[:, :, 3] = (64 + (x * y) % 192).astype(np.uint8)
    return rgba


@pytest.fixture
def random_source() -> np.ndarray:
    """Seeded random 20x30 RGBA raster."""
    rng = np.random.default_rng(42)  # Reproducible
    return rng.integers(0, 256, size=(20, 30, 4), dtype=np.uint8)


@pytest.fixture
def make_renderer():
    """Factory: build and prepare a renderer for a source and mode."""

    def _make(source, mode=AnimationMode.COOL_DOWN, width=None, height=None, v=0.5, h=0.5):
        config = BeamConfig(
            width=width or source.shape[1],
            height=height or source.shape[0],
            mode=mode,
            v_stretch_duration=v,
            h_stretch_duration=h,
        )
        renderer = ElectronBeamRenderer(config)
        renderer.prepare(source)
        return renderer

    return _make
