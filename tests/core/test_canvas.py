"""Tests for canvas helpers."""

import numpy as np
import pytest
from PIL import Image

from electronbeam.core.canvas import (
    OPAQUE_BLACK,
    add_highlight,
    as_rgba,
    flatten_alpha,
    new_canvas,
    resize_raster,
)
from electronbeam.core.errors import ImageError


class TestNewCanvas:
    def test_shape_and_fill(self):
        canvas = new_canvas(7, 5, OPAQUE_BLACK)
        assert canvas.shape == (5, 7, 4)
        assert canvas.dtype == np.uint8
        assert np.all(canvas[:, :, :3] == 0)
        assert np.all(canvas[:, :, 3] == 255)

    def test_default_is_transparent(self):
        assert not np.any(new_canvas(3, 3))


class TestAsRgba:
    def test_rgb_gains_opaque_alpha(self):
        rgb = np.full((4, 6, 3), 90, dtype=np.uint8)
        rgba = as_rgba(rgb)
        assert rgba.shape == (4, 6, 4)
        assert np.all(rgba[:, :, 3] == 255)
        assert np.all(rgba[:, :, :3] == 90)

    def test_copies_input(self, gradient_source):
        rgba = as_rgba(gradient_source)
        assert np.array_equal(rgba, gradient_source)
        assert not np.shares_memory(rgba, gradient_source)

    def test_pil_image(self):
        img = Image.new("RGB", (8, 3), (10, 20, 30))
        rgba = as_rgba(img)
        assert rgba.shape == (3, 8, 4)
        assert tuple(rgba[0, 0]) == (10, 20, 30, 255)

    @pytest.mark.parametrize(
        "arr",
        [
            np.zeros((4, 4), dtype=np.uint8),
            np.zeros((4, 4, 2), dtype=np.uint8),
            np.zeros((0, 4, 4), dtype=np.uint8),
            np.zeros((4, 4, 4), dtype=np.float32),
        ],
    )
    def test_rejects_bad_rasters(self, arr):
        with pytest.raises(ImageError):
            as_rgba(arr)


class TestResize:
    def test_output_size(self, gradient_source):
        out = resize_raster(gradient_source, 5, 9)
        assert out.shape == (9, 5, 4)
        assert out.dtype == np.uint8

    def test_constant_image_stays_constant(self):
        src = np.full((20, 20, 4), 255, dtype=np.uint8)
        out = resize_raster(src, 7, 7)
        assert np.all(out >= 250)

    def test_invalid_size_raises_image_error(self, gradient_source):
        with pytest.raises(ImageError):
            resize_raster(gradient_source, 0, 5)


class TestHighlight:
    def test_saturates_and_keeps_alpha(self):
        canvas = np.zeros((2, 2, 4), dtype=np.uint8)
        canvas[0, 0] = (250, 10, 0, 0)
        canvas[1, 1] = (0, 0, 0, 255)
        add_highlight(canvas, 0.5)  # +127

        assert tuple(canvas[0, 0]) == (255, 137, 127, 0)
        assert tuple(canvas[1, 1]) == (127, 127, 127, 255)

    def test_zero_intensity_is_noop(self, gradient_source):
        canvas = gradient_source.copy()
        add_highlight(canvas, 0.0)
        assert np.array_equal(canvas, gradient_source)


class TestFlattenAlpha:
    def test_blends_onto_black(self):
        frame = np.zeros((1, 3, 4), dtype=np.uint8)
        frame[0, 0] = (200, 100, 50, 255)
        frame[0, 1] = (200, 100, 50, 0)
        frame[0, 2] = (200, 100, 50, 51)  # alpha 0.2

        rgb = flatten_alpha(frame)
        assert rgb.shape == (1, 3, 3)
        assert tuple(rgb[0, 0]) == (200, 100, 50)
        assert tuple(rgb[0, 1]) == (0, 0, 0)
        assert tuple(rgb[0, 2]) == (40, 20, 10)

    def test_custom_background(self):
        frame = np.zeros((1, 1, 4), dtype=np.uint8)
        rgb = flatten_alpha(frame, background=(10, 20, 30))
        assert tuple(rgb[0, 0]) == (10, 20, 30)
