"""Tests for image loading and saving."""

import numpy as np
import pytest
from PIL import Image

from electronbeam.core.errors import ImageError
from electronbeam.io.loader import load_image, save_image


class TestLoadImage:
    def test_rgb_png_gets_alpha(self, tmp_path):
        path = tmp_path / "rgb.png"
        Image.new("RGB", (6, 4), (10, 20, 30)).save(path)

        rgba = load_image(path)
        assert rgba.shape == (4, 6, 4)
        assert rgba.dtype == np.uint8
        assert tuple(rgba[0, 0]) == (10, 20, 30, 255)

    def test_grayscale_is_expanded(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.new("L", (3, 3), 128).save(path)
        assert tuple(load_image(str(path))[1, 1]) == (128, 128, 128, 255)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageError):
            load_image(tmp_path / "nope.png")

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("definitely not a png")
        with pytest.raises(ImageError):
            load_image(path)


class TestSaveImage:
    def test_round_trip_keeps_alpha(self, tmp_path, gradient_source):
        path = save_image(gradient_source, tmp_path / "out" / "frame.png")
        assert path.exists()
        assert np.array_equal(load_image(path), gradient_source)

    def test_unsupported_target(self, tmp_path, gradient_source):
        # JPEG has no alpha channel
        with pytest.raises(ImageError):
            save_image(gradient_source, tmp_path / "frame.jpg")
