"""Shared pytest fixtures."""
import numpy as np
import pytest
from PIL import Image


def gradient_array(width, height, channels=4):
    """Deterministic uint8 pixels of the given size, fully opaque when RGBA."""
    rng = np.random.RandomState(width * 1000 + height)
    shape = (height, width) if channels == 1 else (height, width, channels)
    array = rng.randint(0, 256, size=shape).astype(np.uint8)
    if channels == 4:
        array[:, :, 3] = 255
    return array


@pytest.fixture
def image_file(tmp_path):
    """Factory writing a test image to tmp_path and returning its path."""

    def _make(name="photo.png", size=(64, 32), mode="RGB", image_format=None):
        channels = {"L": 1, "RGB": 3, "RGBA": 4}[mode]
        img = Image.fromarray(gradient_array(size[0], size[1], channels))
        path = tmp_path / name
        img.save(path, format=image_format)
        return path

    return _make
