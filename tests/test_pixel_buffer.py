"""Tests for pixel buffer normalization."""
import numpy as np
import pytest
from PIL import Image

from imgconv.core.pixel_buffer import buffer_size, to_8bit_image, to_image, to_rgba
from imgconv.errors import EncodeError

from conftest import gradient_array


def test_buffer_size_for_image_and_array():
    assert buffer_size(Image.new("RGB", (7, 3))) == (7, 3)
    assert buffer_size(gradient_array(7, 3)) == (7, 3)


def test_rgba_image_passes_through():
    img = Image.new("RGBA", (4, 4), (1, 2, 3, 4))
    assert to_rgba(img) is img


def test_rgb_image_becomes_opaque_rgba():
    img = Image.new("RGB", (4, 4), (10, 20, 30))

    rgba = to_rgba(img)

    assert rgba.mode == "RGBA"
    assert rgba.getpixel((0, 0)) == (10, 20, 30, 255)


def test_palette_image_with_transparency():
    img = Image.new("P", (2, 1))
    img.putpalette([255, 0, 0, 0, 255, 0] + [0] * 762)
    img.putpixel((1, 0), 1)
    img.info["transparency"] = 0

    rgba = to_rgba(img)

    assert rgba.getpixel((0, 0))[3] == 0
    assert rgba.getpixel((1, 0)) == (0, 255, 0, 255)


def test_grey_array_is_expanded():
    grey = gradient_array(5, 6, channels=1)

    rgba = np.array(to_rgba(grey))

    assert rgba.shape == (6, 5, 4)
    for channel in range(3):
        assert np.array_equal(rgba[:, :, channel], grey)
    assert (rgba[:, :, 3] == 255).all()


def test_rgb_array_is_expanded():
    rgb = gradient_array(5, 6, channels=3)

    rgba = np.array(to_rgba(rgb))

    assert np.array_equal(rgba[:, :, :3], rgb)
    assert (rgba[:, :, 3] == 255).all()


def test_rgba_array_keeps_values():
    pixels = gradient_array(5, 6)
    pixels[0, 0, 3] = 7

    assert np.array_equal(np.array(to_rgba(pixels)), pixels)


def test_to_image_keeps_channels():
    assert to_image(gradient_array(3, 3, channels=1)).mode == "L"
    assert to_image(gradient_array(3, 3, channels=3)).mode == "RGB"


@pytest.mark.parametrize(
    "array",
    [
        np.zeros((4, 4, 5), dtype=np.uint8),
        np.zeros((4, 4, 4), dtype=np.float64),
        np.zeros((4, 4, 3), dtype=np.float64),
        np.zeros((2, 2, 2, 2), dtype=np.uint8),
    ],
)
def test_unsupported_arrays_raise_encode_error(array):
    with pytest.raises(EncodeError):
        to_rgba(array)


def test_grey_alpha_array_is_expanded():
    pixels = gradient_array(5, 6, channels=2)

    rgba = np.array(to_rgba(pixels))

    for channel in range(3):
        assert np.array_equal(rgba[:, :, channel], pixels[:, :, 0])
    assert np.array_equal(rgba[:, :, 3], pixels[:, :, 1])


def test_16bit_grey_keeps_high_byte():
    img = Image.fromarray(np.full((4, 4), 0x8000, dtype=np.uint16))

    rgba = to_rgba(img)

    assert rgba.getpixel((0, 0)) == (128, 128, 128, 255)


def test_32bit_integer_image_is_scaled_and_clipped():
    values = np.array([[0, 0x1234, 0xFFFF, 0x7FFFFFFF]], dtype=np.int32)
    img = Image.fromarray(values)
    assert img.mode == "I"

    rgba = np.array(to_rgba(img))

    assert list(rgba[0, :, 0]) == [0, 0x12, 0xFF, 0xFF]


@pytest.mark.parametrize(
    ("mode", "info", "expected"),
    [
        ("P", {}, "RGB"),
        ("P", {"transparency": 0}, "RGBA"),
        ("1", {}, "RGB"),
        ("RGB", {}, "RGB"),
        ("L", {}, "L"),
    ],
)
def test_to_8bit_image_modes(mode, info, expected):
    img = Image.new(mode, (3, 3))
    img.info.update(info)

    assert to_8bit_image(img).mode == expected
