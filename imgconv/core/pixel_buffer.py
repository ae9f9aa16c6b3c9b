"""
Pixel buffer helpers.

A pixel buffer is either a Pillow image or a uint8 numpy array shaped
(h, w), (h, w, 2), (h, w, 3) or (h, w, 4). Everything downstream of the normalizer
works on RGBA Pillow images.
"""
import cv2
import numpy as np
from PIL import Image

from imgconv.errors import EncodeError

# cv2 conversion codes keyed by channel count
_RGBA_CONVERSIONS = {
    1: cv2.COLOR_GRAY2RGBA,
    3: cv2.COLOR_RGB2RGBA,
}

# Pillow modes holding more than 8 bits per sample
HIGH_DEPTH_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N")
# Pillow modes that resize with nearest neighbour only
PALETTE_MODES = ("P", "PA", "1")


def is_array(buffer):
    return isinstance(buffer, np.ndarray)


def buffer_size(buffer):
    """Get the dimensions of a pixel buffer.

    Args:
        buffer: Pillow image or numpy array

    Returns:
        (width, height) tuple in pixels
    """
    if is_array(buffer):
        return buffer.shape[1], buffer.shape[0]
    return buffer.size


def _channel_count(array):
    if array.ndim == 2:
        return 1
    if array.ndim == 3:
        return array.shape[2]
    raise EncodeError(f"Unsupported pixel array shape: {array.shape}")


def to_image(buffer):
    """Wrap a pixel buffer as a Pillow image without changing its channels."""
    if not is_array(buffer):
        return buffer

    array = buffer
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[:, :, 0]
    try:
        return Image.fromarray(np.ascontiguousarray(array))
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Failed to convert pixel array to image: {e}") from e


def _scale_to_8bit(image):
    # 16-bit samples keep their high byte
    array = np.clip(np.asarray(image), 0, 0xFFFF).astype(np.uint16)
    return Image.fromarray((array >> 8).astype(np.uint8))


def _has_alpha(image):
    if "transparency" in image.info or image.mode == "PA":
        return True
    return image.mode == "P" and image.palette is not None and image.palette.mode == "RGBA"


def to_8bit_image(image):
    """Convert a Pillow image to an 8-bit mode that Lanczos resampling supports.

    16-bit greyscale becomes L, keeping the high byte of each sample.
    Palette and bilevel images are expanded to RGB, or RGBA when they
    carry transparency. Other images are returned unchanged.

    Raises:
        EncodeError: if the conversion fails
    """
    try:
        if image.mode in HIGH_DEPTH_MODES:
            return _scale_to_8bit(image)
        if image.mode in PALETTE_MODES:
            return image.convert("RGBA" if _has_alpha(image) else "RGB")
    except (OSError, ValueError, TypeError) as e:
        raise EncodeError(f"Failed to convert {image.mode} image to 8-bit: {e}") from e
    return image


def _array_to_rgba(array):
    channels = _channel_count(array)
    if channels == 4:
        rgba = array
    elif channels == 2:
        grey, alpha = array[:, :, 0], array[:, :, 1]
        rgba = np.dstack([grey, grey, grey, alpha])
    elif channels in _RGBA_CONVERSIONS:
        try:
            rgba = cv2.cvtColor(array, _RGBA_CONVERSIONS[channels])
        except cv2.error as e:
            raise EncodeError(f"Failed to convert pixel array to RGBA: {e}") from e
    else:
        raise EncodeError(f"Unsupported channel count: {channels}")

    try:
        return Image.fromarray(np.ascontiguousarray(rgba))
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Failed to convert pixel array to RGBA: {e}") from e


def to_rgba(buffer):
    """Normalize a pixel buffer to a 4-channel RGBA image.

    Pixel values are kept as-is, except 16-bit samples which keep their
    high byte. Sources without alpha become fully opaque.
    An image that is already RGBA is returned unchanged.

    Args:
        buffer: Pillow image or numpy array

    Returns:
        Pillow image in RGBA mode

    Raises:
        EncodeError: if the buffer cannot be expressed as RGBA
    """
    if is_array(buffer):
        return _array_to_rgba(buffer)

    if buffer.mode == "RGBA":
        return buffer
    buffer = to_8bit_image(buffer)
    if buffer.mode == "RGBA":
        return buffer
    try:
        return buffer.convert("RGBA")
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to convert {buffer.mode} image to RGBA: {e}") from e
