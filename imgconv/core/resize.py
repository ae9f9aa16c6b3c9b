"""
Lanczos resizing for percentage scaling and the ICO size limit.
"""
import cv2
from PIL import Image

from imgconv.core.pixel_buffer import PALETTE_MODES, buffer_size, is_array, to_8bit_image
from imgconv.utils.log import log


def resample(buffer, size):
    """Resample a pixel buffer to an exact size with a Lanczos filter.

    Palette and bilevel images are expanded to true colour first since
    Pillow only resizes them with nearest neighbour. 16-bit images are
    widened to mode I, which keeps their depth.

    Args:
        buffer: Pillow image or numpy array
        size: (width, height) target

    Returns:
        New buffer of the same kind as the input
    """
    if is_array(buffer):
        return cv2.resize(buffer, size, interpolation=cv2.INTER_LANCZOS4)
    if buffer.mode in PALETTE_MODES:
        buffer = to_8bit_image(buffer)
    elif buffer.mode.startswith("I;16"):
        buffer = buffer.convert("I")
    return buffer.resize(size, Image.Resampling.LANCZOS)


def percent_size(size, percent):
    """Scale (width, height) by a percentage, truncating, minimum 1 pixel."""
    width, height = size
    new_width = int(width * percent / 100.0)
    new_height = int(height * percent / 100.0)
    return max(new_width, 1), max(new_height, 1)


def resize_by_percent(buffer, percent):
    """Resize the buffer to a percentage of its size.

    Args:
        buffer: Pillow image or numpy array
        percent: Percentage of the original size, 0 or less means no resize

    Returns:
        The resized buffer, or the input itself when no resize is requested
    """
    if percent <= 0:
        return buffer

    new_size = percent_size(buffer_size(buffer), percent)
    resized = resample(buffer, new_size)
    log(f"Image resized to {percent}% ({new_size[0]}x{new_size[1]} pixels)")
    return resized


def fit_size(size, max_size):
    """Compute the size that fits within max_size keeping the aspect ratio.

    The longer side becomes exactly max_size and the shorter side is
    scaled by the same ratio and rounded. Sizes already within the limit
    are returned unchanged.

    Args:
        size: (width, height) in pixels
        max_size: Largest allowed side

    Returns:
        (width, height) tuple
    """
    width, height = size
    if width <= max_size and height <= max_size:
        return width, height

    if width > height:
        new_width = max_size
        new_height = int(height * max_size / width + 0.5)
    else:
        new_height = max_size
        new_width = int(width * max_size / height + 0.5)

    return max(new_width, 1), max(new_height, 1)


def resize_for_ico(buffer, max_size=256):
    """Shrink a buffer so neither side exceeds max_size.

    Returns the input unchanged when it already fits.
    """
    size = buffer_size(buffer)
    new_size = fit_size(size, max_size)
    if new_size == tuple(size):
        return buffer

    resized = resample(buffer, new_size)
    log(f"Image resized for ICO format: {size[0]}x{size[1]} -> {new_size[0]}x{new_size[1]}")
    return resized
