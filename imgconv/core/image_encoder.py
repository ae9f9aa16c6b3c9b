"""
Image encoders: the lossless PNG encoder used inside ICO files and the
JPEG/PNG re-encoder used for plain resize/compress runs.
"""
import io

from imgconv.errors import EncodeError, WriteError
from imgconv.core.pixel_buffer import to_8bit_image
from imgconv.utils.log import log

BEST_COMPRESSION = 9
DEFAULT_JPEG_QUALITY = 95

JPEG_FORMATS = ("jpeg", "jpg", "mpo")
# Modes the JPEG encoder accepts without conversion
JPEG_MODES = ("RGB", "L", "CMYK")


def _encode(image, **params):
    buffer = io.BytesIO()
    try:
        image.save(buffer, **params)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode {params.get('format')}: {e}") from e
    return buffer.getvalue()


def encode_png(image, compress_level=BEST_COMPRESSION):
    """Encode an image as a PNG stream.

    Args:
        image: Pillow image
        compress_level: zlib level, 0 (none) to 9 (best)

    Returns:
        PNG bytes

    Raises:
        EncodeError: if Pillow rejects the image
    """
    return _encode(image, format="PNG", compress_level=compress_level)


def png_compression_level(compress):
    """Map the 1-100 compress scale (1 = most compression) to zlib 0-9."""
    return 9 - int(compress / 100.0 * 9.0)


def _write(out, data):
    try:
        out.write(data)
    except OSError as e:
        raise WriteError(f"Failed to write image data: {e}") from e


def encode_image(out, image, image_format, compress=0, default_quality=DEFAULT_JPEG_QUALITY):
    """Encode the image in its source format and write it to out.

    JPEG uses the compress value as quality, or default_quality when
    compress is 0.
    PNG maps compress onto a zlib level. Other formats are written as PNG.

    Args:
        out: Binary file-like object
        image: Pillow image
        image_format: Format name reported by the decoder, e.g. "PNG"
        compress: Compression level 1-100, 0 to keep encoder defaults
        default_quality: JPEG quality used when compress is 0
    """
    fmt = (image_format or "").lower()

    if fmt in JPEG_FORMATS:
        quality = compress if compress > 0 else default_quality
        image = to_8bit_image(image)
        if image.mode not in JPEG_MODES:
            image = image.convert("RGB")
        data = _encode(image, format="JPEG", quality=quality)
        _write(out, data)
        if compress > 0:
            log(f"Image compressed with quality level {compress}")

    elif fmt == "png":
        if compress > 0:
            level = png_compression_level(compress)
            data = _encode(image, format="PNG", compress_level=level)
            log(f"Image compressed with PNG compression level {level}")
        else:
            data = _encode(image, format="PNG")
        _write(out, data)

    else:
        _write(out, _encode(image, format="PNG"))
