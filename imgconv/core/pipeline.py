"""
Conversion pipeline: load, resize, then re-encode or package as ICO.
"""
import os

from PIL import Image

from imgconv.errors import DecodeError, ValidationError, WriteError
from imgconv.core.ico_encoder import IconEncoder, ICO_MAX_SIZE
from imgconv.core.image_encoder import encode_image, DEFAULT_JPEG_QUALITY
from imgconv.core.resize import resize_by_percent
from imgconv.utils.log import log, warn
from imgconv.utils.output_paths import generate_output_path, OUTPUT_ROOT


class ConversionOptions:
    """Settings for a single conversion run."""

    DEFAULT_JPEG_QUALITY = DEFAULT_JPEG_QUALITY
    ICO_MAX_SIZE = ICO_MAX_SIZE
    OUTPUT_ROOT = OUTPUT_ROOT

    def __init__(self, input_file="", output_file="", resize_percent=0, compress_level=0,
                 to_ico=False, auto_resize_ico=True, output_root=None):
        self.input_file = input_file
        self.output_file = output_file
        self.resize_percent = resize_percent
        self.compress_level = compress_level
        self.to_ico = to_ico
        self.auto_resize_ico = auto_resize_ico
        self.output_root = output_root or self.OUTPUT_ROOT

    def validate(self):
        """Check the options before any file is touched.

        Raises:
            ValidationError: describing the first invalid option
        """
        if not self.input_file:
            raise ValidationError("input file is required. Use --input to specify the input image")

        if self.resize_percent < 0 or self.resize_percent > 99:
            raise ValidationError("resize percentage must be between 1 and 99, or 0 for no resizing")

        if self.compress_level < 0 or self.compress_level > 100:
            raise ValidationError("compression level must be between 1 and 100, or 0 for no compression")

        if not os.path.exists(self.input_file):
            raise ValidationError(f"input file does not exist: {self.input_file}")


class ImageConverter:
    """Runs one conversion described by a ConversionOptions instance."""

    def __init__(self, options):
        self.options = options
        self.image = None
        self.image_format = None

    def load(self):
        """Open and fully decode the input image.

        Returns:
            The decoded Pillow image

        Raises:
            DecodeError: if the file is not a readable image
        """
        try:
            with Image.open(self.options.input_file) as img:
                img.load()
                self.image_format = img.format
                # Detach the pixels from the file handle
                self.image = img.copy()
        except (OSError, Image.DecompressionBombError) as e:
            raise DecodeError(f"Error decoding image: {e}") from e

        width, height = self.image.size
        log(f"Loaded {self.image_format} image: {width}x{height}")
        return self.image

    def _write_ico(self, out, image):
        width, height = image.size
        limit = self.options.ICO_MAX_SIZE
        if (width > limit or height > limit) and not self.options.auto_resize_ico:
            warn(f"Large image dimensions ({width}x{height}) may not display properly in all ICO viewers. "
                 "Consider using --auto-resize-ico")

        encoder = IconEncoder(auto_resize=self.options.auto_resize_ico, max_size=limit)
        encoder.encode(out, image)

    def run(self):
        """Run the conversion and return the path of the written file.

        Raises:
            ImageToolError: subclass describing the step that failed
        """
        options = self.options
        options.validate()

        image = self.load()
        image = resize_by_percent(image, options.resize_percent)

        out_path = generate_output_path(
            options.input_file,
            options.output_file,
            options.resize_percent,
            options.compress_level,
            options.to_ico,
            options.output_root,
        )

        try:
            out = open(out_path, "wb")
        except OSError as e:
            raise WriteError(f"Error creating output file: {e}") from e

        with out:
            if options.to_ico:
                self._write_ico(out, image)
                log(f"Image converted to ICO format (RGBA) and saved to {out_path}")
            else:
                encode_image(out, image, self.image_format, options.compress_level,
                             default_quality=options.DEFAULT_JPEG_QUALITY)
                log(f"Processed image saved to {out_path}")

        return out_path
