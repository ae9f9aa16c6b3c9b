"""
Output folder and file name bookkeeping.

Results are grouped by the operation that produced them:
output/transform, output/resize, output/compress or output/processed.
"""
import os

from imgconv.errors import OutputPathError

OUTPUT_ROOT = "output"


def determine_output_category(resize_percent, compress_level, convert_to_ico):
    """Pick the output folder name for the requested operations."""
    if convert_to_ico:
        return "transform"
    if resize_percent > 0:
        return "resize"
    if compress_level > 0:
        return "compress"
    return "processed"


def ensure_output_dir(directory):
    """Create the output directory if it doesn't exist"""
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise OutputPathError(f"error creating output directory: {e}") from e


def _suffix(resize_percent, compress_level):
    suffix = ""
    if resize_percent > 0:
        suffix += f"_r{resize_percent}"
    if compress_level > 0:
        suffix += f"_c{compress_level}"
    return suffix


def generate_output_path(input_file, output_file, resize_percent, compress_level,
                         convert_to_ico, output_root=OUTPUT_ROOT):
    """Build the output file path and create its folder.

    With an explicit output_file only its base name is kept and placed in
    the category folder. Otherwise the name is derived from the input,
    e.g. photo.jpg resized to 50% and compressed at 80 becomes
    photo_r50_c80.jpg.

    Args:
        input_file: Path of the source image
        output_file: Requested output name, or empty/None for automatic
        resize_percent: Resize percentage (0 for none)
        compress_level: Compression level (0 for none)
        convert_to_ico: Whether the output is an ICO file
        output_root: Folder holding the category folders

    Returns:
        Output file path as a string
    """
    category = determine_output_category(resize_percent, compress_level, convert_to_ico)
    output_dir = os.path.join(output_root, category)
    ensure_output_dir(output_dir)

    if output_file:
        filename = os.path.basename(output_file)
        if convert_to_ico and not filename.lower().endswith(".ico"):
            filename += ".ico"
    else:
        basename, ext = os.path.splitext(os.path.basename(input_file))
        suffix = _suffix(resize_percent, compress_level)
        if convert_to_ico:
            filename = basename + suffix + ".ico"
        else:
            filename = basename + suffix + ext

    return os.path.join(output_dir, filename)
