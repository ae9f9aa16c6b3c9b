#!/usr/bin/env python3
"""
Command line interface for imgconv.
"""
import argparse
import sys

from imgconv.errors import ImageToolError
from imgconv.core.pipeline import ConversionOptions, ImageConverter
from imgconv.utils.log import error


def build_parser():
    """Create the argument parser"""
    parser = argparse.ArgumentParser(
        prog="imgconv",
        description="Resize, recompress or convert an image to ICO format",
    )
    parser.add_argument("-i", "--input", default="", help="Input image file path (required)")
    parser.add_argument("-o", "--output", default="",
                        help="Output image file path (if not specified, will use input filename with suffix)")
    parser.add_argument("-r", "--resize", type=int, default=0,
                        help="Resize percentage (1-99). 0 means no resize")
    parser.add_argument("-c", "--compress", type=int, default=0,
                        help="Compression level (1-100, where 1 is max compression, 100 is best quality). "
                             "0 means no compression")
    parser.add_argument("--to-ico", action="store_true", help="Convert the image to ICO format")
    parser.add_argument("--auto-resize-ico", action=argparse.BooleanOptionalAction, default=True,
                        help="Automatically resize images larger than 256x256 when converting to ICO")
    parser.add_argument("--output-root", default=ConversionOptions.OUTPUT_ROOT,
                        help="Folder that holds the transform/resize/compress/processed output folders")
    return parser


def options_from_args(args):
    return ConversionOptions(
        input_file=args.input,
        output_file=args.output,
        resize_percent=args.resize,
        compress_level=args.compress,
        to_ico=args.to_ico,
        auto_resize_ico=args.auto_resize_ico,
        output_root=args.output_root,
    )


def main(argv=None):
    """Main entry point for the application.

    Returns:
        Process exit status, 0 on success and 1 on failure
    """
    args = build_parser().parse_args(argv)
    converter = ImageConverter(options_from_args(args))

    try:
        converter.run()
    except ImageToolError as e:
        error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
