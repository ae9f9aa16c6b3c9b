"""
Exceptions raised by the image conversion pipeline.
"""


class ImageToolError(Exception):
    """Base class for every error reported by imgconv."""


class ValidationError(ImageToolError):
    """Invalid command line options or missing input."""


class DecodeError(ImageToolError):
    """The input file could not be decoded as an image."""


class EncodeError(ImageToolError):
    """Pixel normalization or image encoding failed."""


class WriteError(ImageToolError):
    """The output sink rejected a write."""


class OutputPathError(ImageToolError):
    """The output directory could not be created."""
