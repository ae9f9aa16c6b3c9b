"""
Core functionality for imgconv.
Contains the ICO container encoder, resizing and the conversion pipeline.
"""

from imgconv.errors import (
    ImageToolError,
    ValidationError,
    DecodeError,
    EncodeError,
    WriteError,
    OutputPathError,
)
from imgconv.core.ico_encoder import IconEncoder, encode_ico, encode_dimension
from imgconv.core.pipeline import ConversionOptions, ImageConverter

__all__ = [
    'ImageToolError', 'ValidationError', 'DecodeError', 'EncodeError', 'WriteError',
    'OutputPathError', 'IconEncoder', 'encode_ico', 'encode_dimension',
    'ConversionOptions', 'ImageConverter',
]
