"""
imgconv - resize, recompress and convert a single image to ICO.
"""

__version__ = "0.1.0"
