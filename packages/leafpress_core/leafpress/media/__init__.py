"""
Media module for image handling.

Decodes raster images into the pixel data embedded by the PDF backend.
"""

from .image_decoder import DecodedImage, ImageDecoder, PillowImageDecoder, default_image_decoder

__all__ = [
    "DecodedImage",
    "ImageDecoder",
    "PillowImageDecoder",
    "default_image_decoder",
]
