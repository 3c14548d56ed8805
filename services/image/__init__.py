"""
Image Services Module

Handles image preprocessing ahead of OCR.
"""

from .normalizer import (
    ImageNormalizer,
    ImageNormalizationError,
    NormalizedImage,
    ImageMetadata,
)

__all__ = [
    "ImageNormalizer",
    "ImageNormalizationError",
    "NormalizedImage",
    "ImageMetadata",
]
