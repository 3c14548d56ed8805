"""
Image Normalization Service

Prepares scanned pages for OCR: greyscale, contrast stretch, sharpen.
Output is always PNG.
"""

import io
from dataclasses import dataclass

from PIL import Image, ImageFilter, ImageOps, UnidentifiedImageError


class ImageNormalizationError(Exception):
    """Image bytes could not be decoded."""
    pass


@dataclass
class ImageMetadata:
    """Source image metadata."""
    format: str
    width: int
    height: int
    mode: str
    file_size_bytes: int


@dataclass
class NormalizedImage:
    """Result of image normalization."""
    data: bytes
    metadata: ImageMetadata
    mode: str = "L"
    format: str = "png"


class ImageNormalizer:
    """Normalizes images to sharpened greyscale PNG."""

    TARGET_MODE = "L"

    def __init__(self, autocontrast_cutoff: float = 0):
        """
        Args:
            autocontrast_cutoff: Percent of histogram to clip at each end
        """
        self.autocontrast_cutoff = autocontrast_cutoff

    def normalize(self, image_data: bytes) -> NormalizedImage:
        """
        Normalize image bytes for OCR.

        Args:
            image_data: Encoded PNG or JPEG bytes

        Returns:
            NormalizedImage holding PNG bytes

        Raises:
            ImageNormalizationError: If the bytes are not a readable image
        """
        try:
            with Image.open(io.BytesIO(image_data)) as source:
                metadata = ImageMetadata(
                    format=(source.format or "unknown").lower(),
                    width=source.width,
                    height=source.height,
                    mode=source.mode,
                    file_size_bytes=len(image_data),
                )
                image = ImageOps.exif_transpose(source)
                image = ImageOps.grayscale(image)
                image = ImageOps.autocontrast(image, cutoff=self.autocontrast_cutoff)
                image = image.filter(ImageFilter.SHARPEN)
        except (UnidentifiedImageError, OSError) as e:
            raise ImageNormalizationError(f"Unreadable image: {e}") from e

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")

        return NormalizedImage(data=buffer.getvalue(), metadata=metadata)
