"""
Local Tesseract OCR backend.

Requires: the tesseract binary on PATH (or TESSERACT_CMD) and pytesseract.
"""

import io
import logging
from typing import Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

from .base import OCRBackend, OCRRequest, OCRResponse

logger = logging.getLogger(__name__)


class TesseractOCRBackend(OCRBackend):
    """OCR backend using pytesseract."""

    def __init__(self, language: str = "eng", tesseract_cmd: Optional[str] = None):
        """
        Initialize Tesseract backend.

        Args:
            language: Tesseract language code (e.g. "eng", "deu")
            tesseract_cmd: Optional explicit path to the tesseract binary
        """
        self.language = language
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def recognize(self, request: OCRRequest) -> OCRResponse:
        """
        Recognize text using Tesseract.

        Args:
            request: OCRRequest with image bytes

        Returns:
            OCRResponse with trimmed text or error
        """
        language = request.language or self.language
        metadata = {
            "backend": "tesseract",
            "language": language,
            "trace_id": request.trace_id,
        }

        try:
            with Image.open(io.BytesIO(request.image_data)) as image:
                text = pytesseract.image_to_string(image, lang=language).strip()

        except UnidentifiedImageError as e:
            return OCRResponse(
                status="recoverable_error",
                error_type="invalid_image",
                metadata={**metadata, "error": str(e)},
            )

        except Exception as e:
            logger.error(f"Tesseract OCR failed: {e}")
            return OCRResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**metadata, "error": str(e)},
            )

        if not text:
            return OCRResponse(
                status="recoverable_error",
                error_type="no_text",
                metadata=metadata,
            )

        return OCRResponse(status="success", text=text, metadata=metadata)
