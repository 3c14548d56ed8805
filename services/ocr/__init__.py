"""
OCR service exports.

Clean interface for the pipeline to import OCR components.
"""

from .base import OCRBackend, OCRRequest, OCRResponse, OCRStatus
from .stub import StubOCRBackend
from .tesseract import TesseractOCRBackend

__all__ = [
    "OCRBackend",
    "OCRRequest",
    "OCRResponse",
    "OCRStatus",
    "StubOCRBackend",
    "TesseractOCRBackend",
]
