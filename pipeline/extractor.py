"""
Text extraction, dispatched on artifact kind.

Every failure is terminal for the request; nothing is retried here.
"""

import logging
from typing import Optional

from services.image import ImageNormalizer, ImageNormalizationError
from services.ocr import OCRBackend, OCRRequest
from services.pdf import PDFBackend, PDFRequest

from .errors import ExtractionError, UnsupportedFileTypeError
from .types import MEDIA_TYPES, MediaKind, UploadedArtifact

logger = logging.getLogger(__name__)

# Backend error_type → (message, recoverable)
_PDF_FAILURES = {
    "no_text": ("No text could be extracted from the PDF", True),
    "invalid_pdf": ("The uploaded PDF could not be read", True),
}
_PDF_FALLBACK = ("Failed to extract text from the PDF", False)

_IMAGE_FAILURES = {
    "no_text": ("No text could be extracted from the image", True),
    "invalid_image": ("The uploaded image could not be read", True),
}
_IMAGE_FALLBACK = ("Failed to extract text from the image", False)


class TextExtractor:
    """Converts artifact bytes into non-empty text."""

    def __init__(
        self,
        pdf_backend: PDFBackend,
        ocr_backend: OCRBackend,
        image_normalizer: ImageNormalizer,
        ocr_language: str = "eng",
    ):
        self.pdf_backend = pdf_backend
        self.ocr_backend = ocr_backend
        self.image_normalizer = image_normalizer
        self.ocr_language = ocr_language

    def extract(self, artifact: UploadedArtifact, trace_id: Optional[str] = None) -> str:
        """
        Extract text from an uploaded artifact.

        Args:
            artifact: The uploaded file
            trace_id: Optional id propagated to backends for log correlation

        Returns:
            Extracted text, never empty after trimming

        Raises:
            UnsupportedFileTypeError: media type has no extractor
            ExtractionError: no usable text
        """
        kind = MEDIA_TYPES.get(artifact.media_type)

        if kind is MediaKind.TEXT:
            return self._extract_plain_text(artifact)
        if kind is MediaKind.PDF:
            return self._extract_pdf(artifact, trace_id)
        if kind is MediaKind.IMAGE:
            return self._extract_image(artifact, trace_id)

        raise UnsupportedFileTypeError(artifact.media_type)

    def _extract_plain_text(self, artifact: UploadedArtifact) -> str:
        text = artifact.data.decode("utf-8", errors="replace")
        if not text.strip():
            raise ExtractionError("No text could be extracted from the uploaded file")
        return text

    def _extract_pdf(self, artifact: UploadedArtifact, trace_id: Optional[str]) -> str:
        response = self.pdf_backend.extract_text(
            PDFRequest(pdf_data=artifact.data, trace_id=trace_id)
        )

        if response.status == "success" and response.text and response.text.strip():
            logger.info(
                f"Extracted {len(response.text)} chars from PDF '{artifact.filename}' "
                f"({response.page_count} pages)"
            )
            return response.text.strip()

        message, recoverable = _PDF_FAILURES.get(
            response.error_type or "no_text", _PDF_FALLBACK
        )
        raise ExtractionError(message, recoverable, response.metadata)

    def _extract_image(self, artifact: UploadedArtifact, trace_id: Optional[str]) -> str:
        try:
            normalized = self.image_normalizer.normalize(artifact.data)
        except ImageNormalizationError as e:
            message, recoverable = _IMAGE_FAILURES["invalid_image"]
            raise ExtractionError(message, recoverable, {"error": str(e)})

        response = self.ocr_backend.recognize(
            OCRRequest(
                image_data=normalized.data,
                language=self.ocr_language,
                trace_id=trace_id,
            )
        )

        if response.status == "success" and response.text and response.text.strip():
            logger.info(
                f"OCR recognized {len(response.text)} chars in '{artifact.filename}' "
                f"({normalized.metadata.width}x{normalized.metadata.height})"
            )
            return response.text.strip()

        message, recoverable = _IMAGE_FAILURES.get(
            response.error_type or "no_text", _IMAGE_FALLBACK
        )
        raise ExtractionError(message, recoverable, response.metadata)
