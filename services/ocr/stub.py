"""
Stub OCR backend for testing and offline development.

Deterministic, fast, and never fails silently.
"""

from typing import List

from .base import OCRBackend, OCRRequest, OCRResponse


class StubOCRBackend(OCRBackend):
    """Deterministic fake OCR for testing and CI."""

    def __init__(self, text: str = "Q1: Stubbed question recognized from image"):
        self.text = text
        self.requests: List[OCRRequest] = []

    def recognize(self, request: OCRRequest) -> OCRResponse:
        """Return the configured text, or a typed error for empty input."""
        self.requests.append(request)
        metadata = {"backend": "stub_ocr", "trace_id": request.trace_id}

        if not request.image_data:
            return OCRResponse(
                status="recoverable_error",
                error_type="invalid_image",
                metadata=metadata,
            )

        if not self.text.strip():
            return OCRResponse(
                status="recoverable_error",
                error_type="no_text",
                metadata=metadata,
            )

        return OCRResponse(status="success", text=self.text, metadata=metadata)
