"""
Stub PDF backend for testing and offline development.
"""

from typing import List

from .base import PDFBackend, PDFRequest, PDFResponse


class StubPDFBackend(PDFBackend):
    """Deterministic fake PDF extractor."""

    def __init__(self, text: str = "Q1: Stubbed question extracted from PDF"):
        self.text = text
        self.requests: List[PDFRequest] = []

    def extract_text(self, request: PDFRequest) -> PDFResponse:
        self.requests.append(request)
        metadata = {"backend": "stub_pdf", "trace_id": request.trace_id}

        if not request.pdf_data:
            return PDFResponse(
                status="recoverable_error",
                error_type="invalid_pdf",
                metadata=metadata,
            )

        if not self.text.strip():
            return PDFResponse(
                status="recoverable_error",
                error_type="no_text",
                page_count=1,
                metadata=metadata,
            )

        return PDFResponse(status="success", text=self.text, page_count=1, metadata=metadata)
