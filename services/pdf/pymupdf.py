"""
PDF text extraction using PyMuPDF.
"""

import logging

import fitz  # PyMuPDF

from .base import PDFBackend, PDFRequest, PDFResponse

logger = logging.getLogger(__name__)


class PyMuPDFBackend(PDFBackend):
    """Extract the text layer of a PDF held in memory."""

    def extract_text(self, request: PDFRequest) -> PDFResponse:
        """
        Extract text from every page, joined by newlines.

        Args:
            request: PDFRequest with raw PDF bytes

        Returns:
            PDFResponse with trimmed text or error
        """
        metadata = {"backend": "pymupdf", "trace_id": request.trace_id}

        try:
            with fitz.open(stream=request.pdf_data, filetype="pdf") as doc:
                page_count = doc.page_count
                text = "\n".join(page.get_text() for page in doc).strip()

        except fitz.FileDataError as e:
            return PDFResponse(
                status="recoverable_error",
                error_type="invalid_pdf",
                metadata={**metadata, "error": str(e)},
            )

        except Exception as e:
            logger.error(f"PDF extraction failed: {e}")
            return PDFResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**metadata, "error": str(e)},
            )

        logger.debug(f"Extracted {len(text)} chars from {page_count} pages")

        if not text:
            return PDFResponse(
                status="recoverable_error",
                error_type="no_text",
                page_count=page_count,
                metadata=metadata,
            )

        return PDFResponse(
            status="success",
            text=text,
            page_count=page_count,
            metadata=metadata,
        )
