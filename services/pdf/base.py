"""
PDF text extraction abstract interface.

Role: PDF bytes → embedded text. No OCR of scanned pages.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any, Literal


PDFStatus = Literal["success", "recoverable_error", "fatal_error"]


@dataclass
class PDFRequest:
    """PDF extraction request."""

    pdf_data: bytes
    trace_id: Optional[str] = None


@dataclass
class PDFResponse:
    """PDF extraction response."""

    status: PDFStatus
    text: Optional[str] = None
    page_count: Optional[int] = None
    error_type: Optional[str] = None  # no_text | invalid_pdf | backend_unavailable
    metadata: Optional[Dict[str, Any]] = None


class PDFBackend(ABC):
    """
    Abstract PDF extraction boundary.
    Pipeline code must depend ONLY on this interface.
    """

    @abstractmethod
    def extract_text(self, request: PDFRequest) -> PDFResponse:
        """Extract the text layer of every page."""
        raise NotImplementedError
