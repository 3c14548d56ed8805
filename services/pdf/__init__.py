"""
PDF extraction service exports.
"""

from .base import PDFBackend, PDFRequest, PDFResponse, PDFStatus
from .stub import StubPDFBackend
from .pymupdf import PyMuPDFBackend

__all__ = [
    "PDFBackend",
    "PDFRequest",
    "PDFResponse",
    "PDFStatus",
    "StubPDFBackend",
    "PyMuPDFBackend",
]
