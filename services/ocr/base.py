"""
Optical Character Recognition (OCR) abstract interface.

Role: Image bytes → raw text transformation only.

Rules:
- Pure transformation (no state mutation)
- Failure → explicit, typed response (no crash)
- Empty recognition is a failure, never an empty success
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any, Literal


OCRStatus = Literal["success", "recoverable_error", "fatal_error"]


@dataclass
class OCRRequest:
    """OCR request."""

    image_data: bytes  # Encoded image bytes (PNG, JPEG)
    language: str = "eng"
    trace_id: Optional[str] = None


@dataclass
class OCRResponse:
    """OCR response."""

    status: OCRStatus
    text: Optional[str] = None
    error_type: Optional[str] = None  # no_text | invalid_image | backend_unavailable
    metadata: Optional[Dict[str, Any]] = None


class OCRBackend(ABC):
    """
    Abstract OCR boundary.
    Pipeline code must depend ONLY on this interface.
    """

    @abstractmethod
    def recognize(self, request: OCRRequest) -> OCRResponse:
        """
        Recognize text in an image.

        Args:
            request: OCRRequest with image bytes and language

        Returns:
            OCRResponse with text or explicit error status
        """
        raise NotImplementedError
