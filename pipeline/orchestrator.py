"""
Request Orchestrator
====================

Single entry point for both request variants:

    validate shape → probe → [validate file → extract] → generate → respond

Invariants:
- Stages run strictly in sequence; each stage's output feeds the next
- This is the only module that maps failures to status codes
- Response bodies carry fixed, human-readable messages; collaborator
  messages are logged but never returned
- A result store, when configured, is written after success only and
  cannot alter the response
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import ValidationError

from inference.errors import ErrorCategory, THROTTLED
from storage.base import ResultStore

from .errors import (
    ExtractionError,
    GenerationError,
    InputError,
    ServiceUnavailableError,
)
from .extractor import TextExtractor
from .generator import SolutionGenerator
from .probe import AvailabilityProbe
from .types import (
    MANUAL_INPUT_FILENAME,
    ProcessingResult,
    ProcessTextPayload,
    RawTextRequest,
    UploadedArtifact,
)
from .validator import FileValidator

logger = logging.getLogger(__name__)

UNAVAILABLE_RETRY_AFTER_S = 60
THROTTLED_RETRY_AFTER_S = 120

# Categories after which a cached "available" probe can no longer be trusted
_PROBE_INVALIDATING = frozenset({
    ErrorCategory.INVALID_API_KEY,
    ErrorCategory.PERMISSION_DENIED,
})


@dataclass
class OrchestratorResponse:
    """Transport-agnostic response: status code plus JSON body."""
    status_code: int
    body: Dict[str, Any]


def _failure(status_code: int, message: str, **extra: Any) -> OrchestratorResponse:
    return OrchestratorResponse(status_code, {"success": False, "message": message, **extra})


def _field_errors(error: ValidationError) -> list:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "body",
            "message": err["msg"],
        }
        for err in error.errors()
    ]


class RequestOrchestrator:
    """Sequences validation, extraction and generation for one request."""

    def __init__(
        self,
        probe: AvailabilityProbe,
        validator: FileValidator,
        extractor: TextExtractor,
        generator: SolutionGenerator,
        result_store: Optional[ResultStore] = None,
    ):
        self.probe = probe
        self.validator = validator
        self.extractor = extractor
        self.generator = generator
        self.result_store = result_store

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def process_text(self, payload: Any) -> OrchestratorResponse:
        """
        Handle POST /api/process-text.

        Args:
            payload: Decoded JSON body (any shape; validated here)

        Returns:
            OrchestratorResponse
        """
        try:
            parsed = ProcessTextPayload.model_validate(payload)
        except ValidationError as e:
            return _failure(400, "Invalid input data", errors=_field_errors(e))

        request = RawTextRequest(text=parsed.text, filename=parsed.filename)
        return self._run(request, fallback_message="Failed to process text")

    def process_file(
        self,
        data: Optional[bytes],
        media_type: Optional[str],
        filename: Optional[str],
        size: Optional[int] = None,
    ) -> OrchestratorResponse:
        """
        Handle POST /api/process-file.

        Args:
            data: Uploaded bytes, or None when no file part was sent
            media_type: Declared content type of the part
            filename: Original filename
            size: Full byte size of the part when data holds only a prefix

        Returns:
            OrchestratorResponse
        """
        if data is None:
            return _failure(400, "No file uploaded")

        artifact = UploadedArtifact(
            data=data,
            media_type=media_type or "",
            filename=filename or "upload",
            size=size if size is not None else -1,
        )
        return self._run(artifact, fallback_message="Failed to process file")

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _run(self, request, fallback_message: str) -> OrchestratorResponse:
        trace_id = uuid.uuid4().hex[:12]
        try:
            result = self._execute(request, trace_id)
        except InputError as e:
            logger.info(f"[{trace_id}] Rejected: {e}")
            return _failure(400, e.message)
        except ExtractionError as e:
            logger.warning(f"[{trace_id}] Extraction failed: {e}")
            return _failure(400 if e.recoverable else 500, e.message)
        except ServiceUnavailableError as e:
            logger.warning(f"[{trace_id}] Service unavailable: {e}")
            return _failure(
                503,
                "AI service temporarily unavailable",
                error=e.message,
                retryAfter=UNAVAILABLE_RETRY_AFTER_S,
            )
        except GenerationError as e:
            if e.category in _PROBE_INVALIDATING:
                self.probe.invalidate()
            if e.category in THROTTLED:
                return _failure(429, e.message, retryAfter=THROTTLED_RETRY_AFTER_S)
            return _failure(500, e.message)
        except Exception:
            logger.error(f"[{trace_id}] Unexpected processing error", exc_info=True)
            return _failure(500, fallback_message)

        self._store(result, trace_id)
        return OrchestratorResponse(200, result.to_dict())

    def _execute(self, request, trace_id: str) -> ProcessingResult:
        probe_result = self.probe.check()
        if not probe_result.valid:
            raise ServiceUnavailableError(probe_result.error or "API validation failed")

        if isinstance(request, UploadedArtifact):
            logger.info(
                f"[{trace_id}] Processing file '{request.filename}' "
                f"({request.media_type}, {request.size} bytes)"
            )
            self.validator.validate(request.media_type, request.size)
            extracted_text = self.extractor.extract(request, trace_id=trace_id)
            filename = request.filename
            file_type = request.media_type
        else:
            logger.info(f"[{trace_id}] Processing {len(request.text)} chars of text")
            extracted_text = request.text
            filename = request.filename or MANUAL_INPUT_FILENAME
            file_type = None

        solutions = self.generator.generate(extracted_text, trace_id=trace_id)

        return ProcessingResult(
            extracted_text=extracted_text,
            solutions=solutions,
            filename=filename,
            file_type=file_type,
        )

    def _store(self, result: ProcessingResult, trace_id: str) -> None:
        if self.result_store is None:
            return
        try:
            response = self.result_store.save(result)
        except Exception:
            logger.error(f"[{trace_id}] Result store raised", exc_info=True)
            return
        if response.status != "success":
            logger.warning(f"[{trace_id}] Result not stored: {response.error}")
