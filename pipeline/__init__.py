"""
Question paper solving pipeline.

    validate → probe → extract → generate → respond

Components are wired together by infra.bootstrap; import them from their
modules (pipeline.orchestrator, pipeline.extractor, ...).
"""

from .types import (
    MediaKind,
    ProcessingResult,
    ProbeResult,
    RawTextRequest,
    UploadedArtifact,
)
from .errors import (
    PipelineError,
    InputError,
    UnsupportedFileTypeError,
    FileTooLargeError,
    ExtractionError,
    ServiceUnavailableError,
    GenerationError,
)

__all__ = [
    "MediaKind",
    "ProcessingResult",
    "ProbeResult",
    "RawTextRequest",
    "UploadedArtifact",
    "PipelineError",
    "InputError",
    "UnsupportedFileTypeError",
    "FileTooLargeError",
    "ExtractionError",
    "ServiceUnavailableError",
    "GenerationError",
]
