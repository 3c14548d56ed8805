"""
Pipeline exceptions.

Components raise these; only the orchestrator turns them into status codes.
Messages are safe to show to a caller. Upstream detail goes into `details`
and is only ever logged.
"""

from typing import Any, Optional

from inference.errors import ErrorCategory, USER_MESSAGES


class PipelineError(Exception):
    """Base exception for all solver pipeline errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Input Errors (caller's fault, never retried)
# =============================================================================


class InputError(PipelineError):
    """Malformed or unacceptable caller input."""

    pass


class UnsupportedFileTypeError(InputError):
    """Declared media type is not on the allow-list."""

    def __init__(self, media_type: str) -> None:
        super().__init__(
            "Unsupported file type. Please upload PDF, PNG, JPG, or TXT files.",
            {"media_type": media_type},
        )


class FileTooLargeError(InputError):
    """Artifact exceeds the upload ceiling."""

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(
            f"File size too large. Maximum size is {max_size // (1024 * 1024)}MB.",
            {"size": size, "max_size": max_size},
        )


# =============================================================================
# Extraction Errors
# =============================================================================


class ExtractionError(PipelineError):
    """
    No usable text could be produced from an artifact.

    recoverable=True means the artifact itself is unusable (client side);
    False means the extraction collaborator is broken (server side).
    """

    def __init__(
        self,
        message: str,
        recoverable: bool = True,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.recoverable = recoverable


# =============================================================================
# Upstream Errors
# =============================================================================


class ServiceUnavailableError(PipelineError):
    """The generation endpoint failed its availability probe."""

    pass


class GenerationError(PipelineError):
    """Solution generation failed; carries a classification."""

    def __init__(
        self,
        category: ErrorCategory,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or USER_MESSAGES[category], details)
        self.category = category
