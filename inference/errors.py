"""
Upstream error classification.

Maps a failure raised by the model client library to a small closed set of
categories. Each category carries a fixed user-facing message so raw upstream
text never reaches a caller.

Order of precedence:
1. Structured exception types from google.api_core
2. The ErrorInfo reason attached to the exception, when present
3. Substring match on the exception message (last resort)
"""

from enum import Enum
from typing import Optional

from google.api_core import exceptions as core_exceptions


class ErrorCategory(str, Enum):
    """Closed taxonomy of model backend failures."""
    INVALID_API_KEY = "invalid_api_key"
    QUOTA_EXCEEDED = "quota_exceeded"
    PERMISSION_DENIED = "permission_denied"
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"


# Message returned to API callers when generation fails
USER_MESSAGES = {
    ErrorCategory.INVALID_API_KEY: "Invalid API key configuration. Please check your Gemini API key.",
    ErrorCategory.QUOTA_EXCEEDED: "API quota exceeded. Please try again later or check your billing.",
    ErrorCategory.PERMISSION_DENIED: "Permission denied. Please verify your API key has proper permissions.",
    ErrorCategory.RATE_LIMITED: "Rate limit exceeded. Please wait a moment and try again.",
    ErrorCategory.UNKNOWN: "Failed to generate solutions. Please try again.",
}

# Short form used by the availability probe
PROBE_MESSAGES = {
    ErrorCategory.INVALID_API_KEY: "Invalid API key",
    ErrorCategory.QUOTA_EXCEEDED: "API quota exceeded",
    ErrorCategory.PERMISSION_DENIED: "API permission denied",
    ErrorCategory.RATE_LIMITED: "API rate limit exceeded",
    ErrorCategory.UNKNOWN: "API validation failed",
}

# Categories that callers may retry after a delay
THROTTLED = frozenset({ErrorCategory.QUOTA_EXCEEDED, ErrorCategory.RATE_LIMITED})

_REASON_CODES = {
    "API_KEY_INVALID": ErrorCategory.INVALID_API_KEY,
    "QUOTA_EXCEEDED": ErrorCategory.QUOTA_EXCEEDED,
    "PERMISSION_DENIED": ErrorCategory.PERMISSION_DENIED,
    "RATE_LIMIT_EXCEEDED": ErrorCategory.RATE_LIMITED,
}

# Checked in order; first hit wins
_MESSAGE_PATTERNS = (
    ("API_KEY_INVALID", ErrorCategory.INVALID_API_KEY),
    ("QUOTA_EXCEEDED", ErrorCategory.QUOTA_EXCEEDED),
    ("PERMISSION_DENIED", ErrorCategory.PERMISSION_DENIED),
    ("RATE_LIMIT_EXCEEDED", ErrorCategory.RATE_LIMITED),
    ("quota", ErrorCategory.QUOTA_EXCEEDED),
    ("rate limit", ErrorCategory.RATE_LIMITED),
)


def coerce_category(value: Optional[str]) -> ErrorCategory:
    """Turn a stored error_type string back into a category."""
    try:
        return ErrorCategory(value)
    except ValueError:
        return ErrorCategory.UNKNOWN


def classify_message(message: str) -> ErrorCategory:
    """Substring fallback for errors without a structured type."""
    for pattern, category in _MESSAGE_PATTERNS:
        if pattern in message:
            return category
    return ErrorCategory.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCategory:
    """
    Classify an exception raised by the model client.

    Args:
        exc: Exception caught at the backend boundary

    Returns:
        The matching ErrorCategory (UNKNOWN when nothing matches)
    """
    reason = getattr(exc, "reason", None)
    if reason in _REASON_CODES:
        return _REASON_CODES[reason]

    if isinstance(exc, core_exceptions.Unauthenticated):
        return ErrorCategory.INVALID_API_KEY
    if isinstance(exc, core_exceptions.PermissionDenied):
        # Gemini reports a revoked or malformed key as 403 as well
        if "API_KEY_INVALID" in str(exc):
            return ErrorCategory.INVALID_API_KEY
        return ErrorCategory.PERMISSION_DENIED
    if isinstance(exc, core_exceptions.ResourceExhausted):
        if "quota" in str(exc).lower():
            return ErrorCategory.QUOTA_EXCEEDED
        return ErrorCategory.RATE_LIMITED
    if isinstance(exc, core_exceptions.TooManyRequests):
        return ErrorCategory.RATE_LIMITED

    return classify_message(str(exc))
