"""
Model boundary layer for LLM inference.

This package provides a clean abstraction for model invocation,
allowing the solver pipeline to remain agnostic of the underlying backend.

Supported backends:
- StubModelBackend: Deterministic fake model (default for CI/tests)
- GeminiModelBackend: Google Gemini via google-generativeai

Example usage:
    from inference import StubModelBackend, ModelRequest

    backend = StubModelBackend()
    request = ModelRequest(task="solve", prompt="What is 2+2?")
    response = backend.generate(request)
"""

from .types import ModelRequest, ModelResponse, ModelStatus
from .base import ModelBackend
from .errors import ErrorCategory, classify_exception, classify_message
from .stub import StubModelBackend
from .gemini import GeminiModelBackend

__all__ = [
    "ModelRequest",
    "ModelResponse",
    "ModelStatus",
    "ModelBackend",
    "ErrorCategory",
    "classify_exception",
    "classify_message",
    "StubModelBackend",
    "GeminiModelBackend",
]
