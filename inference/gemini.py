import logging

import google.generativeai as genai

from .base import ModelBackend
from .types import ModelRequest, ModelResponse
from .errors import THROTTLED, classify_exception

logger = logging.getLogger(__name__)


def _response_text(response) -> str:
    """Return the candidate text, or "" when the response carries none."""
    try:
        return response.text or ""
    except ValueError:
        # Raised by the SDK when no candidate has text parts (e.g. blocked)
        return ""


class GeminiModelBackend(ModelBackend):
    """
    Google Gemini backend.

    Upstream failures are never raised: they are classified and returned as
    ModelResponse.error_type so callers can decide status and retry hints.
    The raw upstream message is kept in metadata["error"] for logging only.
    """

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash"):
        """
        Initialize Gemini backend.

        Args:
            api_key: Gemini API key
            model_name: Model identifier (e.g. "gemini-2.5-flash")

        Raises:
            ValueError: If no API key is provided
        """
        if not api_key:
            raise ValueError("GEMINI_API_KEY environment variable is not set")

        self.model_name = model_name
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)

    def generate(self, request: ModelRequest) -> ModelResponse:
        """
        Generate content with a single generate_content call.

        Args:
            request: ModelRequest with prompt and generation parameters

        Returns:
            ModelResponse with output text or a classified error
        """
        base_metadata = {
            "backend": "gemini",
            "model": self.model_name,
            "trace_id": request.trace_id,
        }

        config_args = {}
        if request.temperature is not None:
            config_args["temperature"] = request.temperature
        if request.max_output_tokens is not None:
            config_args["max_output_tokens"] = request.max_output_tokens

        request_options = {"timeout": request.timeout_s} if request.timeout_s else None

        try:
            response = self.model.generate_content(
                request.prompt,
                generation_config=genai.types.GenerationConfig(**config_args),
                request_options=request_options,
            )

            return ModelResponse(
                status="success",
                output=_response_text(response),
                metadata=base_metadata,
            )

        except Exception as e:
            category = classify_exception(e)
            logger.error(
                f"Gemini call failed for task '{request.task}': {category.value}",
                extra={"error": str(e), "error_class": type(e).__name__},
            )
            return ModelResponse(
                status="recoverable_error" if category in THROTTLED else "fatal_error",
                error_type=category.value,
                metadata={**base_metadata, "error": str(e)},
            )
