"""
Solution generation against the remote model.
"""

import logging
from typing import Optional

from inference import ModelBackend, ModelRequest
from inference.errors import ErrorCategory, coerce_category

from .errors import GenerationError, InputError
from .prompts import (
    SOLUTION_MAX_OUTPUT_TOKENS,
    SOLUTION_TEMPERATURE,
    build_solution_prompt,
)

logger = logging.getLogger(__name__)


class SolutionGenerator:
    """Turns extracted question text into markdown solutions."""

    def __init__(self, backend: ModelBackend, timeout_s: int = 60):
        self.backend = backend
        self.timeout_s = timeout_s

    def generate(self, question_text: str, trace_id: Optional[str] = None) -> str:
        """
        Generate step-by-step solutions.

        Args:
            question_text: Non-empty extracted text
            trace_id: Optional id for log correlation

        Returns:
            Markdown solutions, never empty

        Raises:
            InputError: question_text is blank
            GenerationError: backend failure or empty output, classified
        """
        if not question_text or not question_text.strip():
            raise InputError("Question text is required")

        logger.info(f"Generating solutions for {len(question_text)} chars of question text")

        response = self.backend.generate(
            ModelRequest(
                task="solve",
                prompt=build_solution_prompt(question_text),
                temperature=SOLUTION_TEMPERATURE,
                max_output_tokens=SOLUTION_MAX_OUTPUT_TOKENS,
                timeout_s=self.timeout_s,
                trace_id=trace_id,
            )
        )

        if response.status != "success":
            category = coerce_category(response.error_type)
            logger.error(
                f"Solution generation failed: {category.value}",
                extra={"metadata": response.metadata},
            )
            raise GenerationError(category, details=response.metadata)

        solution = response.output or ""
        if not solution.strip():
            raise GenerationError(
                ErrorCategory.UNKNOWN,
                "AI model returned empty response",
                response.metadata,
            )

        logger.info("Successfully generated solutions")
        return solution
