from typing import Dict, Iterable, List, Optional

from .base import ModelBackend
from .types import ModelRequest, ModelResponse
from .errors import ErrorCategory, THROTTLED


class StubModelBackend(ModelBackend):
    """
    Deterministic fake model for testing and CI.

    This backend is fast, deterministic, and never fails silently.
    Used as the default backend for all CI/test environments.
    """

    DEFAULT_OUTPUTS = {
        "probe": "API connected successfully",
        "solve": "# Solutions\n\nThis is a stubbed solution.",
    }

    def __init__(
        self,
        outputs: Optional[Dict[str, str]] = None,
        error_type: Optional[ErrorCategory] = None,
        failing_tasks: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            outputs: Per-task output overrides
            error_type: When set, calls fail with this category
            failing_tasks: Restrict failures to these tasks (default: all)
        """
        self.outputs = {**self.DEFAULT_OUTPUTS, **(outputs or {})}
        self.error_type = error_type
        self.failing_tasks = set(failing_tasks) if failing_tasks is not None else None
        self.requests: List[ModelRequest] = []

    def calls_for(self, task: str) -> List[ModelRequest]:
        """Requests received for a given task."""
        return [r for r in self.requests if r.task == task]

    def generate(self, request: ModelRequest) -> ModelResponse:
        """
        Generate a deterministic response based on task type.

        Args:
            request: ModelRequest with task, prompt, and optional parameters

        Returns:
            ModelResponse with deterministic output based on task
        """
        self.requests.append(request)

        if self.error_type is not None and (
            self.failing_tasks is None or request.task in self.failing_tasks
        ):
            return ModelResponse(
                status="recoverable_error" if self.error_type in THROTTLED else "fatal_error",
                error_type=self.error_type.value,
                metadata={"backend": "stub", "trace_id": request.trace_id},
            )

        if request.task in self.outputs:
            return ModelResponse(
                status="success",
                output=self.outputs[request.task],
                metadata={"backend": "stub", "trace_id": request.trace_id},
            )

        # Default stub output for any other task
        return ModelResponse(
            status="success",
            output=f"Default stub output for task: {request.task}",
            metadata={"backend": "stub", "trace_id": request.trace_id},
        )
