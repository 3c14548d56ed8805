from dataclasses import dataclass
from typing import Optional, Dict, Any, Literal

ModelStatus = Literal["success", "recoverable_error", "fatal_error"]


@dataclass
class ModelRequest:
    task: str                  # e.g. "solve", "probe"
    prompt: str
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    timeout_s: Optional[int] = 60
    trace_id: Optional[str] = None


@dataclass
class ModelResponse:
    status: ModelStatus
    output: Optional[str] = None
    error_type: Optional[str] = None   # an ErrorCategory value
    metadata: Optional[Dict[str, Any]] = None
