"""
Availability probe for the generation endpoint.

Used by the health endpoint and as a gate in front of every generation.
"""

import logging
import time
from typing import Optional

from inference import ModelBackend, ModelRequest
from inference.errors import PROBE_MESSAGES, ErrorCategory, coerce_category

from .prompts import PROBE_MAX_OUTPUT_TOKENS, PROBE_PROMPT
from .types import ProbeResult

logger = logging.getLogger(__name__)


class AvailabilityProbe:
    """
    Sends a trivial prompt and reports whether a non-empty answer came back.

    With cache_ttl_s == 0 every call hits the endpoint. A positive TTL
    reuses the last *successful* result until it expires or invalidate()
    is called; failures are never cached.
    """

    def __init__(
        self,
        backend: ModelBackend,
        cache_ttl_s: float = 0,
        timeout_s: int = 60,
        clock=time.monotonic,
    ):
        self.backend = backend
        self.timeout_s = timeout_s
        self.cache_ttl_s = cache_ttl_s
        self._clock = clock
        self._cached: Optional[ProbeResult] = None
        self._cached_at: float = 0.0

    def invalidate(self) -> None:
        """Forget any cached result."""
        self._cached = None

    def check(self) -> ProbeResult:
        """
        Probe the endpoint.

        Returns:
            ProbeResult; valid only for a non-empty response text
        """
        if self._cached is not None and self._clock() - self._cached_at < self.cache_ttl_s:
            return self._cached

        logger.info("Testing generation API connection...")

        response = self.backend.generate(
            ModelRequest(
                task="probe",
                prompt=PROBE_PROMPT,
                max_output_tokens=PROBE_MAX_OUTPUT_TOKENS,
                timeout_s=self.timeout_s,
            )
        )

        if response.status == "success" and response.output and response.output.strip():
            result = ProbeResult(valid=True)
            if self.cache_ttl_s > 0:
                self._cached = result
                self._cached_at = self._clock()
        elif response.status == "success":
            result = ProbeResult(valid=False, error=PROBE_MESSAGES[ErrorCategory.UNKNOWN])
        else:
            result = ProbeResult(
                valid=False,
                error=PROBE_MESSAGES[coerce_category(response.error_type)],
            )
            self.invalidate()

        logger.info(f"API validation result: {'SUCCESS' if result.valid else 'FAILED'}")
        return result
