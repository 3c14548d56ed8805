"""
HTTP client for the solver API.

Pure I/O: sends requests and decodes responses. No retries.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

# Extension → media type, matching what the server accepts
ACCEPTED_EXTENSIONS = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".txt": "text/plain",
}


class SolverAPIError(Exception):
    """Non-2xx response or transport failure."""

    def __init__(
        self,
        status_code: Optional[int],
        message: str,
        retry_after: Optional[int] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.retry_after = retry_after


class SolverAPIClient:
    """
    Synchronous client for /api/*.

    Pass http_client to reuse a configured httpx.Client (e.g. a
    fastapi.testclient.TestClient in tests).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        http_client: Optional[httpx.Client] = None,
        timeout: float = 120.0,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def __enter__(self) -> "SolverAPIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/api/health")

    def process_text(self, text: str, filename: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"text": text}
        if filename:
            payload["filename"] = filename
        return self._request("POST", "/api/process-text", json=payload)

    def process_bytes(self, data: bytes, filename: str, media_type: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/api/process-file",
            files={"file": (filename, data, media_type)},
        )

    def process_file(self, path: Path) -> Dict[str, Any]:
        """Upload a file; media type follows the extension."""
        path = Path(path)
        media_type = ACCEPTED_EXTENSIONS.get(path.suffix.lower(), "application/octet-stream")
        return self.process_bytes(path.read_bytes(), path.name, media_type)

    def status(self, job_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/status/{job_id}")

    def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"HTTP request failed: {e}")
            raise SolverAPIError(None, "Could not reach the solver service") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_success:
            return body

        message = body.get("message") if isinstance(body, dict) else None
        retry_after = body.get("retryAfter") if isinstance(body, dict) else None
        raise SolverAPIError(
            response.status_code,
            message or f"Request failed with status {response.status_code}",
            retry_after,
        )
