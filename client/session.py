"""
Solver session: the client state machine bound to the API client.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .api_client import ACCEPTED_EXTENSIONS, SolverAPIClient, SolverAPIError
from .state import ClientState, ClientStateMachine, friendly_error

logger = logging.getLogger(__name__)

MAX_FILE_BYTES = 10 * 1024 * 1024  # 10MB, same ceiling as the server


class ClientInputError(ValueError):
    """Input rejected before anything is sent."""
    pass


class SolverSession:
    """Submits one request at a time and tracks its state."""

    def __init__(
        self,
        client: SolverAPIClient,
        machine: Optional[ClientStateMachine] = None,
    ):
        self.client = client
        self.machine = machine or ClientStateMachine()

    @property
    def state(self) -> ClientState:
        return self.machine.state

    def submit(
        self,
        text: Optional[str] = None,
        file_path: Optional[Union[str, Path]] = None,
    ) -> ClientState:
        """
        Validate input, send it, and settle in SUCCESS or ERROR.

        A file takes precedence over text, as in the upload form.

        Raises:
            ClientInputError: nothing to send, or a file the server would refuse
            InvalidTransitionError: a request is already in flight
        """
        if file_path is not None:
            path = self._check_file(Path(file_path))
            self.machine.begin(f"Extracting text from {path.name} and generating solutions")
            return self._settle(lambda: self.client.process_file(path))

        if text is None or not text.strip():
            raise ClientInputError("Please upload a file or enter text to process")

        self.machine.begin("Generating solutions")
        return self._settle(lambda: self.client.process_text(text))

    def _check_file(self, path: Path) -> Path:
        if path.suffix.lower() not in ACCEPTED_EXTENSIONS:
            raise ClientInputError(
                "Unsupported file type. Please upload PDF, PNG, JPG, or TXT files."
            )
        if not path.is_file():
            raise ClientInputError(f"File not found: {path}")
        if path.stat().st_size > MAX_FILE_BYTES:
            raise ClientInputError("File size too large. Maximum size is 10MB.")
        return path

    def _settle(self, send) -> ClientState:
        try:
            result = send()
        except SolverAPIError as e:
            logger.error(f"Processing failed ({e.status_code}): {e.message}")
            return self.machine.fail(friendly_error(e.status_code, e.message))
        return self.machine.succeed(result)
