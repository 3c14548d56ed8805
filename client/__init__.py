"""
Solver client.

HTTP client, request state machine and markdown export for the solver API.
"""

from .api_client import SolverAPIClient, SolverAPIError, ACCEPTED_EXTENSIONS
from .state import (
    ClientPhase,
    ClientState,
    ClientStateMachine,
    InvalidTransitionError,
    friendly_error,
)
from .session import SolverSession, ClientInputError
from .render import export_filename, export_markdown, render_markdown

__all__ = [
    "SolverAPIClient",
    "SolverAPIError",
    "ACCEPTED_EXTENSIONS",
    "ClientPhase",
    "ClientState",
    "ClientStateMachine",
    "InvalidTransitionError",
    "friendly_error",
    "SolverSession",
    "ClientInputError",
    "export_filename",
    "export_markdown",
    "render_markdown",
]
