"""
Client-side request state machine.

    IDLE ──begin──▶ IN_FLIGHT ──succeed──▶ SUCCESS
                        │                     │
                        └──fail──▶ ERROR ◀────┘ (begin again from either)

One request at a time: begin() is refused while a request is in flight.
Progress is reported honestly as busy / not busy; the server gives no
incremental progress, so no percentages are invented.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class ClientPhase(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCESS = "success"
    ERROR = "error"


class InvalidTransitionError(Exception):
    """Transition not allowed from the current phase."""
    pass


@dataclass(frozen=True)
class ClientState:
    phase: ClientPhase = ClientPhase.IDLE
    label: str = ""
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def is_busy(self) -> bool:
        return self.phase is ClientPhase.IN_FLIGHT


Listener = Callable[[ClientState], None]


class ClientStateMachine:
    """Drives a single in-flight request through its visible states."""

    def __init__(self):
        self._state = ClientState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state.is_busy

    def subscribe(self, listener: Listener) -> None:
        """Call listener with every new state."""
        self._listeners.append(listener)

    def begin(self, label: str) -> ClientState:
        if self._state.is_busy:
            raise InvalidTransitionError("A request is already in flight")
        return self._set(ClientState(phase=ClientPhase.IN_FLIGHT, label=label))

    def succeed(self, result: Dict[str, Any]) -> ClientState:
        self._require_in_flight("succeed")
        return self._set(ClientState(phase=ClientPhase.SUCCESS, label="Solutions ready", result=result))

    def fail(self, message: str) -> ClientState:
        self._require_in_flight("fail")
        return self._set(ClientState(phase=ClientPhase.ERROR, label="Processing failed", error=message))

    def reset(self) -> ClientState:
        if self._state.is_busy:
            raise InvalidTransitionError("Cannot reset while a request is in flight")
        return self._set(ClientState())

    def _require_in_flight(self, action: str) -> None:
        if not self._state.is_busy:
            raise InvalidTransitionError(f"Cannot {action} from {self._state.phase.value}")

    def _set(self, state: ClientState) -> ClientState:
        self._state = state
        for listener in self._listeners:
            listener(state)
        return state


def friendly_error(status_code: Optional[int], message: str) -> str:
    """
    Map a server failure to the message shown to the user.

    Args:
        status_code: HTTP status, or None when the server was unreachable
        message: The server's message (or transport error text)
    """
    lowered = (message or "").lower()
    if status_code == 429:
        if "quota" in lowered:
            return "API quota exceeded. Please try again in a few minutes."
        return "Too many requests. Please wait a moment and try again."
    if status_code == 503 or "unavailable" in lowered:
        return "AI service temporarily unavailable. Please try again shortly."
    if "api key" in lowered:
        return "API configuration issue. Please contact support."
    return message or "Failed to process request. Please try again."
