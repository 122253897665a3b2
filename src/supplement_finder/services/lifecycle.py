"""Request lifecycle state machine shared by the coordinators.

Each dispatch is tagged with a monotonically increasing ``request_id``. When
``discard_stale`` is enabled, settle events from anything but the latest
dispatch are ignored; otherwise the last response to settle wins, even when it
belongs to an older request.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import ValidationError

from supplement_finder.adapters.http_client import HttpError

T = TypeVar("T")


@dataclass(frozen=True)
class Idle:
    """No request is wanted; data is cleared."""

    request_id: int = 0


@dataclass(frozen=True)
class Loading:
    """A request is in flight."""

    request_id: int


@dataclass(frozen=True)
class Success(Generic[T]):
    """The latest request settled with data."""

    request_id: int
    data: T


@dataclass(frozen=True)
class Error:
    """The latest request failed with a user-facing message."""

    request_id: int
    message: str


FetchState = Idle | Loading | Success | Error


@dataclass(frozen=True)
class Cleared:
    """Inputs became empty; drop data and in-flight results."""

    request_id: int


@dataclass(frozen=True)
class Started:
    """A new request was dispatched."""

    request_id: int


@dataclass(frozen=True)
class Succeeded(Generic[T]):
    """A request settled successfully."""

    request_id: int
    data: T


@dataclass(frozen=True)
class Failed:
    """A request settled with an error."""

    request_id: int
    message: str


FetchEvent = Cleared | Started | Succeeded | Failed


def is_stale(state: FetchState, event: FetchEvent) -> bool:
    """Return True when a settle event belongs to a superseded request."""
    return (
        isinstance(event, Succeeded | Failed)
        and event.request_id != state.request_id
    )


def transition(
    state: FetchState, event: FetchEvent, *, discard_stale: bool = True
) -> FetchState:
    """Apply an event to the current state and return the next state."""
    if isinstance(event, Cleared):
        return Idle(request_id=event.request_id)
    if isinstance(event, Started):
        return Loading(request_id=event.request_id)
    if discard_stale and is_stale(state, event):
        return state
    if isinstance(event, Succeeded):
        return Success(request_id=event.request_id, data=event.data)
    if isinstance(event, Failed):
        return Error(request_id=event.request_id, message=event.message)
    raise TypeError(f"Unsupported lifecycle event: {event!r}")


@dataclass
class RequestLifecycle(Generic[T]):
    """Owns the current fetch state and hands out request ids."""

    discard_stale: bool = True
    state: FetchState = field(default_factory=Idle)
    _last_request_id: int = field(default=0, init=False, repr=False)

    def clear(self) -> None:
        """Reset to idle and invalidate anything still in flight."""
        self._apply(Cleared(request_id=self._next_request_id()))

    def start(self) -> int:
        """Enter the loading state and return the new request id."""
        request_id = self._next_request_id()
        self._apply(Started(request_id=request_id))
        return request_id

    def succeed(self, request_id: int, data: T) -> bool:
        """Record a successful response; return False if it was discarded."""
        return self._apply(Succeeded(request_id=request_id, data=data))

    def fail(self, request_id: int, message: str) -> bool:
        """Record a failed response; return False if it was discarded."""
        return self._apply(Failed(request_id=request_id, message=message))

    @property
    def status(self) -> str:
        return type(self.state).__name__.lower()

    @property
    def data(self) -> T | None:
        return self.state.data if isinstance(self.state, Success) else None

    @property
    def loading(self) -> bool:
        return isinstance(self.state, Loading)

    @property
    def error(self) -> str | None:
        return self.state.message if isinstance(self.state, Error) else None

    def _next_request_id(self) -> int:
        self._last_request_id += 1
        return self._last_request_id

    def _apply(self, event: FetchEvent) -> bool:
        next_state = transition(self.state, event, discard_stale=self.discard_stale)
        applied = next_state is not self.state
        self.state = next_state
        return applied


def describe_error(exc: Exception, prefix: str, fallback: str) -> str:
    """Build the message shown for a failed request."""
    if isinstance(exc, HttpError):
        return f"{prefix}: {exc}"
    if isinstance(exc, ValidationError):
        return fallback
    return str(exc) or fallback
