"""Error kinds and exceptions used across the chat widgets core."""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .outcome import OutcomeError


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced by the core."""

    THREAD_NOT_FOUND = "ThreadNotFound"
    INVALID_ARGUMENT = "InvalidArgument"
    NO_MESSAGE = "NoMessage"
    NO_AGENT = "NoAgent"
    TRIAGE_FAILED = "TriageFailed"
    CANCELLED = "Cancelled"


class ChatWidgetsError(Exception):
    """Base exception for all chat widgets errors.

    Attributes:
        kind: The error kind
        message: Human-readable error message
        context: Extra diagnostic values (thread id, parameter name, ...)
    """

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        **context: Any,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.context = context

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "context": dict(self.context),
        }

    def __str__(self) -> str:
        return self.message


class ThreadNotFoundError(ChatWidgetsError):
    """Raised when an operation references a thread id that is not stored."""

    kind = ErrorKind.THREAD_NOT_FOUND

    def __init__(self, thread_id: str):
        super().__init__(
            f"Thread with ID '{thread_id}' not found.",
            thread_id=thread_id,
        )
        self.thread_id = thread_id


class InvalidArgumentError(ChatWidgetsError, ValueError):
    """Raised when a caller violates a documented precondition."""

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message, parameter=parameter)
        self.parameter = parameter


class OutcomeFailedError(ChatWidgetsError):
    """Raised by ``Outcome.unwrap()`` when the outcome is a failure."""

    def __init__(self, error: "OutcomeError"):
        super().__init__(error.message, kind=error.kind)
        self.error = error
        if error.cause is not None:
            self.__cause__ = error.cause
