"""Core building blocks shared by threads, agents and services."""

from .errors import (
    ChatWidgetsError,
    ErrorKind,
    InvalidArgumentError,
    OutcomeFailedError,
    ThreadNotFoundError,
)
from .outcome import Outcome, OutcomeError

__all__ = [
    "ChatWidgetsError",
    "ErrorKind",
    "InvalidArgumentError",
    "Outcome",
    "OutcomeError",
    "OutcomeFailedError",
    "ThreadNotFoundError",
]
