"""Tagged success/failure result used for expected control flow."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import ErrorKind, OutcomeFailedError

T = TypeVar("T")


@dataclass(frozen=True)
class OutcomeError:
    """Failure payload of an ``Outcome``.

    Attributes:
        kind: The error kind
        message: Human-readable description
        cause: Underlying exception, when the failure wraps one
    """

    kind: ErrorKind
    message: str
    cause: Optional[BaseException] = None


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a success carrying a value or a failure carrying an ``OutcomeError``.

    Build instances through ``success`` and ``failure``.
    """

    _value: Optional[T] = None
    _error: Optional[OutcomeError] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(_value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> "Outcome[T]":
        return cls(_error=OutcomeError(kind=kind, message=message, cause=cause))

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> Optional[T]:
        """The success value, or None for a failure."""
        return self._value

    @property
    def error(self) -> Optional[OutcomeError]:
        """The failure payload, or None for a success."""
        return self._error

    def unwrap(self) -> T:
        """Return the success value.

        Raises:
            OutcomeFailedError: If the outcome is a failure
        """
        if self._error is not None:
            raise OutcomeFailedError(self._error)
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self._error is not None:
            return f"Outcome.failure({self._error.kind.value}: {self._error.message})"
        return f"Outcome.success({self._value!r})"
