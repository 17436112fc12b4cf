"""Tests for Outcome and the error hierarchy."""

import pytest

from chatwidgets.core.errors import (
    ErrorKind,
    InvalidArgumentError,
    OutcomeFailedError,
    ThreadNotFoundError,
)
from chatwidgets.core.outcome import Outcome


class TestOutcome:
    def test_success(self):
        outcome = Outcome.success("value")

        assert outcome.is_success
        assert not outcome.is_failure
        assert outcome.value == "value"
        assert outcome.error is None
        assert outcome.unwrap() == "value"

    def test_failure(self):
        cause = RuntimeError("boom")
        outcome = Outcome.failure(ErrorKind.NO_AGENT, "no agent", cause=cause)

        assert outcome.is_failure
        assert outcome.value is None
        assert outcome.error.kind == ErrorKind.NO_AGENT
        assert outcome.error.message == "no agent"
        assert outcome.error.cause is cause

    def test_unwrap_failure_raises(self):
        outcome = Outcome.failure(ErrorKind.NO_MESSAGE, "missing")

        with pytest.raises(OutcomeFailedError) as exc_info:
            outcome.unwrap()

        assert exc_info.value.kind == ErrorKind.NO_MESSAGE
        assert exc_info.value.error is outcome.error

    def test_is_immutable(self):
        outcome = Outcome.success(1)

        with pytest.raises(AttributeError):
            outcome._value = 2


class TestErrors:
    def test_thread_not_found_message(self):
        error = ThreadNotFoundError("abc")

        assert str(error) == "Thread with ID 'abc' not found."
        assert error.kind == ErrorKind.THREAD_NOT_FOUND
        assert error.thread_id == "abc"
        assert error.to_dict() == {
            "kind": "ThreadNotFound",
            "message": "Thread with ID 'abc' not found.",
            "context": {"thread_id": "abc"},
        }

    def test_invalid_argument_is_value_error(self):
        error = InvalidArgumentError("bad", parameter="x")

        assert isinstance(error, ValueError)
        assert error.kind == ErrorKind.INVALID_ARGUMENT
        assert error.parameter == "x"
