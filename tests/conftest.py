"""Shared fixtures and stubs for the chat widgets tests."""

from typing import Any, Dict, List, Optional, Sequence

import pytest

from chatwidgets.schemas.chat import ContextMessage
from chatwidgets.schemas.completion import CompletionResponse, ToolDescriptor
from chatwidgets.threads.service import InMemoryThreadService


class StubCompletionClient:
    """Completion client returning scripted responses and recording calls."""

    def __init__(
        self,
        responses: Optional[List[str]] = None,
        default: str = "Stub response",
        error: Optional[BaseException] = None,
    ):
        self.responses = list(responses or [])
        self.default = default
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def complete(
        self,
        messages: Sequence[ContextMessage],
        *,
        tools: Sequence[ToolDescriptor] = (),
        instructions: Optional[str] = None,
        max_output_tokens: Optional[int] = None,
    ) -> CompletionResponse:
        self.calls.append({
            "messages": list(messages),
            "tools": list(tools),
            "instructions": instructions,
            "max_output_tokens": max_output_tokens,
        })
        if self.error is not None:
            raise self.error
        text = self.responses.pop(0) if self.responses else self.default
        return CompletionResponse(text=text)


@pytest.fixture
def completion() -> StubCompletionClient:
    return StubCompletionClient()


@pytest.fixture
def thread_service() -> InMemoryThreadService:
    return InMemoryThreadService()
