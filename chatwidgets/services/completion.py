"""Completion capability contract."""

from typing import Optional, Protocol, Sequence, runtime_checkable

from chatwidgets.schemas.chat import ContextMessage
from chatwidgets.schemas.completion import CompletionResponse, ToolDescriptor


@runtime_checkable
class CompletionClient(Protocol):
    """Send role-tagged messages (plus optional tools and instructions) to a model."""

    async def complete(
        self,
        messages: Sequence[ContextMessage],
        *,
        tools: Sequence[ToolDescriptor] = (),
        instructions: Optional[str] = None,
        max_output_tokens: Optional[int] = None,
    ) -> CompletionResponse:
        ...
