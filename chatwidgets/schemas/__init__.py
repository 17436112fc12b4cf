"""Pydantic models shared across the chat widgets core."""

from .chat import ChatRole, ChatSummary, ChatTurn, ContextMessage, ThreadHistory
from .completion import CompletionResponse, ToolCall, ToolDescriptor

__all__ = [
    "ChatRole",
    "ChatSummary",
    "ChatTurn",
    "CompletionResponse",
    "ContextMessage",
    "ThreadHistory",
    "ToolCall",
    "ToolDescriptor",
]
