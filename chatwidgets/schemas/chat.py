"""Conversation value types: turns, summaries and thread snapshots."""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChatRole(str, Enum):
    """Role of a message author."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatTurn(BaseModel):
    """One message in a conversation thread. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole = Field(..., description="Author role")
    content: str = Field(..., description="Message text")
    widgets: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Widget descriptors attached to the message"
    )
    thread_id: str = Field(default="", description="Owning thread ID")
    metadata: Dict[str, Any] = Field(
        default_factory=dict, description="Agent-supplied annotations"
    )


class ChatSummary(BaseModel):
    """Condensed representation of the inclusive turn range [start, end]."""

    model_config = ConfigDict(frozen=True)

    summary_text: str
    start_turn_index: int = Field(..., ge=0)
    end_turn_index: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "ChatSummary":
        if self.start_turn_index > self.end_turn_index:
            raise ValueError(
                f"start_turn_index ({self.start_turn_index}) must not exceed "
                f"end_turn_index ({self.end_turn_index})"
            )
        return self


class ThreadHistory(BaseModel):
    """Snapshot of a thread's ordered turns."""

    model_config = ConfigDict(frozen=True)

    thread_id: str
    turns: Tuple[ChatTurn, ...] = ()


class ContextMessage(BaseModel):
    """Role-tagged message sent to the completion capability (no widgets)."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str
