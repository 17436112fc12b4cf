"""Bounded context: summaries plus recent raw turns."""

from typing import List, Optional, Sequence, Union

from chatwidgets.core.errors import InvalidArgumentError
from chatwidgets.schemas.chat import (
    ChatRole,
    ChatSummary,
    ChatTurn,
    ContextMessage,
    ThreadHistory,
)

SUMMARY_HEADER = "Previous conversation summary:\n"


def to_bounded_context(
    history: Union[ThreadHistory, Sequence[ChatTurn]],
    max_recent_turns: int,
    summaries: Optional[Sequence[ChatSummary]],
) -> List[ContextMessage]:
    """Build the message list sent to the completion capability.

    One system message concatenating every summary text comes first (only
    when summaries exist), followed by the last ``max_recent_turns`` turns
    with role and content preserved and widgets dropped.

    Args:
        history: Thread snapshot or ordered turns
        max_recent_turns: Number of trailing raw turns to include (>= 1)
        summaries: Stored summaries for the thread, possibly empty

    Returns:
        Ordered list of context messages

    Raises:
        InvalidArgumentError: If summaries is None or max_recent_turns < 1
    """
    if summaries is None:
        raise InvalidArgumentError("summaries must not be None", parameter="summaries")
    if max_recent_turns < 1:
        raise InvalidArgumentError(
            f"max_recent_turns must be at least 1, got {max_recent_turns}",
            parameter="max_recent_turns",
        )

    turns = history.turns if isinstance(history, ThreadHistory) else tuple(history)

    messages: List[ContextMessage] = []
    if summaries:
        summary_text = "\n\n".join(s.summary_text for s in summaries)
        messages.append(
            ContextMessage(role=ChatRole.SYSTEM, content=SUMMARY_HEADER + summary_text)
        )

    for turn in turns[-max_recent_turns:]:
        messages.append(ContextMessage(role=turn.role, content=turn.content))

    return messages
