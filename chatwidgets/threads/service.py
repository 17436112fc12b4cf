"""Thread lifecycle and history storage."""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from chatwidgets.core.errors import ThreadNotFoundError
from chatwidgets.schemas.chat import ChatSummary, ChatTurn, ContextMessage, ThreadHistory

from .context import to_bounded_context

logger = logging.getLogger(__name__)


class ThreadService(ABC):
    """Owns per-thread turn history and summaries.

    Operations on an unknown thread id raise ``ThreadNotFoundError``; threads
    are never created implicitly.
    """

    @abstractmethod
    async def create_thread(self) -> str:
        """Create an empty thread and return its new unique ID."""

    @abstractmethod
    async def thread_exists(self, thread_id: str) -> bool:
        """Check whether a thread is stored."""

    @abstractmethod
    async def append_message(self, thread_id: str, turn: ChatTurn) -> ThreadHistory:
        """Append a turn and return the updated history."""

    @abstractmethod
    async def delete_thread(self, thread_id: str) -> None:
        """Remove a thread with its turns and summaries."""

    @abstractmethod
    async def store_summary(self, thread_id: str, summary: ChatSummary) -> None:
        """Append a summary in arrival order."""

    @abstractmethod
    async def get_summaries(self, thread_id: str) -> List[ChatSummary]:
        """Get the thread's summaries (empty list when none were stored)."""

    @abstractmethod
    async def get_history(self, thread_id: str) -> ThreadHistory:
        """Get the full ordered turn history."""

    @staticmethod
    def to_bounded_context(
        history: Union[ThreadHistory, Sequence[ChatTurn]],
        max_recent_turns: int,
        summaries: Optional[Sequence[ChatSummary]],
    ) -> List[ContextMessage]:
        """See ``chatwidgets.threads.context.to_bounded_context``."""
        return to_bounded_context(history, max_recent_turns, summaries)


@dataclass
class _ThreadState:
    turns: List[ChatTurn] = field(default_factory=list)
    summaries: List[ChatSummary] = field(default_factory=list)


class InMemoryThreadService(ThreadService):
    """Process-local thread store.

    No operation awaits between reading and writing a thread's state, so each
    one runs to completion on the event loop without interleaving. Concurrent
    appends to one thread land in arrival order. Not safe across OS threads.
    """

    def __init__(self) -> None:
        self._threads: Dict[str, _ThreadState] = {}

    def _get_state(self, thread_id: str) -> _ThreadState:
        state = self._threads.get(thread_id)
        if state is None:
            raise ThreadNotFoundError(thread_id)
        return state

    async def create_thread(self) -> str:
        thread_id = uuid.uuid4().hex
        self._threads[thread_id] = _ThreadState()
        logger.info(f"Created thread {thread_id}")
        return thread_id

    async def thread_exists(self, thread_id: str) -> bool:
        return thread_id in self._threads

    async def append_message(self, thread_id: str, turn: ChatTurn) -> ThreadHistory:
        state = self._get_state(thread_id)
        state.turns.append(turn)
        return ThreadHistory(thread_id=thread_id, turns=tuple(state.turns))

    async def delete_thread(self, thread_id: str) -> None:
        self._get_state(thread_id)
        del self._threads[thread_id]
        logger.info(f"Deleted thread {thread_id}")

    async def store_summary(self, thread_id: str, summary: ChatSummary) -> None:
        self._get_state(thread_id).summaries.append(summary)
        logger.info(
            f"Stored summary for thread {thread_id} "
            f"(turns {summary.start_turn_index}-{summary.end_turn_index})"
        )

    async def get_summaries(self, thread_id: str) -> List[ChatSummary]:
        return list(self._get_state(thread_id).summaries)

    async def get_history(self, thread_id: str) -> ThreadHistory:
        state = self._get_state(thread_id)
        return ThreadHistory(thread_id=thread_id, turns=tuple(state.turns))
