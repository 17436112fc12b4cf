"""Threshold-based summarization policy applied after each full turn."""

import logging
from typing import Optional, Set

from chatwidgets.core.errors import InvalidArgumentError
from chatwidgets.schemas.chat import ChatSummary

from .service import ThreadService
from .summarizer import ChatHistorySummarizer

logger = logging.getLogger(__name__)


class SummarizationPolicy:
    """Decides when to summarize a thread and which turns to cover.

    Once the thread holds more than ``threshold`` turns, every turn that is
    neither covered by an earlier summary nor among the last
    ``recent_turns_to_keep`` turns is summarized into one new summary.
    Successive summaries therefore cover adjacent, non-overlapping ranges.

    Summarization is best effort: failures are logged and swallowed so the
    user-facing response is never affected. A thread that is already being
    summarized is skipped rather than summarized twice.
    """

    def __init__(
        self,
        summarizer: ChatHistorySummarizer,
        thread_service: ThreadService,
        enabled: bool = True,
        threshold: int = 15,
        recent_turns_to_keep: int = 10,
    ):
        """Initialize policy.

        Args:
            summarizer: Summarizer that writes the summary text
            thread_service: Store holding history and summaries
            enabled: Master switch for automatic summarization
            threshold: Summarize once the turn count exceeds this
            recent_turns_to_keep: Trailing turns left unsummarized

        Raises:
            InvalidArgumentError: If threshold < 1 or recent_turns_to_keep < 1
        """
        if threshold < 1:
            raise InvalidArgumentError(
                f"threshold must be at least 1, got {threshold}", parameter="threshold"
            )
        if recent_turns_to_keep < 1:
            raise InvalidArgumentError(
                f"recent_turns_to_keep must be at least 1, got {recent_turns_to_keep}",
                parameter="recent_turns_to_keep",
            )
        self.summarizer = summarizer
        self.thread_service = thread_service
        self.enabled = enabled
        self.threshold = threshold
        self.recent_turns_to_keep = recent_turns_to_keep
        self._in_progress: Set[str] = set()

    def calculate_range(
        self, total_turns: int, last_summary: Optional[ChatSummary]
    ) -> Optional[tuple[int, int]]:
        """Calculate the next inclusive range to summarize.

        Args:
            total_turns: Number of turns currently in the thread
            last_summary: Most recent stored summary, if any

        Returns:
            Tuple of (start_index, end_index), or None if nothing is eligible
        """
        if total_turns <= self.threshold:
            return None

        start = last_summary.end_turn_index + 1 if last_summary else 0
        end = total_turns - self.recent_turns_to_keep - 1
        if start > end:
            return None
        return (start, end)

    async def apply(self, thread_id: str) -> Optional[ChatSummary]:
        """Summarize the newly eligible range of a thread, if any.

        Args:
            thread_id: Thread to inspect

        Returns:
            The stored summary, or None when nothing was stored
        """
        if not self.enabled:
            return None

        if thread_id in self._in_progress:
            logger.debug(f"Summary already in progress for {thread_id}, skipping")
            return None

        self._in_progress.add(thread_id)
        try:
            history = await self.thread_service.get_history(thread_id)
            summaries = await self.thread_service.get_summaries(thread_id)

            summary_range = self.calculate_range(
                len(history.turns), summaries[-1] if summaries else None
            )
            if summary_range is None:
                logger.debug(
                    f"No turns eligible for summarization in {thread_id} "
                    f"({len(history.turns)} turns, threshold {self.threshold})"
                )
                return None

            start, end = summary_range
            text = await self.summarizer.summarize(history.turns[start : end + 1])
            if not text or not text.strip():
                logger.warning(f"Empty summary generated for {thread_id}, not storing")
                return None

            summary = ChatSummary(summary_text=text, start_turn_index=start, end_turn_index=end)
            await self.thread_service.store_summary(thread_id, summary)
            logger.info(f"Summarized turns {start}-{end} for {thread_id}")
            return summary

        except Exception as e:
            logger.error(f"Failed to summarize turns for {thread_id}: {e}")
            return None
        finally:
            self._in_progress.discard(thread_id)
