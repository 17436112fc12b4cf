"""Chat history summarizer backed by the completion capability."""

import logging
from dataclasses import dataclass
from typing import Sequence

from chatwidgets.schemas.chat import ChatRole, ChatTurn, ContextMessage
from chatwidgets.services.completion import CompletionClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SummarizerConfig:
    """Configuration for the history summarizer."""

    transcript_header: str = "Conversation history to summarize:\n\n"
    instructions: str = """You are a helpful assistant that creates concise summaries of conversations.
Summarize the conversation in 2-4 sentences, focusing on:
- Main topics discussed
- Important decisions or conclusions
- Key context that would be needed to continue the conversation
- Any action items or pending questions

Be concise and factual. Do not include greetings or meta-commentary."""


CONFIG = SummarizerConfig()


class ChatHistorySummarizer:
    """Turns a run of chat turns into a short natural-language summary."""

    def __init__(self, completion: CompletionClient, max_output_tokens: int = 200):
        """Initialize summarizer.

        Args:
            completion: Completion capability used to write the summary
            max_output_tokens: Output token cap sent with each request
        """
        self.completion = completion
        self.max_output_tokens = max_output_tokens

    @staticmethod
    def format_transcript(turns: Sequence[ChatTurn]) -> str:
        """Render turns as ``Role: content`` lines under the transcript header."""
        lines = [f"{turn.role.value.capitalize()}: {turn.content}" for turn in turns]
        return CONFIG.transcript_header + "\n".join(lines)

    async def summarize(self, turns: Sequence[ChatTurn]) -> str:
        """Summarize turns.

        Args:
            turns: Ordered turns to summarize (may be empty)

        Returns:
            The model's response text verbatim, or "" for empty input
            (no model call is made in that case)
        """
        if not turns:
            return ""

        logger.debug(f"Summarizing {len(turns)} turns")
        response = await self.completion.complete(
            [ContextMessage(role=ChatRole.USER, content=self.format_transcript(turns))],
            instructions=CONFIG.instructions,
            max_output_tokens=self.max_output_tokens,
        )
        return response.text
