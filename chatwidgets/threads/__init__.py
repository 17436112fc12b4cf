"""Thread storage, bounded context and summarization."""

from .context import to_bounded_context
from .policy import SummarizationPolicy
from .service import InMemoryThreadService, ThreadService
from .summarizer import ChatHistorySummarizer

__all__ = [
    "ChatHistorySummarizer",
    "InMemoryThreadService",
    "SummarizationPolicy",
    "ThreadService",
    "to_bounded_context",
]
