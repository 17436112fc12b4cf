"""Composition root: builds a ready-to-use chat service from settings."""

import logging
from typing import Optional

from chatwidgets.agents.base import Agent
from chatwidgets.config import Settings, get_settings
from chatwidgets.core.log import configure_logging
from chatwidgets.services.chat_service import ChatOrchestrationService
from chatwidgets.services.completion import CompletionClient
from chatwidgets.services.persona import PersonaOptions, validate_persona_settings
from chatwidgets.threads.policy import SummarizationPolicy
from chatwidgets.threads.service import InMemoryThreadService, ThreadService
from chatwidgets.threads.summarizer import ChatHistorySummarizer

logger = logging.getLogger(__name__)


async def build_thread_service(settings: Settings) -> ThreadService:
    """Create the thread store selected by ``thread_store_mode``."""
    if settings.thread_store_mode == "redis":
        from chatwidgets.threads.redis_store import RedisThreadService

        return await RedisThreadService.connect(settings)
    return InMemoryThreadService()


async def build_chat_service(
    settings: Optional[Settings] = None,
    completion: Optional[CompletionClient] = None,
    thread_service: Optional[ThreadService] = None,
    triage_agent: Optional[Agent] = None,
) -> ChatOrchestrationService:
    """Wire the chat service.

    Args:
        settings: Settings to use, defaults to ``get_settings()``
        completion: Completion capability, defaults to the Azure OpenAI client
        thread_service: Thread store, defaults to the one selected by settings
        triage_agent: Agent for ``respond_with_triage``

    Returns:
        Configured ChatOrchestrationService

    Raises:
        InvalidArgumentError: If persona or completion settings are invalid
        RuntimeError: If the Redis store cannot connect
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    validate_persona_settings(settings)

    if completion is None:
        from chatwidgets.services.agent_framework_client import create_completion_client

        completion = create_completion_client(settings)

    if thread_service is None:
        thread_service = await build_thread_service(settings)

    summarizer = ChatHistorySummarizer(
        completion, max_output_tokens=settings.summary_max_output_tokens
    )
    policy = SummarizationPolicy(
        summarizer,
        thread_service,
        enabled=settings.auto_summarization_enabled,
        threshold=settings.summarization_threshold,
        recent_turns_to_keep=settings.recent_turns_to_keep,
    )

    logger.info(
        f"Chat service ready (store={type(thread_service).__name__}, "
        f"summarization={'on' if policy.enabled else 'off'})"
    )
    return ChatOrchestrationService(
        completion=completion,
        thread_service=thread_service,
        summarization_policy=policy,
        triage_agent=triage_agent,
        persona_options=PersonaOptions.from_settings(settings),
        max_context_turns=settings.max_context_turns,
        max_uncovered_turns=settings.max_uncovered_turns,
    )
