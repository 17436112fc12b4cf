"""Triage agent: classify a message, pick a specialized agent, delegate."""

import asyncio
import logging
from typing import Callable, Generic, Optional, Tuple, TypeVar

from chatwidgets.core.errors import ErrorKind
from chatwidgets.core.outcome import Outcome
from chatwidgets.schemas.chat import ChatTurn
from chatwidgets.threads.service import ThreadService

from .base import Agent, ChatRequest
from .classifier import Classifier
from .context import InterAgentContext
from .registry import AgentRegistry

logger = logging.getLogger(__name__)

TCategory = TypeVar("TCategory")

RoutingMapping = Callable[[TCategory], Optional[str]]


class TriageAgent(Agent, Generic[TCategory]):
    """Routes a request to a specialized agent based on its classification.

    Each invocation runs ExtractMessage -> Classify -> Resolve -> Delegate:

    1. The user message is read from the request metadata; a missing or
       blank message fails with ``NoMessage`` before classification.
    2. The classification is always written back to the metadata, even if
       routing fails afterwards.
    3. The routing mapping names a target agent. A None result, or a name
       the registry does not know, falls back to ``fallback_agent_name``
       (looked up in the registry) and then to ``fallback_agent``. With no
       usable fallback the result is ``NoAgent``. The chosen agent's name
       is written to the metadata.
    4. The chosen agent's outcome is returned unchanged.

    Unexpected exceptions become ``TriageFailed``; cancellation propagates.
    """

    name = "triage-agent"

    def __init__(
        self,
        classifier: Classifier[TCategory],
        registry: AgentRegistry,
        routing_mapping: RoutingMapping,
        fallback_agent_name: Optional[str] = None,
        fallback_agent: Optional[Agent] = None,
        thread_service: Optional[ThreadService] = None,
    ):
        """Initialize triage agent.

        Args:
            classifier: Classifier producing the category
            registry: Registry resolving agent names
            routing_mapping: Category to agent name (None means use fallback)
            fallback_agent_name: Registry name used when routing cannot resolve
            fallback_agent: Agent instance used when the fallback name cannot resolve
            thread_service: When given, a thread is created for requests without one
        """
        self.classifier = classifier
        self.registry = registry
        self.routing_mapping = routing_mapping
        self.fallback_agent_name = fallback_agent_name
        self.fallback_agent = fallback_agent
        self.thread_service = thread_service

    def _resolve(self, agent_name: Optional[str]) -> Optional[Tuple[str, Agent]]:
        """Resolve a routed name to (chosen name, agent), applying fallbacks."""
        if agent_name is not None:
            agent = self.registry.get_agent(agent_name)
            if agent is not None:
                return agent_name, agent
            logger.warning(f"Routing named unregistered agent '{agent_name}', using fallback")

        if self.fallback_agent_name is not None:
            agent = self.registry.get_agent(self.fallback_agent_name)
            if agent is not None:
                return self.fallback_agent_name, agent

        if self.fallback_agent is not None:
            fallback_name = (
                getattr(self.fallback_agent, "name", None)
                or self.fallback_agent_name
                or "fallback"
            )
            return fallback_name, self.fallback_agent

        return None

    async def invoke(self, request: ChatRequest) -> Outcome[ChatTurn]:
        context = InterAgentContext(request)

        message = context.user_message
        if not message or not message.strip():
            return Outcome.failure(
                ErrorKind.NO_MESSAGE, "No user message found in request metadata"
            )

        try:
            if request.thread_id is None and self.thread_service is not None:
                request.thread_id = await self.thread_service.create_thread()

            category = await self.classifier.classify(message)
            context.set_classification(category)

            agent_name = self.routing_mapping(category)
            resolved = self._resolve(agent_name)
            if resolved is None:
                logger.warning(f"No agent found for routing key '{agent_name}' ({category})")
                return Outcome.failure(
                    ErrorKind.NO_AGENT, f"No agent found for routing key '{agent_name}'"
                )

            routed_name, agent = resolved
            context.routed_agent = routed_name
            logger.info(f"Routing {category} to {routed_name}")

            return await agent.invoke(request)

        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Triage routing failed: {e}")
            return Outcome.failure(
                ErrorKind.TRIAGE_FAILED, f"Triage routing failed: {e}", cause=e
            )
