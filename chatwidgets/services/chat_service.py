"""Top-level chat entry point tying threads, completion and summarization together."""

import json
import logging
from typing import Any, List, Optional

from chatwidgets.agents.base import Agent, ChatRequest
from chatwidgets.agents.context import InterAgentContext
from chatwidgets.core.errors import InvalidArgumentError
from chatwidgets.core.outcome import Outcome
from chatwidgets.schemas.chat import ChatRole, ChatTurn, ContextMessage
from chatwidgets.threads.context import to_bounded_context
from chatwidgets.threads.policy import SummarizationPolicy
from chatwidgets.threads.service import ThreadService

from .completion import CompletionClient
from .persona import PersonaOptions, ThreadPersonaStore, normalize_incoming_persona
from .providers import InstructionProvider, ToolsProvider
from .widget_hints import WidgetHintParser

logger = logging.getLogger(__name__)

RETRY_ACTION = "retry"


class ChatOrchestrationService:
    """Answers user messages within a thread.

    Handles:
    - Thread creation when the caller has none (or an unknown one)
    - Bounded context (summaries + recent turns) for every completion call
    - Widget extraction from responses
    - Summarization after each full user/assistant exchange
    - Optional routing through a triage agent

    Completion failures propagate to the caller; summarization failures do not.
    """

    def __init__(
        self,
        completion: CompletionClient,
        thread_service: ThreadService,
        summarization_policy: Optional[SummarizationPolicy] = None,
        widget_hint_parser: Optional[WidgetHintParser] = None,
        tools_provider: Optional[ToolsProvider] = None,
        instruction_provider: Optional[InstructionProvider] = None,
        triage_agent: Optional[Agent] = None,
        persona_options: Optional[PersonaOptions] = None,
        persona_store: Optional[ThreadPersonaStore] = None,
        max_context_turns: int = 10,
        max_uncovered_turns: int = 24,
    ):
        """Initialize chat service.

        Args:
            completion: Completion capability answering messages
            thread_service: Thread storage
            summarization_policy: Policy applied after each exchange, None disables it
            widget_hint_parser: Parser separating widgets from response text
            tools_provider: Source of tool descriptors
            instruction_provider: Source of system instructions
            triage_agent: Agent used by ``respond_with_triage``
            persona_options: Persona behaviour (disabled by default)
            persona_store: Per-thread persona overrides
            max_context_turns: Raw turns sent when the thread has no summaries
            max_uncovered_turns: Upper limit on raw turns sent after the last summary

        Raises:
            InvalidArgumentError: If max_context_turns or max_uncovered_turns < 1
        """
        for parameter, value in (
            ("max_context_turns", max_context_turns),
            ("max_uncovered_turns", max_uncovered_turns),
        ):
            if value < 1:
                raise InvalidArgumentError(
                    f"{parameter} must be at least 1, got {value}", parameter=parameter
                )
        self.completion = completion
        self.thread_service = thread_service
        self.summarization_policy = summarization_policy
        self.widget_hint_parser = widget_hint_parser or WidgetHintParser()
        self.tools_provider = tools_provider or ToolsProvider()
        self.instruction_provider = instruction_provider or InstructionProvider()
        self.triage_agent = triage_agent
        self.persona_options = persona_options or PersonaOptions()
        self.persona_store = persona_store or ThreadPersonaStore()
        self.max_context_turns = max_context_turns
        self.max_uncovered_turns = max_uncovered_turns

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _ensure_thread(self, thread_id: Optional[str]) -> str:
        if thread_id is not None and await self.thread_service.thread_exists(thread_id):
            return thread_id
        if thread_id is not None:
            logger.info(f"Thread {thread_id} not found, starting a new thread")
        return await self.thread_service.create_thread()

    def _normalize_persona(self, persona: Optional[str]) -> Optional[str]:
        if not self.persona_options.enabled:
            return None
        return normalize_incoming_persona(
            persona,
            max_length=self.persona_options.max_length,
            reject_control_characters=self.persona_options.reject_control_characters,
        )

    def _apply_persona(self, thread_id: str, persona: Optional[str]) -> Optional[str]:
        """Store a normalized persona override and return the effective persona."""
        if not self.persona_options.enabled:
            return None
        if persona == "":
            self.persona_store.clear_persona(thread_id)
        elif persona is not None:
            self.persona_store.set_persona(thread_id, persona)
        return self.persona_store.get_persona(thread_id) or self.persona_options.default_persona

    def _compose_instructions(self, persona: Optional[str]) -> Optional[str]:
        instructions = self.instruction_provider.get_instructions()
        if not persona:
            return instructions
        persona_block = f"Persona:\n{persona}"
        return f"{instructions}\n\n{persona_block}" if instructions else persona_block

    async def build_context(self, thread_id: str) -> List[ContextMessage]:
        """Build the bounded context for a thread.

        With summaries, the turns after the last summarized index are sent so
        nothing falls between the summary and the raw tail, up to
        ``max_uncovered_turns`` (the tail keeps growing while summarization
        fails). Without summaries, the last ``max_context_turns`` turns are sent.
        """
        history = await self.thread_service.get_history(thread_id)
        summaries = await self.thread_service.get_summaries(thread_id)

        if summaries:
            uncovered = len(history.turns) - (summaries[-1].end_turn_index + 1)
            max_recent_turns = min(max(1, uncovered), self.max_uncovered_turns)
        else:
            max_recent_turns = self.max_context_turns

        return to_bounded_context(history, max_recent_turns, summaries)

    async def _summarize(self, thread_id: str) -> None:
        if self.summarization_policy is not None:
            await self.summarization_policy.apply(thread_id)

    # =========================================================================
    # Entry points
    # =========================================================================

    async def respond(
        self,
        user_message: str,
        thread_id: Optional[str] = None,
        persona: Optional[str] = None,
    ) -> ChatTurn:
        """Answer one user message.

        Args:
            user_message: The user's text
            thread_id: Existing thread, or None to start a new one
            persona: Persona override for the thread ("" clears it)

        Returns:
            The assistant turn appended to the thread

        Raises:
            InvalidArgumentError: If the persona violates the guardrails
        """
        normalized_persona = self._normalize_persona(persona)
        thread_id = await self._ensure_thread(thread_id)
        effective_persona = self._apply_persona(thread_id, normalized_persona)

        await self.thread_service.append_message(
            thread_id,
            ChatTurn(role=ChatRole.USER, content=user_message, thread_id=thread_id),
        )

        context = await self.build_context(thread_id)
        try:
            response = await self.completion.complete(
                context,
                tools=self.tools_provider.get_tools(),
                instructions=self._compose_instructions(effective_persona),
            )
        except Exception as e:
            logger.error(f"Completion failed for thread {thread_id}: {e}")
            raise

        content, widgets = self.widget_hint_parser.parse(response.text)
        assistant_turn = ChatTurn(
            role=ChatRole.ASSISTANT,
            content=content,
            widgets=widgets,
            thread_id=thread_id,
        )
        await self.thread_service.append_message(thread_id, assistant_turn)

        await self._summarize(thread_id)
        return assistant_turn

    async def handle_action(
        self,
        action: str,
        payload: Any,
        thread_id: Optional[str] = None,
    ) -> ChatTurn:
        """Answer a widget action by turning it into a user message.

        Args:
            action: Widget action identifier ("retry" repeats the last request)
            payload: Action payload, rendered as JSON in the message
            thread_id: Thread the widget belongs to

        Returns:
            The assistant turn
        """
        if action == RETRY_ACTION:
            message = "Retrying the last request..."
        else:
            message = f"Action '{action}' received with payload: {json.dumps(payload, default=str)}"
        return await self.respond(message, thread_id)

    async def respond_with_triage(
        self,
        user_message: str,
        thread_id: Optional[str] = None,
        persona: Optional[str] = None,
    ) -> Outcome[ChatTurn]:
        """Answer one user message by routing it through the triage agent.

        The user turn is recorded before routing. On success the agent's turn
        is recorded (stamped with the thread ID) and summarization applied; a
        failure is returned as-is and no assistant turn is recorded.

        Raises:
            RuntimeError: If no triage agent is configured
        """
        if self.triage_agent is None:
            raise RuntimeError("Triage agent not configured")

        normalized_persona = self._normalize_persona(persona)
        thread_id = await self._ensure_thread(thread_id)
        effective_persona = self._apply_persona(thread_id, normalized_persona)

        await self.thread_service.append_message(
            thread_id,
            ChatTurn(role=ChatRole.USER, content=user_message, thread_id=thread_id),
        )

        request = ChatRequest(thread_id=thread_id)
        context = InterAgentContext(request)
        context.user_message = user_message
        if effective_persona:
            context.persona = effective_persona

        outcome = await self.triage_agent.invoke(request)
        if outcome.is_failure:
            logger.warning(
                f"Triage failed for thread {thread_id}: "
                f"{outcome.error.kind.value} - {outcome.error.message}"
            )
            return outcome

        logger.info(
            f"Triage for thread {thread_id}: classification={context.get_classification()}, "
            f"routed_agent={context.routed_agent}"
        )
        assistant_turn = outcome.unwrap().model_copy(update={"thread_id": thread_id})
        await self.thread_service.append_message(thread_id, assistant_turn)

        await self._summarize(thread_id)
        return Outcome.success(assistant_turn)
