"""Specialized agents used behind the sample triage agent."""

from typing import Any, Dict, List, Optional

from chatwidgets.agents.base import Agent, ChatRequest
from chatwidgets.agents.context import InterAgentContext
from chatwidgets.core.outcome import Outcome
from chatwidgets.schemas.chat import ChatRole, ChatTurn

from .intents import UserIntent


def button(label: str, action: str) -> Dict[str, Any]:
    return {"type": "button", "label": label, "action": action}


class SampleAgent(Agent):
    """Answers from the triage metadata with a fixed template and widgets."""

    template: str = "{message}"
    widgets: List[Dict[str, Any]] = []

    async def invoke(self, request: ChatRequest) -> Outcome[ChatTurn]:
        context = InterAgentContext(request)
        classification: Optional[UserIntent] = context.get_classification(UserIntent)
        label = classification.value if classification else "Unknown"

        turn = ChatTurn(
            role=ChatRole.ASSISTANT,
            content=self.template.format(message=context.user_message, classification=label),
            widgets=[dict(w) for w in self.widgets] or None,
            thread_id=request.thread_id or "",
            metadata={"classification": label, "routedAgent": context.routed_agent},
        )
        return Outcome.success(turn)


class HelpAgent(SampleAgent):
    name = "help-agent"
    template = (
        "I'm here to help! You asked: '{message}' (classified as {classification}). "
        "Please let me know what specific assistance you need."
    )


class DataQueryAgent(SampleAgent):
    name = "data-query-agent"
    template = (
        "I found your data query: '{message}' (classified as {classification}). "
        "Here's the information you requested..."
    )


class ActionAgent(SampleAgent):
    name = "action-agent"
    template = (
        "I'm processing your action request: '{message}' (classified as {classification}). "
        "Please confirm to proceed with this action."
    )
    widgets = [button("Confirm", "confirm_action"), button("Cancel", "cancel_action")]


class FeedbackAgent(SampleAgent):
    name = "feedback-agent"
    template = (
        "Thank you for your feedback: '{message}' (classified as {classification}). "
        "We appreciate your input and will use it to improve our service."
    )
    widgets = [button("Submit Feedback", "submit_feedback")]
