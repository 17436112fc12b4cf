"""Sample triage wiring: intent classifier, four agents, help-agent fallback."""

from typing import Optional

from chatwidgets.agents.registry import AgentRegistry
from chatwidgets.agents.triage import TriageAgent
from chatwidgets.services.completion import CompletionClient
from chatwidgets.threads.service import ThreadService

from .agents import ActionAgent, DataQueryAgent, FeedbackAgent, HelpAgent
from .intents import UserIntent, UserIntentClassifier

FALLBACK_AGENT_NAME = HelpAgent.name

_ROUTES = {
    UserIntent.HELP_REQUEST: HelpAgent.name,
    UserIntent.DATA_QUERY: DataQueryAgent.name,
    UserIntent.ACTION_REQUEST: ActionAgent.name,
    UserIntent.FEEDBACK: FeedbackAgent.name,
}


def route_intent(intent: UserIntent) -> Optional[str]:
    """Map an intent to an agent name; ``Unknown`` goes to the fallback."""
    return _ROUTES.get(intent)


def build_sample_registry() -> AgentRegistry:
    registry = AgentRegistry()
    for agent in (HelpAgent(), DataQueryAgent(), ActionAgent(), FeedbackAgent()):
        registry.register(agent.name, agent)
    return registry


def build_sample_triage(
    completion: CompletionClient,
    thread_service: Optional[ThreadService] = None,
) -> TriageAgent[UserIntent]:
    """Create the sample triage agent.

    Args:
        completion: Completion capability used for intent classification
        thread_service: Optional store for creating threads on demand
    """
    return TriageAgent(
        classifier=UserIntentClassifier(completion),
        registry=build_sample_registry(),
        routing_mapping=route_intent,
        fallback_agent_name=FALLBACK_AGENT_NAME,
        thread_service=thread_service,
    )
