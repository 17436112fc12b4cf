"""Sample intent-based triage setup."""

from .agents import ActionAgent, DataQueryAgent, FeedbackAgent, HelpAgent
from .intents import INTENT_DESCRIPTIONS, UserIntent, UserIntentClassifier
from .triage import build_sample_registry, build_sample_triage, route_intent

__all__ = [
    "ActionAgent",
    "DataQueryAgent",
    "FeedbackAgent",
    "HelpAgent",
    "INTENT_DESCRIPTIONS",
    "UserIntent",
    "UserIntentClassifier",
    "build_sample_registry",
    "build_sample_triage",
    "route_intent",
]
