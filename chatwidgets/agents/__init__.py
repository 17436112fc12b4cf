"""Agent contract, registry, classification and triage routing."""

from .base import Agent, AgentDelegate, ChatRequest
from .classifier import Classifier, CompletionClassifier
from .context import InterAgentContext
from .pipeline import AgentMiddleware, AgentPipelineBuilder, TriageMiddleware
from .registry import AgentRegistry
from .triage import TriageAgent

__all__ = [
    "Agent",
    "AgentDelegate",
    "AgentMiddleware",
    "AgentPipelineBuilder",
    "AgentRegistry",
    "ChatRequest",
    "Classifier",
    "CompletionClassifier",
    "InterAgentContext",
    "TriageAgent",
    "TriageMiddleware",
]
