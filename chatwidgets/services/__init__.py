"""Services around the completion capability and the chat entry point.

``ChatOrchestrationService`` is imported from ``chatwidgets.services.chat_service``.
"""

from .completion import CompletionClient
from .persona import PersonaOptions, ThreadPersonaStore
from .providers import InstructionProvider, ToolsProvider
from .widget_hints import WidgetHintParser

__all__ = [
    "CompletionClient",
    "InstructionProvider",
    "PersonaOptions",
    "ThreadPersonaStore",
    "ToolsProvider",
    "WidgetHintParser",
]
