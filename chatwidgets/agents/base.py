"""Agent contract and the request passed through the agent pipeline."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from chatwidgets.core.outcome import Outcome
from chatwidgets.schemas.chat import ChatTurn


@dataclass
class ChatRequest:
    """Unit of work handed to agents.

    Attributes:
        thread_id: Conversation thread, None when not yet created
        services: Request-scoped capabilities keyed by name
        metadata: Shared values written and read through ``InterAgentContext``
    """

    thread_id: Optional[str] = None
    services: Mapping[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_service(self, name: str) -> Optional[Any]:
        """Resolve a request-scoped service by name, None if not provided."""
        return self.services.get(name)


class Agent(ABC):
    """Anything that can handle a chat request and produce a chat turn."""

    name: str = ""

    @abstractmethod
    async def invoke(self, request: ChatRequest) -> Outcome[ChatTurn]:
        """Handle the request.

        Args:
            request: The chat request with its metadata

        Returns:
            Success with the produced turn, or a failure outcome
        """


AgentDelegate = Callable[[ChatRequest], Awaitable[Outcome[ChatTurn]]]
