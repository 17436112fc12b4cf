"""Composable middleware pipeline in front of agents."""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Union

from chatwidgets.core.errors import ErrorKind
from chatwidgets.core.outcome import Outcome
from chatwidgets.schemas.chat import ChatTurn

from .base import Agent, AgentDelegate, ChatRequest

MiddlewareFactory = Callable[[ChatRequest], "AgentMiddleware"]


class AgentMiddleware(ABC):
    """A step that may handle a request itself or pass it on."""

    @abstractmethod
    async def invoke(self, request: ChatRequest, call_next: AgentDelegate) -> Outcome[ChatTurn]:
        """Handle the request or await ``call_next(request)``."""


class TriageMiddleware(AgentMiddleware):
    """Terminates the pipeline by handing the request to a triage agent."""

    def __init__(self, triage_agent: Agent):
        self.triage_agent = triage_agent

    async def invoke(self, request: ChatRequest, call_next: AgentDelegate) -> Outcome[ChatTurn]:
        return await self.triage_agent.invoke(request)


async def _unhandled(request: ChatRequest) -> Outcome[ChatTurn]:
    return Outcome.failure(ErrorKind.NO_AGENT, "No middleware handled the request")


class AgentPipelineBuilder:
    """Builds an ``AgentDelegate`` from middleware registered with ``use``.

    The first middleware registered runs outermost. Factories are called
    once per request, with that request, to create request-scoped middleware.
    """

    def __init__(self) -> None:
        self._components: List[Union[AgentMiddleware, MiddlewareFactory]] = []

    def use(self, middleware: Union[AgentMiddleware, MiddlewareFactory]) -> "AgentPipelineBuilder":
        self._components.append(middleware)
        return self

    @staticmethod
    def _wrap(
        component: Union[AgentMiddleware, MiddlewareFactory], call_next: AgentDelegate
    ) -> AgentDelegate:
        async def invoke(request: ChatRequest) -> Outcome[ChatTurn]:
            if isinstance(component, AgentMiddleware):
                middleware = component
            else:
                middleware = component(request)
            return await middleware.invoke(request, call_next)

        return invoke

    def build(self, terminal: Optional[AgentDelegate] = None) -> AgentDelegate:
        """Compose the pipeline around a terminal delegate.

        Args:
            terminal: Delegate called when every middleware passes the request
                on; defaults to a ``NoAgent`` failure

        Returns:
            The composed delegate
        """
        pipeline: AgentDelegate = terminal or _unhandled
        for component in reversed(self._components):
            pipeline = self._wrap(component, pipeline)
        return pipeline
