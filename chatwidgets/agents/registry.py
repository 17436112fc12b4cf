"""Name to agent lookup table, populated at startup."""

import logging
from typing import Callable, Dict, List, Mapping, Optional

from chatwidgets.core.errors import InvalidArgumentError

from .base import Agent

logger = logging.getLogger(__name__)

AgentFactory = Callable[[], Agent]


class AgentRegistry:
    """Registry of agents by logical name.

    Agents are registered either as instances or as factories; a factory is
    called on first lookup and its agent reused afterwards. The table is
    meant to be filled at startup and only read per request.
    """

    def __init__(self, agents: Optional[Mapping[str, Agent]] = None):
        self._agents: Dict[str, Agent] = {}
        self._factories: Dict[str, AgentFactory] = {}
        self._names: List[str] = []
        for name, agent in (agents or {}).items():
            self.register(name, agent)

    def _add_name(self, name: str) -> None:
        if not name or not name.strip():
            raise InvalidArgumentError("Agent name must not be empty", parameter="name")
        if name in self._agents or name in self._factories:
            raise InvalidArgumentError(f"Agent '{name}' is already registered", parameter="name")
        self._names.append(name)

    def register(self, name: str, agent: Agent) -> "AgentRegistry":
        """Register an agent instance under a name."""
        self._add_name(name)
        self._agents[name] = agent
        logger.debug(f"Registered agent {name}")
        return self

    def register_factory(self, name: str, factory: AgentFactory) -> "AgentRegistry":
        """Register a factory creating the agent on first lookup."""
        self._add_name(name)
        self._factories[name] = factory
        logger.debug(f"Registered agent factory {name}")
        return self

    def get_agent(self, name: str) -> Optional[Agent]:
        """Get an agent by name, None if not registered."""
        agent = self._agents.get(name)
        if agent is not None:
            return agent

        factory = self._factories.get(name)
        if factory is None:
            return None
        # Factory stays registered until it builds an agent
        agent = factory()
        self._agents[name] = agent
        del self._factories[name]
        return agent

    def has_agent(self, name: str) -> bool:
        return name in self._names

    def list_registered_names(self) -> List[str]:
        """Get all registered names in registration order."""
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_agent(name)
