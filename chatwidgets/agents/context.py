"""Typed accessors over ``ChatRequest.metadata`` for agent-to-agent data."""

from typing import Any, Optional, Type, TypeVar

from .base import ChatRequest

TCategory = TypeVar("TCategory")

USER_MESSAGE_KEY = "UserMessage"
CLASSIFICATION_KEY = "Classification"
ROUTED_AGENT_KEY = "RoutedAgent"
PREVIOUS_RESULT_KEY = "PreviousResult"
PERSONA_KEY = "Persona"


class InterAgentContext:
    """View over a request's metadata using well-known keys.

    Setters overwrite prior values. Getters return None for missing keys
    (or values of the wrong type) instead of raising.
    """

    def __init__(self, request: ChatRequest):
        self.request = request

    @property
    def metadata(self) -> dict:
        return self.request.metadata

    def _get_str(self, key: str) -> Optional[str]:
        value = self.metadata.get(key)
        return value if isinstance(value, str) else None

    @property
    def user_message(self) -> Optional[str]:
        return self._get_str(USER_MESSAGE_KEY)

    @user_message.setter
    def user_message(self, value: str) -> None:
        self.metadata[USER_MESSAGE_KEY] = value

    @property
    def routed_agent(self) -> Optional[str]:
        return self._get_str(ROUTED_AGENT_KEY)

    @routed_agent.setter
    def routed_agent(self, value: str) -> None:
        self.metadata[ROUTED_AGENT_KEY] = value

    @property
    def persona(self) -> Optional[str]:
        return self._get_str(PERSONA_KEY)

    @persona.setter
    def persona(self, value: Optional[str]) -> None:
        self.metadata[PERSONA_KEY] = value

    @property
    def previous_result(self) -> Optional[Any]:
        return self.metadata.get(PREVIOUS_RESULT_KEY)

    @previous_result.setter
    def previous_result(self, value: Any) -> None:
        self.metadata[PREVIOUS_RESULT_KEY] = value

    def get_classification(
        self, category_type: Optional[Type[TCategory]] = None
    ) -> Optional[TCategory]:
        """Get the stored classification.

        Args:
            category_type: Expected category type; a stored value of another
                type is reported as missing

        Returns:
            The classification, or None if absent or of the wrong type
        """
        value = self.metadata.get(CLASSIFICATION_KEY)
        if value is None:
            return None
        if category_type is not None and not isinstance(value, category_type):
            return None
        return value

    def set_classification(self, category: Any) -> None:
        self.metadata[CLASSIFICATION_KEY] = category
