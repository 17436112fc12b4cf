"""Tests for InterAgentContext accessors."""

from enum import Enum

from chatwidgets.agents.base import ChatRequest
from chatwidgets.agents.context import InterAgentContext


class Mood(Enum):
    HAPPY = "happy"
    SAD = "sad"


class Other(Enum):
    X = "x"


class TestInterAgentContext:
    def test_missing_values_are_none(self):
        context = InterAgentContext(ChatRequest())

        assert context.user_message is None
        assert context.routed_agent is None
        assert context.persona is None
        assert context.previous_result is None
        assert context.get_classification(Mood) is None

    def test_values_are_written_to_metadata(self):
        request = ChatRequest()
        context = InterAgentContext(request)

        context.user_message = "hello"
        context.routed_agent = "help-agent"
        context.persona = "pirate"
        context.previous_result = {"rows": 3}
        context.set_classification(Mood.HAPPY)

        assert request.metadata == {
            "UserMessage": "hello",
            "RoutedAgent": "help-agent",
            "Persona": "pirate",
            "PreviousResult": {"rows": 3},
            "Classification": Mood.HAPPY,
        }

    def test_setters_overwrite(self):
        context = InterAgentContext(ChatRequest())

        context.routed_agent = "first"
        context.routed_agent = "second"

        assert context.routed_agent == "second"

    def test_classification_type_check(self):
        context = InterAgentContext(ChatRequest())
        context.set_classification(Mood.SAD)

        assert context.get_classification(Mood) is Mood.SAD
        assert context.get_classification() is Mood.SAD
        assert context.get_classification(Other) is None

    def test_wrong_typed_string_value_is_none(self):
        context = InterAgentContext(ChatRequest(metadata={"UserMessage": 42}))

        assert context.user_message is None

    def test_request_services(self):
        service = object()
        request = ChatRequest(services={"clock": service})

        assert request.get_service("clock") is service
        assert request.get_service("missing") is None
