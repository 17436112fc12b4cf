"""Tests for the sample intent triage setup."""

import pytest

from chatwidgets.agents.base import ChatRequest
from chatwidgets.agents.context import InterAgentContext
from chatwidgets.samples import (
    UserIntent,
    UserIntentClassifier,
    build_sample_registry,
    build_sample_triage,
    route_intent,
)

from .conftest import StubCompletionClient


def request_for(message: str) -> ChatRequest:
    request = ChatRequest(thread_id="t1")
    InterAgentContext(request).user_message = message
    return request


class TestRouting:
    @pytest.mark.parametrize(
        "intent,agent",
        [
            (UserIntent.HELP_REQUEST, "help-agent"),
            (UserIntent.DATA_QUERY, "data-query-agent"),
            (UserIntent.ACTION_REQUEST, "action-agent"),
            (UserIntent.FEEDBACK, "feedback-agent"),
            (UserIntent.UNKNOWN, None),
        ],
    )
    def test_route_intent(self, intent, agent):
        assert route_intent(intent) == agent

    def test_registry_contains_all_agents(self):
        assert build_sample_registry().list_registered_names() == [
            "help-agent",
            "data-query-agent",
            "action-agent",
            "feedback-agent",
        ]


class TestUserIntentClassifier:
    @pytest.mark.asyncio
    async def test_parses_intent_label(self):
        classifier = UserIntentClassifier(StubCompletionClient(default="dataquery"))

        assert await classifier.classify("How many users signed up?") is UserIntent.DATA_QUERY

    @pytest.mark.asyncio
    async def test_prompt_uses_labels(self):
        completion = StubCompletionClient(default="Feedback")
        classifier = UserIntentClassifier(completion)

        await classifier.classify("Great app!")

        prompt = completion.calls[0]["messages"][0].content
        assert "- ActionRequest: User wants something done" in prompt
        assert "respond with: Unknown" in prompt


class TestSampleTriage:
    @pytest.mark.asyncio
    async def test_action_request_gets_confirm_buttons(self):
        triage = build_sample_triage(StubCompletionClient(default="ActionRequest"))
        request = request_for("Delete my account")

        outcome = await triage.invoke(request)

        turn = outcome.unwrap()
        assert "Delete my account" in turn.content
        assert "ActionRequest" in turn.content
        assert [w["action"] for w in turn.widgets] == ["confirm_action", "cancel_action"]
        assert turn.metadata == {"classification": "ActionRequest", "routedAgent": "action-agent"}
        assert turn.thread_id == "t1"

    @pytest.mark.asyncio
    async def test_unknown_intent_falls_back_to_help(self):
        triage = build_sample_triage(StubCompletionClient(default="no idea"))
        request = request_for("asdf")

        outcome = await triage.invoke(request)

        turn = outcome.unwrap()
        assert turn.content.startswith("I'm here to help!")
        assert turn.widgets is None
        assert InterAgentContext(request).routed_agent == "help-agent"
        assert InterAgentContext(request).get_classification(UserIntent) is UserIntent.UNKNOWN

    @pytest.mark.asyncio
    async def test_feedback_button(self):
        triage = build_sample_triage(StubCompletionClient(default="Feedback"))

        outcome = await triage.invoke(request_for("Love it"))

        assert outcome.unwrap().widgets == [
            {"type": "button", "label": "Submit Feedback", "action": "submit_feedback"}
        ]

    @pytest.mark.asyncio
    async def test_creates_thread_with_thread_service(self, thread_service):
        triage = build_sample_triage(StubCompletionClient(default="HelpRequest"), thread_service)
        request = ChatRequest(metadata={"UserMessage": "help"})

        outcome = await triage.invoke(request)

        assert outcome.unwrap().thread_id == request.thread_id
        assert await thread_service.thread_exists(request.thread_id)

    @pytest.mark.asyncio
    async def test_turn_without_thread_has_empty_thread_id(self):
        triage = build_sample_triage(StubCompletionClient(default="HelpRequest"))
        request = ChatRequest(metadata={"UserMessage": "help"})

        outcome = await triage.invoke(request)

        assert request.thread_id is None
        assert outcome.unwrap().thread_id == ""
