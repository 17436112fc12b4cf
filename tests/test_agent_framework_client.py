"""Tests for the agent_framework completion adapter."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from agent_framework import FunctionCallContent, Role

from chatwidgets.config import Settings
from chatwidgets.core.errors import InvalidArgumentError
from chatwidgets.schemas.chat import ChatRole, ContextMessage
from chatwidgets.schemas.completion import ToolDescriptor
from chatwidgets.services.agent_framework_client import (
    AgentFrameworkCompletionClient,
    create_completion_client,
)


def make_chat_client(text="Answer", messages=None):
    chat_client = MagicMock()
    chat_client.get_response = AsyncMock(
        return_value=MagicMock(text=text, messages=messages or [])
    )
    return chat_client


class TestAgentFrameworkCompletionClient:
    @pytest.mark.asyncio
    async def test_maps_messages_and_instructions(self):
        chat_client = make_chat_client()
        client = AgentFrameworkCompletionClient(chat_client)

        response = await client.complete(
            [
                ContextMessage(role=ChatRole.SYSTEM, content="Summary"),
                ContextMessage(role=ChatRole.USER, content="Hi"),
                ContextMessage(role=ChatRole.ASSISTANT, content="Hello"),
            ],
            instructions="Be brief.",
        )

        assert response.text == "Answer"
        sent = chat_client.get_response.call_args.args[0]
        assert [m.role for m in sent] == [Role.SYSTEM, Role.SYSTEM, Role.USER, Role.ASSISTANT]
        assert [m.text for m in sent] == ["Be brief.", "Summary", "Hi", "Hello"]
        assert chat_client.get_response.call_args.kwargs == {}

    @pytest.mark.asyncio
    async def test_passes_tools_and_token_limit(self):
        chat_client = make_chat_client()
        client = AgentFrameworkCompletionClient(chat_client)
        tool = ToolDescriptor(name="get_time", description="Current time")

        await client.complete(
            [ContextMessage(role=ChatRole.USER, content="Time?")],
            tools=[tool],
            max_output_tokens=50,
        )

        kwargs = chat_client.get_response.call_args.kwargs
        assert kwargs["max_tokens"] == 50
        assert kwargs["tools"] == [tool.to_openai_tool()]
        assert kwargs["tools"][0]["function"]["name"] == "get_time"

    @pytest.mark.asyncio
    async def test_extracts_tool_calls(self):
        call = FunctionCallContent(call_id="c1", name="get_weather", arguments='{"city": "Oslo"}')
        chat_client = make_chat_client(text="", messages=[MagicMock(contents=[call])])
        client = AgentFrameworkCompletionClient(chat_client)

        response = await client.complete([ContextMessage(role=ChatRole.USER, content="Weather?")])

        assert response.text == ""
        assert [(c.name, c.arguments) for c in response.tool_calls] == [
            ("get_weather", {"city": "Oslo"})
        ]

    def test_parse_arguments(self):
        parse = AgentFrameworkCompletionClient._parse_arguments

        assert parse(None) == {}
        assert parse('{"a": 1}') == {"a": 1}
        assert parse("not json") == {}
        assert parse({"b": 2}) == {"b": 2}


class TestCreateCompletionClient:
    def test_requires_endpoint(self):
        with pytest.raises(InvalidArgumentError):
            create_completion_client(Settings(_env_file=None, azure_openai_endpoint=""))

    def test_builds_azure_client(self):
        settings = Settings(
            _env_file=None,
            azure_openai_api_key="key",
            azure_openai_endpoint="https://example.openai.azure.com",
            azure_openai_deployment_name="gpt-4.1-mini",
        )
        with patch(
            "chatwidgets.services.agent_framework_client.AzureOpenAIChatClient"
        ) as client_cls:
            client = create_completion_client(settings)

        client_cls.assert_called_once_with(
            api_key="key",
            endpoint="https://example.openai.azure.com",
            deployment_name="gpt-4.1-mini",
        )
        assert client.chat_client is client_cls.return_value
