"""Completion capability backed by a Microsoft Agent Framework chat client."""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from agent_framework import ChatMessage, FunctionCallContent, Role
from agent_framework.azure import AzureOpenAIChatClient

from chatwidgets.config import Settings
from chatwidgets.core.errors import InvalidArgumentError
from chatwidgets.schemas.chat import ChatRole, ContextMessage
from chatwidgets.schemas.completion import CompletionResponse, ToolCall, ToolDescriptor

logger = logging.getLogger(__name__)

_ROLES = {
    ChatRole.USER: Role.USER,
    ChatRole.ASSISTANT: Role.ASSISTANT,
    ChatRole.SYSTEM: Role.SYSTEM,
}


class AgentFrameworkCompletionClient:
    """Adapts an agent_framework chat client to ``CompletionClient``.

    Instructions are sent as a leading system message and tool descriptors
    as OpenAI function-tool dictionaries. Function calls in the response are
    returned as ``ToolCall`` directives; they are not executed here.
    """

    def __init__(self, chat_client: Any):
        """Initialize adapter.

        Args:
            chat_client: agent_framework chat client (e.g., AzureOpenAIChatClient)
        """
        self.chat_client = chat_client

    @staticmethod
    def _to_chat_messages(
        messages: Sequence[ContextMessage], instructions: Optional[str]
    ) -> List[ChatMessage]:
        chat_messages = []
        if instructions:
            chat_messages.append(ChatMessage(Role.SYSTEM, text=instructions))
        for message in messages:
            chat_messages.append(ChatMessage(_ROLES[message.role], text=message.content))
        return chat_messages

    @staticmethod
    def _parse_arguments(arguments: Any) -> Dict[str, Any]:
        if not arguments:
            return {}
        if isinstance(arguments, str):
            try:
                parsed = json.loads(arguments)
            except json.JSONDecodeError:
                logger.warning(f"Tool call arguments are not valid JSON: {arguments[:100]}")
                return {}
            return parsed if isinstance(parsed, dict) else {}
        return dict(arguments)

    def _extract_tool_calls(self, response: Any) -> List[ToolCall]:
        tool_calls = []
        for message in getattr(response, "messages", None) or []:
            for content in getattr(message, "contents", None) or []:
                if isinstance(content, FunctionCallContent):
                    tool_calls.append(
                        ToolCall(
                            name=content.name,
                            arguments=self._parse_arguments(content.arguments),
                        )
                    )
        return tool_calls

    async def complete(
        self,
        messages: Sequence[ContextMessage],
        *,
        tools: Sequence[ToolDescriptor] = (),
        instructions: Optional[str] = None,
        max_output_tokens: Optional[int] = None,
    ) -> CompletionResponse:
        options: Dict[str, Any] = {}
        if tools:
            options["tools"] = [tool.to_openai_tool() for tool in tools]
        if max_output_tokens:
            options["max_tokens"] = max_output_tokens

        response = await self.chat_client.get_response(
            self._to_chat_messages(messages, instructions),
            **options,
        )
        return CompletionResponse(
            text=response.text or "",
            tool_calls=self._extract_tool_calls(response),
        )


def create_completion_client(settings: Settings) -> AgentFrameworkCompletionClient:
    """Create the Azure OpenAI backed completion client.

    Args:
        settings: Settings with the Azure OpenAI key, endpoint and deployment

    Returns:
        Configured completion client

    Raises:
        InvalidArgumentError: If the endpoint or deployment name is missing
    """
    if not settings.azure_openai_endpoint:
        raise InvalidArgumentError(
            "azure_openai_endpoint is required", parameter="azure_openai_endpoint"
        )
    if not settings.azure_openai_deployment_name:
        raise InvalidArgumentError(
            "azure_openai_deployment_name is required",
            parameter="azure_openai_deployment_name",
        )

    chat_client = AzureOpenAIChatClient(
        api_key=settings.azure_openai_api_key or None,
        endpoint=settings.azure_openai_endpoint,
        deployment_name=settings.azure_openai_deployment_name,
    )
    logger.info(f"Created completion client for deployment {settings.azure_openai_deployment_name}")
    return AgentFrameworkCompletionClient(chat_client)
