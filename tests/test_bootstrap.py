"""Tests for the composition root."""

from unittest.mock import AsyncMock, patch

import pytest

from chatwidgets.bootstrap import build_chat_service
from chatwidgets.config import Settings
from chatwidgets.core.errors import InvalidArgumentError
from chatwidgets.threads.service import InMemoryThreadService

from .conftest import StubCompletionClient


class TestBuildChatService:
    @pytest.mark.asyncio
    async def test_memory_store_from_settings(self):
        settings = Settings(
            _env_file=None,
            summarization_threshold=3,
            recent_turns_to_keep=1,
            max_context_turns=4,
            max_uncovered_turns=6,
        )

        service = await build_chat_service(settings, completion=StubCompletionClient())

        assert isinstance(service.thread_service, InMemoryThreadService)
        assert service.max_context_turns == 4
        assert service.max_uncovered_turns == 6
        assert service.summarization_policy.threshold == 3
        assert service.summarization_policy.recent_turns_to_keep == 1
        assert service.summarization_policy.thread_service is service.thread_service

    @pytest.mark.asyncio
    async def test_service_answers(self):
        service = await build_chat_service(
            Settings(_env_file=None), completion=StubCompletionClient(default="Hi!")
        )

        turn = await service.respond("Hello")

        assert turn.content == "Hi!"

    @pytest.mark.asyncio
    async def test_redis_store_selected(self):
        settings = Settings(_env_file=None, thread_store_mode="redis")
        sentinel = InMemoryThreadService()
        with patch(
            "chatwidgets.threads.redis_store.RedisThreadService.connect",
            new=AsyncMock(return_value=sentinel),
        ) as connect:
            service = await build_chat_service(settings, completion=StubCompletionClient())

        connect.assert_awaited_once_with(settings)
        assert service.thread_service is sentinel

    @pytest.mark.asyncio
    async def test_invalid_default_persona_rejected(self):
        settings = Settings(_env_file=None, default_persona="bad\x00persona")

        with pytest.raises(InvalidArgumentError):
            await build_chat_service(settings, completion=StubCompletionClient())
