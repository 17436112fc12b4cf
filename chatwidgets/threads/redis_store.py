"""Redis-backed thread store."""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

import redis.asyncio as redis

from chatwidgets.config import Settings
from chatwidgets.core.errors import ThreadNotFoundError
from chatwidgets.schemas.chat import ChatSummary, ChatTurn, ThreadHistory

from .service import ThreadService

logger = logging.getLogger(__name__)


class RedisThreadService(ThreadService):
    """Durable ``ThreadService`` over Redis lists.

    Key layout (per thread):
    - ``{prefix}:thread:{id}``: marker holding creation metadata
    - ``{prefix}:thread:{id}:turns``: list of JSON-encoded turns
    - ``{prefix}:thread:{id}:summaries``: list of JSON-encoded summaries

    When ``ttl_seconds`` is set, every write refreshes the expiry of all
    three keys so a thread expires as a unit.
    """

    def __init__(
        self,
        client: redis.Redis,
        key_prefix: str = "chatwidgets",
        ttl_seconds: Optional[int] = None,
    ):
        """Initialize the store over an existing client.

        Args:
            client: Async Redis client created with ``decode_responses=True``
            key_prefix: Namespace prepended to every key
            ttl_seconds: Expiry for thread keys, None for no expiry
        """
        self.client = client
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds

    @classmethod
    async def connect(cls, settings: Settings) -> "RedisThreadService":
        """Create a client from settings and verify the connection.

        Raises:
            RuntimeError: If Redis cannot be reached
        """
        try:
            client = redis.Redis(
                host=settings.redis_host,
                port=settings.redis_port,
                password=settings.redis_password,
                ssl=settings.redis_ssl,
                decode_responses=True,
                socket_timeout=5,
                socket_connect_timeout=5,
                max_connections=10,
            )
            await client.ping()
            logger.info(f"Redis connection successful: {settings.redis_host}:{settings.redis_port}")
        except redis.RedisError as e:
            logger.error(f"Redis connection failed: {e}")
            raise RuntimeError(f"Failed to connect to Redis: {e}") from e

        return cls(
            client,
            key_prefix=settings.redis_key_prefix,
            ttl_seconds=settings.redis_ttl_seconds,
        )

    async def close(self) -> None:
        """Close the Redis connection."""
        await self.client.aclose()
        logger.info("Redis connection closed")

    # =========================================================================
    # Keys
    # =========================================================================

    def _thread_key(self, thread_id: str) -> str:
        return f"{self.key_prefix}:thread:{thread_id}"

    def _turns_key(self, thread_id: str) -> str:
        return f"{self._thread_key(thread_id)}:turns"

    def _summaries_key(self, thread_id: str) -> str:
        return f"{self._thread_key(thread_id)}:summaries"

    def _all_keys(self, thread_id: str) -> List[str]:
        return [
            self._thread_key(thread_id),
            self._turns_key(thread_id),
            self._summaries_key(thread_id),
        ]

    async def _require_thread(self, thread_id: str) -> None:
        if not await self.thread_exists(thread_id):
            raise ThreadNotFoundError(thread_id)

    def _refresh_ttl(self, pipeline, thread_id: str) -> None:
        if self.ttl_seconds:
            for key in self._all_keys(thread_id):
                pipeline.expire(key, self.ttl_seconds)

    # =========================================================================
    # ThreadService
    # =========================================================================

    async def create_thread(self) -> str:
        thread_id = uuid.uuid4().hex
        meta = json.dumps({
            "thread_id": thread_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
        })
        await self.client.set(self._thread_key(thread_id), meta, ex=self.ttl_seconds)
        logger.info(f"Created thread {thread_id}")
        return thread_id

    async def thread_exists(self, thread_id: str) -> bool:
        return bool(await self.client.exists(self._thread_key(thread_id)))

    async def append_message(self, thread_id: str, turn: ChatTurn) -> ThreadHistory:
        await self._require_thread(thread_id)

        async with self.client.pipeline(transaction=True) as pipeline:
            pipeline.rpush(self._turns_key(thread_id), turn.model_dump_json())
            self._refresh_ttl(pipeline, thread_id)
            await pipeline.execute()

        return await self.get_history(thread_id)

    async def delete_thread(self, thread_id: str) -> None:
        await self._require_thread(thread_id)
        await self.client.delete(*self._all_keys(thread_id))
        logger.info(f"Deleted thread {thread_id}")

    async def store_summary(self, thread_id: str, summary: ChatSummary) -> None:
        await self._require_thread(thread_id)

        async with self.client.pipeline(transaction=True) as pipeline:
            pipeline.rpush(self._summaries_key(thread_id), summary.model_dump_json())
            self._refresh_ttl(pipeline, thread_id)
            await pipeline.execute()

        logger.info(
            f"Stored summary for thread {thread_id} "
            f"(turns {summary.start_turn_index}-{summary.end_turn_index})"
        )

    async def get_summaries(self, thread_id: str) -> List[ChatSummary]:
        await self._require_thread(thread_id)
        raw = await self.client.lrange(self._summaries_key(thread_id), 0, -1)
        return [ChatSummary.model_validate_json(item) for item in raw]

    async def get_history(self, thread_id: str) -> ThreadHistory:
        await self._require_thread(thread_id)
        raw = await self.client.lrange(self._turns_key(thread_id), 0, -1)
        turns = tuple(ChatTurn.model_validate_json(item) for item in raw)
        return ThreadHistory(thread_id=thread_id, turns=turns)
