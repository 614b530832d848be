"""Redis pub/sub publisher."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel
from redis.asyncio import Redis
from redis.exceptions import RedisError

from ai_clients.config.logger import get_logger
from ai_clients.errors import PublishError
from ai_clients.mq.base import MessageQueue, encode_payload

_logger = get_logger(__name__)


class RedisMessageQueue(MessageQueue):
    """Publishes JSON payloads on Redis channels named after the topic.

    Pub/sub is at-most-once: a message with no subscriber is dropped. The
    connection is owned by whoever built it; this class never closes it.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        redis: Optional[Redis] = None,
    ) -> None:
        self.redis_url = redis_url
        self._redis = redis if redis is not None else Redis.from_url(redis_url)

    async def send(self, topic: str, payload: BaseModel | dict[str, Any]) -> None:
        message = encode_payload(payload)
        try:
            receivers = await self._redis.publish(topic, message)
        except RedisError as exc:
            raise PublishError(topic, exc) from exc
        _logger.debug("[mq] published to %s (%s receivers)", topic, receivers)
