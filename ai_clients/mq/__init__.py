from ai_clients.mq.base import MessageQueue
from ai_clients.mq.redis_mq import RedisMessageQueue

__all__ = ["MessageQueue", "RedisMessageQueue"]
