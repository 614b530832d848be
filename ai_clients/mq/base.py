from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class MessageQueue(ABC):
    """Topic-based publisher. Delivery semantics belong to the implementation."""

    @abstractmethod
    async def send(self, topic: str, payload: BaseModel | dict[str, Any]) -> None:
        """Publish ``payload``; raise :class:`PublishError` on failure."""


def encode_payload(payload: BaseModel | dict[str, Any]) -> str:
    if isinstance(payload, BaseModel):
        return payload.model_dump_json()
    return json.dumps(payload, ensure_ascii=False, default=str)
