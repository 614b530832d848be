"""OCR of professional ID cards on top of a generation adapter."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from ai_clients.config.logger import get_logger
from ai_clients.errors import (
    EmptyContentError,
    NotInitializedError,
    ResponseParseError,
)
from ai_clients.llm.base import AIClient
from ai_clients.models import (
    GenerationOptions,
    GenerationRequest,
    OCREvent,
    OCRRawInfo,
    OCRTopic,
    PlatformType,
    ResponseFormat,
)
from ai_clients.mq.base import MessageQueue
from ai_clients.prompts.catalog import resolve_platform
from ai_clients.prompts.ocr import NAME_PROMPT, SYSTEM_CONTENT, get_info_prompt, get_system_prompt
from ai_clients.utils.json_patch import set_json_key

_logger = get_logger(__name__)


@dataclass(frozen=True)
class OCRConfig:
    max_tokens: int = 1024
    is_prod: bool = False
    prod_topic: str = OCRTopic.PROD.value
    dev_topic: str = OCRTopic.DEV.value

    @property
    def topic(self) -> str:
        return self.prod_topic if self.is_prod else self.dev_topic


class OCRService:
    def __init__(
        self,
        ai_client: Optional[AIClient],
        mq: MessageQueue,
        config: Optional[OCRConfig] = None,
    ) -> None:
        self.ai_client = ai_client
        self.mq = mq
        self.config = config or OCRConfig()

    def _options(self) -> GenerationOptions:
        return GenerationOptions(
            max_tokens=self.config.max_tokens,
            response_format=ResponseFormat.JSON,
        )

    def _require_client(self) -> AIClient:
        if self.ai_client is None:
            raise NotInitializedError("AI client is not initialized")
        return self.ai_client

    async def scan_name(self, link: str) -> str:
        """Return the card holder's name read from the image at ``link``."""
        client = self._require_client()
        request = GenerationRequest(
            system_prompt=SYSTEM_CONTENT,
            text=NAME_PROMPT,
            image_urls=(link,),
        )
        resp = await client.generate(request, self._options())

        try:
            data = json.loads(resp)
        except json.JSONDecodeError as exc:
            raise ResponseParseError(f"invalid name JSON: {exc}", raw=resp) from exc
        if not isinstance(data, dict):
            raise ResponseParseError("name response is not a JSON object", raw=resp)

        name = data.get("name", "")
        if name is None:
            return ""
        if not isinstance(name, str):
            raise ResponseParseError("name field is not a string", raw=resp)
        return name

    async def scan_raw_info(
        self,
        user_id: str,
        link: str,
        platform: PlatformType | str,
    ) -> OCRRawInfo:
        """Extract the platform's identity fields from the image at ``link``.

        ``identify_url`` in the result is always ``link``. The record is then
        published as an :class:`OCREvent`; a publish failure is logged and does
        not affect the returned value.
        """
        client = self._require_client()
        platform = resolve_platform(platform)

        request = GenerationRequest(
            system_prompt=get_system_prompt(platform),
            text=get_info_prompt(platform),
            image_urls=(link,),
        )
        resp = await client.generate(request, self._options())
        if not resp:
            raise EmptyContentError("empty response content from AI client")

        patched = set_json_key(resp, "identify_url", link)
        try:
            info = OCRRawInfo.model_validate_json(patched)
        except ValidationError as exc:
            raise ResponseParseError(f"invalid OCR record: {exc}", raw=patched) from exc

        await self._publish(user_id, info, platform)
        return info

    async def _publish(self, user_id: str, info: OCRRawInfo, platform: PlatformType) -> None:
        event = OCREvent(user_id=user_id, payload=info, source=platform.value)
        topic = self.config.topic
        try:
            await self.mq.send(topic, event)
        except Exception as exc:
            _logger.error(
                "[ocr] Failed to send ocr result user=%s topic=%s: %s",
                user_id,
                topic,
                exc,
            )
