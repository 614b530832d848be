"""Chat-completions adapter for the OpenAI API."""

from __future__ import annotations

from typing import Any, Optional

from openai import AsyncOpenAI, OpenAIError

from ai_clients.config.logger import get_logger, log_stage
from ai_clients.errors import (
    ConfigurationError,
    EmptyContentError,
    EmptyResponseError,
    ProviderCallError,
)
from ai_clients.llm.base import AIClient, ImageFetcher
from ai_clients.models import GenerationOptions, GenerationRequest, ResponseFormat
from ai_clients.utils.image_utils import to_data_url

_logger = get_logger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o"


class OpenAIClient(AIClient):
    name = "openai"

    def __init__(
        self,
        api_key: str = "",
        model: str = "",
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
        image_fetcher: Optional[ImageFetcher] = None,
    ) -> None:
        if client is None:
            if not api_key:
                raise ConfigurationError("openai API key cannot be empty")
            client = AsyncOpenAI(api_key=api_key, base_url=base_url or None)
        super().__init__(client, model or DEFAULT_OPENAI_MODEL, image_fetcher)

    async def _build_messages(self, request: GenerationRequest) -> list[dict[str, Any]]:
        user_parts: list[dict[str, Any]] = []
        if request.text:
            user_parts.append({"type": "text", "text": request.text})
        for image_bytes, mime_type in await self._load_images(request):
            user_parts.append(
                {"type": "image_url", "image_url": {"url": to_data_url(image_bytes, mime_type)}}
            )

        messages: list[dict[str, Any]] = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": user_parts})
        return messages

    async def generate(
        self,
        request: GenerationRequest,
        options: Optional[GenerationOptions] = None,
    ) -> str:
        options = options or GenerationOptions()
        client = self._require_client()
        model = self._resolve_model(options)

        params: dict[str, Any] = {
            "model": model,
            "messages": await self._build_messages(request),
        }
        if options.response_format == ResponseFormat.JSON:
            params["response_format"] = {"type": "json_object"}
        if options.max_tokens > 0:
            params["max_tokens"] = options.max_tokens

        _logger.debug(
            "[openai] model=%s images=%d format=%s",
            model,
            len(request.image_urls),
            options.response_format.value,
        )
        try:
            completion = await client.chat.completions.create(**params)
        except OpenAIError as exc:
            raise ProviderCallError(self.name, exc) from exc

        if not completion.choices:
            raise EmptyResponseError("empty response choices from OpenAI")

        content = completion.choices[0].message.content
        if not content:
            raise EmptyContentError("empty content in OpenAI response")

        log_stage(_logger, "openai", content)
        return content
