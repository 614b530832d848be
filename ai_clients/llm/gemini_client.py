"""Generate-content adapter for Gemini models on Vertex AI."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from google import genai
from google.auth import exceptions as auth_errors
from google.genai import errors as genai_errors
from google.genai import types

from ai_clients.config.logger import get_logger, log_stage
from ai_clients.errors import (
    ConfigurationError,
    EmptyContentError,
    EmptyResponseError,
    ProviderCallError,
)
from ai_clients.llm.base import AIClient, ImageFetcher
from ai_clients.models import GenerationOptions, GenerationRequest, ResponseFormat

_logger = get_logger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


class GeminiClient(AIClient):
    name = "gemini"

    def __init__(
        self,
        project: str = "",
        location: str = "",
        model: str = "",
        client: Optional[genai.Client] = None,
        image_fetcher: Optional[ImageFetcher] = None,
    ) -> None:
        if client is None:
            if not project or not location:
                raise ConfigurationError("gemini project and location are required")
            try:
                client = genai.Client(vertexai=True, project=project, location=location)
            except (ValueError, genai_errors.APIError, auth_errors.GoogleAuthError) as exc:
                raise ConfigurationError(f"failed to create Gemini client: {exc}") from exc
        super().__init__(client, model or DEFAULT_GEMINI_MODEL, image_fetcher)

    async def _build_contents(self, request: GenerationRequest) -> list[types.Content]:
        parts: list[types.Part] = []
        if request.text:
            parts.append(types.Part.from_text(text=request.text))
        for image_bytes, mime_type in await self._load_images(request):
            parts.append(types.Part.from_bytes(data=image_bytes, mime_type=mime_type))
        return [types.Content(role="user", parts=parts)]

    @staticmethod
    def _build_config(
        request: GenerationRequest, options: GenerationOptions
    ) -> types.GenerateContentConfig:
        kwargs: dict[str, Any] = {}
        if request.system_prompt:
            kwargs["system_instruction"] = request.system_prompt
        if options.response_format == ResponseFormat.JSON:
            kwargs["response_mime_type"] = "application/json"
        if options.max_tokens > 0:
            kwargs["max_output_tokens"] = options.max_tokens
        return types.GenerateContentConfig(**kwargs)

    async def generate(
        self,
        request: GenerationRequest,
        options: Optional[GenerationOptions] = None,
    ) -> str:
        options = options or GenerationOptions()
        client = self._require_client()
        model = self._resolve_model(options)

        contents = await self._build_contents(request)
        config = self._build_config(request, options)

        _logger.debug(
            "[gemini] model=%s images=%d format=%s",
            model,
            len(request.image_urls),
            options.response_format.value,
        )
        try:
            response = await client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except (genai_errors.APIError, auth_errors.GoogleAuthError, httpx.HTTPError) as exc:
            raise ProviderCallError(self.name, exc) from exc

        if not response.candidates:
            raise EmptyResponseError("empty response from Gemini")

        candidate = response.candidates[0]
        if candidate.content is None or not candidate.content.parts:
            raise EmptyContentError("empty content in Gemini response")

        text = "".join(part.text for part in candidate.content.parts if part.text)
        log_stage(_logger, "gemini", text)
        return text
