"""Job-posting article tagging and polishing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ai_clients.errors import EmptyContentError, NotInitializedError
from ai_clients.llm.base import AIClient
from ai_clients.models import GenerationOptions, GenerationRequest, PlatformType, ResponseFormat
from ai_clients.prompts.article import (
    get_extract_tags_system_prompt,
    get_polish_article_system_prompt,
)


@dataclass(frozen=True)
class ArticleConfig:
    max_tokens: int = 2048


class ArticleService:
    def __init__(self, ai_client: Optional[AIClient], config: Optional[ArticleConfig] = None) -> None:
        self.ai_client = ai_client
        self.config = config or ArticleConfig()

    async def _generate(self, system_prompt: str, content: str, response_format: ResponseFormat) -> str:
        if self.ai_client is None:
            raise NotInitializedError("AI client is not initialized")

        request = GenerationRequest(system_prompt=system_prompt, text=content)
        options = GenerationOptions(
            max_tokens=self.config.max_tokens,
            response_format=response_format,
        )
        resp = await self.ai_client.generate(request, options)
        if not resp:
            raise EmptyContentError("empty response content from AI client")
        return resp

    async def extract_tags(self, content: str, platform: PlatformType | str) -> str:
        """Return the model's tag JSON as-is; schema checks are the caller's job."""
        return await self._generate(
            get_extract_tags_system_prompt(platform),
            content,
            ResponseFormat.JSON,
        )

    async def polish(self, content: str, platform: PlatformType | str) -> str:
        return await self._generate(
            get_polish_article_system_prompt(platform),
            content,
            ResponseFormat.TEXT,
        )
