"""Local model adapter, reached through LangChain's Ollama chat model."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_ollama import ChatOllama
from ollama import ResponseError

from ai_clients.config.logger import get_logger, log_stage
from ai_clients.errors import EmptyContentError, EmptyResponseError, ProviderCallError
from ai_clients.llm.base import AIClient, ImageFetcher
from ai_clients.models import GenerationOptions, GenerationRequest, ResponseFormat
from ai_clients.utils.image_utils import to_data_url

_logger = get_logger(__name__)

DEFAULT_OLLAMA_MODEL = "gemma3"


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    chunks: list[str] = []
    for block in content or []:
        if isinstance(block, str):
            chunks.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            chunks.append(str(block.get("text") or ""))
    return "".join(chunks)


class OllamaClient(AIClient):
    name = "ollama"

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "",
        client: Optional[ChatOllama] = None,
        image_fetcher: Optional[ImageFetcher] = None,
    ) -> None:
        model = model or DEFAULT_OLLAMA_MODEL
        if client is None:
            client = ChatOllama(model=model, base_url=base_url)
        super().__init__(client, model, image_fetcher)

    async def _build_messages(self, request: GenerationRequest) -> list[BaseMessage]:
        content: list[dict[str, Any]] = []
        if request.text:
            content.append({"type": "text", "text": request.text})
        for image_bytes, mime_type in await self._load_images(request):
            content.append(
                {"type": "image_url", "image_url": {"url": to_data_url(image_bytes, mime_type)}}
            )

        messages: list[BaseMessage] = []
        if request.system_prompt:
            messages.append(SystemMessage(content=request.system_prompt))
        messages.append(HumanMessage(content=content))
        return messages

    def _configured_llm(self, options: GenerationOptions) -> Any:
        update: dict[str, Any] = {"model": self._resolve_model(options)}
        if options.response_format == ResponseFormat.JSON:
            update["format"] = "json"
        if options.max_tokens > 0:
            update["num_predict"] = options.max_tokens
        return self._require_client().model_copy(update=update)

    async def generate(
        self,
        request: GenerationRequest,
        options: Optional[GenerationOptions] = None,
    ) -> str:
        options = options or GenerationOptions()
        llm = self._configured_llm(options)
        messages = await self._build_messages(request)

        _logger.debug(
            "[ollama] model=%s images=%d format=%s",
            self._resolve_model(options),
            len(request.image_urls),
            options.response_format.value,
        )
        try:
            response = await llm.ainvoke(messages)
        except (ResponseError, httpx.HTTPError) as exc:
            raise ProviderCallError(self.name, exc) from exc

        if response is None:
            raise EmptyResponseError("empty response from Ollama")
        if not response.content:
            raise EmptyContentError("empty content in Ollama response")

        text = _content_text(response.content)
        log_stage(_logger, "ollama", text)
        return text
