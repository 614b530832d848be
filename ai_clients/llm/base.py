from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

from ai_clients.errors import NotInitializedError
from ai_clients.models import GenerationOptions, GenerationRequest
from ai_clients.utils.image_utils import fetch_image

ImageFetcher = Callable[[str], Awaitable[tuple[bytes, str]]]


class AIClient(ABC):
    """Provider contract: one request in, the top candidate's text out.

    Implementations keep only a provider handle and a default model, both set
    at construction, so one instance may serve concurrent calls.
    """

    name: str = "base"

    def __init__(
        self,
        client: Any,
        default_model: str,
        image_fetcher: Optional[ImageFetcher] = None,
    ) -> None:
        self._client = client
        self.default_model = default_model
        self._fetch_image = image_fetcher or fetch_image

    @abstractmethod
    async def generate(
        self,
        request: GenerationRequest,
        options: Optional[GenerationOptions] = None,
    ) -> str:
        """Return the concatenated text of the provider's top candidate."""

    def _require_client(self) -> Any:
        if self._client is None:
            raise NotInitializedError(f"{self.name} client is not initialized")
        return self._client

    def _resolve_model(self, options: GenerationOptions) -> str:
        return options.model or self.default_model

    async def _load_images(self, request: GenerationRequest) -> list[tuple[bytes, str]]:
        """Fetch every referenced image, in request order, before the provider call."""
        images: list[tuple[bytes, str]] = []
        for url in request.image_urls:
            images.append(await self._fetch_image(url))
        return images
