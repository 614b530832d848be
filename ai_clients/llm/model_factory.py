from __future__ import annotations

from abc import ABC, abstractmethod
from functools import partial

from ai_clients.config.logger import get_logger
from ai_clients.config.settings import Settings, settings as default_settings
from ai_clients.errors import ConfigurationError
from ai_clients.llm.base import AIClient, ImageFetcher
from ai_clients.llm.gemini_client import GeminiClient
from ai_clients.llm.ollama_client import OllamaClient
from ai_clients.llm.openai_client import OpenAIClient
from ai_clients.utils.image_utils import fetch_image

_logger = get_logger(__name__)


def _image_fetcher(settings: Settings) -> ImageFetcher:
    return partial(
        fetch_image,
        timeout=settings.IMAGE_FETCH_TIMEOUT,
        max_bytes=settings.IMAGE_MAX_BYTES,
    )


class BaseModelProvider(ABC):
    """Builds one adapter kind from settings."""

    name: str = "base"

    @abstractmethod
    def is_available(self, settings: Settings) -> bool:
        """Whether settings carry what this provider needs."""

    @abstractmethod
    def create(self, settings: Settings) -> AIClient:
        """Create the adapter."""


class OpenAIProvider(BaseModelProvider):
    name = "openai"

    def is_available(self, settings: Settings) -> bool:
        return settings.has_openai_creds()

    def create(self, settings: Settings) -> AIClient:
        return OpenAIClient(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            base_url=settings.OPENAI_BASE_URL or None,
            image_fetcher=_image_fetcher(settings),
        )


class GeminiProvider(BaseModelProvider):
    name = "gemini"

    def is_available(self, settings: Settings) -> bool:
        return bool(settings.GEMINI_PROJECT and settings.GEMINI_LOCATION)

    def create(self, settings: Settings) -> AIClient:
        return GeminiClient(
            project=settings.GEMINI_PROJECT,
            location=settings.GEMINI_LOCATION,
            model=settings.GEMINI_MODEL,
            image_fetcher=_image_fetcher(settings),
        )


class OllamaProvider(BaseModelProvider):
    name = "ollama"

    def is_available(self, settings: Settings) -> bool:
        return bool(settings.OLLAMA_BASE_URL)

    def create(self, settings: Settings) -> AIClient:
        return OllamaClient(
            base_url=settings.OLLAMA_BASE_URL,
            model=settings.OLLAMA_MODEL,
            image_fetcher=_image_fetcher(settings),
        )


class ModelFactory:
    """Provider registry. Selection happens once, when the adapter is built."""

    def __init__(self) -> None:
        self.providers: dict[str, BaseModelProvider] = {
            OpenAIProvider.name: OpenAIProvider(),
            GeminiProvider.name: GeminiProvider(),
            OllamaProvider.name: OllamaProvider(),
        }

    def create_ai_client(self, provider_name: str, settings: Settings) -> AIClient:
        name = (provider_name or "").strip().lower()
        provider = self.providers.get(name)
        if provider is None:
            raise ConfigurationError(f"Unknown provider: {name or '<empty>'}")
        if not provider.is_available(settings):
            raise ConfigurationError(f"Provider '{name}' is not configured")
        _logger.info("[factory] creating %s client", name)
        return provider.create(settings)


_FACTORY = ModelFactory()


def create_ai_client(
    provider: str | None = None,
    settings: Settings | None = None,
) -> AIClient:
    """Build the adapter named by ``provider`` (default: ``AI_PROVIDER``)."""
    settings = settings or default_settings
    return _FACTORY.create_ai_client(provider or settings.get_provider(), settings)
