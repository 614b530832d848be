"""Generation adapters."""

from ai_clients.llm.base import AIClient
from ai_clients.llm.gemini_client import GeminiClient
from ai_clients.llm.model_factory import create_ai_client
from ai_clients.llm.ollama_client import OllamaClient
from ai_clients.llm.openai_client import OpenAIClient

__all__ = ["AIClient", "GeminiClient", "OllamaClient", "OpenAIClient", "create_ai_client"]
