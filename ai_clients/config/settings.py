"""
Application-wide settings using pydantic-settings.
Only the wiring layers (model factory, API) read from here; services and
adapters receive their configuration through constructor arguments.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    LOG_DIR: str = "./logs"
    LOG_FILE_NAME: str = "ai_clients.debug.log"
    LOG_FILE_WHEN: str = "midnight"
    LOG_FILE_INTERVAL: int = 1
    LOG_FILE_BACKUP_COUNT: int = 7
    LOG_FILE_ENCODING: str = "utf-8"
    LOG_FILE_LEVEL: str = "DEBUG"
    LOG_TRUNCATE: int = 600

    # Provider selection: openai | gemini | ollama
    AI_PROVIDER: str = "gemini"

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = ""
    OPENAI_MODEL: str = ""

    # Gemini (Vertex AI)
    GEMINI_PROJECT: str = ""
    GEMINI_LOCATION: str = "asia-east1"
    GEMINI_MODEL: str = ""

    # Ollama
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "gemma3"

    # Image fetching
    IMAGE_FETCH_TIMEOUT: float | None = None
    IMAGE_MAX_BYTES: int = 10 * 1024 * 1024

    # Message queue
    REDIS_URL: str = "redis://localhost:6379/0"

    # Services
    IS_PROD: bool = False
    OCR_MAX_TOKENS: int = 1024
    ARTICLE_MAX_TOKENS: int = 2048
    OCR_TOPIC_PROD: str = "ocr-identify"
    OCR_TOPIC_DEV: str = "ocr-identify-dev"

    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_provider(self) -> str:
        return (self.AI_PROVIDER or "").strip().lower()

    def has_openai_creds(self) -> bool:
        return bool(self.OPENAI_API_KEY)


settings = Settings()
