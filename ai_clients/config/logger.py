"""Package logging.

Library modules only ask for loggers. Handlers are attached by the process
that embeds the package (``api.main`` for the HTTP service) through
:func:`configure_logging`.
"""

import json
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from ai_clients.config.settings import Settings, settings as default_settings

BASE_LOGGER_NAME = "ai_clients"
_FILE_HANDLER_MARK = "_ai_clients_file"


def _level_or(level_name: str, fallback: int) -> tuple[int, bool]:
    level = getattr(logging, (level_name or "").strip().upper(), None)
    if isinstance(level, int):
        return level, True
    return fallback, False


def _file_handler(config: Settings, base_logger: logging.Logger) -> Optional[logging.Handler]:
    file_level, ok = _level_or(config.LOG_FILE_LEVEL, logging.DEBUG)
    if not ok:
        base_logger.warning("[logger] Invalid LOG_FILE_LEVEL '%s', using DEBUG", config.LOG_FILE_LEVEL)

    backup_count = config.LOG_FILE_BACKUP_COUNT
    if backup_count < 0:
        base_logger.warning("[logger] Invalid LOG_FILE_BACKUP_COUNT '%s', using 7", backup_count)
        backup_count = 7

    log_dir = Path(config.LOG_DIR)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = TimedRotatingFileHandler(
            filename=str(log_dir / config.LOG_FILE_NAME),
            when=config.LOG_FILE_WHEN,
            interval=config.LOG_FILE_INTERVAL,
            backupCount=backup_count,
            encoding=config.LOG_FILE_ENCODING,
        )
    except OSError as exc:
        base_logger.warning("[logger] File logging disabled, cannot write to '%s': %s", log_dir, exc)
        return None

    handler.setLevel(file_level)
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
    setattr(handler, _FILE_HANDLER_MARK, True)
    return handler


def configure_logging(config: Optional[Settings] = None, *, log_to_file: bool = True) -> logging.Logger:
    """Attach stream (and optionally rotating file) handlers to the package logger.

    Safe to call more than once: existing handlers are kept and only the
    level is refreshed.
    """
    config = config or default_settings
    base_logger = logging.getLogger(BASE_LOGGER_NAME)
    level, ok = _level_or(config.LOG_LEVEL, logging.INFO)
    base_logger.setLevel(level)

    if not any(isinstance(h, logging.StreamHandler) and not getattr(h, _FILE_HANDLER_MARK, False)
               for h in base_logger.handlers):
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(config.LOG_FORMAT))
        base_logger.addHandler(stream)
        base_logger.propagate = False

    if not ok:
        base_logger.warning("[logger] Invalid LOG_LEVEL '%s', using INFO", config.LOG_LEVEL)

    if log_to_file and not any(getattr(h, _FILE_HANDLER_MARK, False) for h in base_logger.handlers):
        handler = _file_handler(config, base_logger)
        if handler is not None:
            base_logger.addHandler(handler)

    return base_logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger or one of its children. Attaches nothing."""
    if not name or name == BASE_LOGGER_NAME:
        return logging.getLogger(BASE_LOGGER_NAME)
    if name.startswith(f"{BASE_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER_NAME}.{name}")


def _as_text(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, BaseModel):
        return json.dumps(content.model_dump(mode="json"), ensure_ascii=False)
    return str(content)


def log_stage(logger: logging.Logger, stage: str, content: Any, limit: Optional[int] = None) -> None:
    """Debug-log model output for ``stage``, cut to ``limit`` chars (``LOG_TRUNCATE``)."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    text = _as_text(content)
    if not text:
        logger.debug("[%s] output: [EMPTY]", stage)
        return

    limit = default_settings.LOG_TRUNCATE if limit is None else limit
    if len(text) > limit:
        text = f"{text[:limit]} ...[truncated {len(text) - limit} chars]"
    logger.debug("[%s] output:\n%s", stage, text)
