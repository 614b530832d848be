from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ResponseFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


class GenerationRequest(BaseModel):
    """One generation call: optional system prompt, user text and images.

    At least one of ``text`` or ``image_urls`` should be non-empty. This is
    not validated here; a request with neither is the caller's mistake.
    """

    model_config = ConfigDict(frozen=True)

    system_prompt: str = ""
    text: str = ""
    image_urls: tuple[str, ...] = ()


class GenerationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_tokens: int = Field(default=0, ge=0, description="0 keeps the provider default.")
    model: str = Field(default="", description="Empty keeps the adapter default model.")
    response_format: ResponseFormat = ResponseFormat.TEXT
