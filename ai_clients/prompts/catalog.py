"""Lookup helpers shared by the prompt modules."""

from __future__ import annotations

from typing import Mapping

from ai_clients.errors import ConfigurationError
from ai_clients.models import PlatformType


def resolve_platform(platform: PlatformType | str) -> PlatformType:
    try:
        return PlatformType(platform)
    except ValueError as exc:
        raise ConfigurationError(f"unknown platform type: {platform!r}") from exc


def lookup_prompt(
    table: Mapping[PlatformType, str],
    platform: PlatformType | str,
    kind: str,
) -> str:
    resolved = resolve_platform(platform)
    prompt = table.get(resolved, "")
    if not prompt:
        raise ConfigurationError(f"no {kind} prompt for platform {resolved.value!r}")
    return prompt
