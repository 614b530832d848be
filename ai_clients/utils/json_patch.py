"""Surgical edits on raw JSON text.

Model output is not schema-checked before it is patched, so a full
``loads``/``dumps`` round trip is avoided: only the bytes of the targeted
member change, everything else (unknown keys, ordering, spacing, number
formatting) is kept verbatim.
"""

from __future__ import annotations

import json
import re
from typing import Any

from ai_clients.errors import ResponseParseError

_DECODER = json.JSONDecoder()
_WHITESPACE = re.compile(r"[ \t\n\r]*")


def _skip_ws(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()


def set_json_key(text: str, key: str, value: Any) -> str:
    """Set top-level ``key`` of the JSON object in ``text`` to ``value``.

    Existing occurrences are overwritten in place (all of them, should the
    model emit duplicates); a missing key is appended as the last member.
    Raises :class:`ResponseParseError` when ``text`` is not a JSON object.
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"invalid JSON: {exc}", raw=text) from exc
    if not isinstance(parsed, dict):
        raise ResponseParseError("JSON document is not an object", raw=text)

    encoded_value = json.dumps(value, ensure_ascii=False)
    encoded_member = f"{json.dumps(key, ensure_ascii=False)}:{encoded_value}"

    open_pos = _skip_ws(text, 0)
    pos = _skip_ws(text, open_pos + 1)
    if text[pos] == "}":
        return text[: open_pos + 1] + encoded_member + text[pos:]

    spans: list[tuple[int, int]] = []
    last_value_end = pos
    while True:
        member_key, pos = _DECODER.raw_decode(text, pos)
        pos = _skip_ws(text, pos) + 1  # ':'
        value_start = _skip_ws(text, pos)
        _, value_end = _DECODER.raw_decode(text, value_start)
        if member_key == key:
            spans.append((value_start, value_end))
        last_value_end = value_end
        pos = _skip_ws(text, value_end)
        if text[pos] == ",":
            pos = _skip_ws(text, pos + 1)
            continue
        break

    if not spans:
        return text[:last_value_end] + "," + encoded_member + text[last_value_end:]

    for start, end in reversed(spans):
        text = text[:start] + encoded_value + text[end:]
    return text
