"""Lenient JSON extraction from model output."""

from __future__ import annotations

import json
import re
from typing import Any, Iterator

_FENCED_JSON = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL)


def _balanced_span(text: str, start: int) -> str | None:
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def _balanced_objects(text: str) -> Iterator[str]:
    """Yield balanced ``{...}`` spans, one per opening brace, left to right."""
    start = text.find("{")
    while start != -1:
        span = _balanced_span(text, start)
        if span is not None:
            yield span
        start = text.find("{", start + 1)


def _loads_object(candidate: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json(text: str | None) -> dict[str, Any] | None:
    """Return the JSON object embedded in ``text``, or None.

    A fenced ```json block wins; otherwise the first balanced ``{...}``
    span that parses as an object is used. Prose around it, including
    stray braces, is ignored.
    """
    if not text:
        return None
    fenced = _FENCED_JSON.search(text)
    if fenced:
        parsed = _loads_object(fenced.group(1))
        if parsed is not None:
            return parsed
    for candidate in _balanced_objects(text):
        parsed = _loads_object(candidate)
        if parsed is not None:
            return parsed
    return None
