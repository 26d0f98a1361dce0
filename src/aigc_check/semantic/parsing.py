"""Lenient extraction of JSON payloads from model output."""

from __future__ import annotations

import json
from typing import Any


def strip_code_fence(response: str) -> str:
    """Return the body of the first fenced block, or the input unchanged."""
    response = response.strip()
    if not response.startswith("```"):
        return response
    body: list[str] = []
    inside = False
    for line in response.splitlines():
        if line.startswith("```"):
            if inside:
                break
            inside = True
            continue
        if inside:
            body.append(line)
    return "\n".join(body)


def _slice_between(text: str, open_char: str, close_char: str) -> str:
    start = text.find(open_char)
    end = text.rfind(close_char)
    if start >= 0 and end > start:
        return text[start : end + 1]
    return text


def parse_json_response(response: str) -> dict[str, Any]:
    """Parse a JSON object, tolerating fences and surrounding prose.

    Raises ``ValueError`` (``json.JSONDecodeError`` included) when no
    object can be recovered.
    """
    candidate = _slice_between(strip_code_fence(response), "{", "}")
    data: Any = json.loads(candidate)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data  # pyright: ignore[reportUnknownVariableType]


def parse_json_array_response(response: str) -> list[Any]:
    """Parse a JSON array, tolerating fences and surrounding prose."""
    candidate = _slice_between(strip_code_fence(response), "[", "]")
    data: Any = json.loads(candidate)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return data  # pyright: ignore[reportUnknownVariableType]
