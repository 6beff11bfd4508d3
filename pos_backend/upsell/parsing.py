from __future__ import annotations

import json
from typing import Any

from ..errors import ParseError

_decoder = json.JSONDecoder()


def extract_json_array(text: str | None) -> list[Any]:
    """
    Pull the JSON array out of free-text model output.

    Models wrap their answer in code fences or prose, so the outermost
    ``[...]`` span (first ``[`` to last ``]``) is tried first. If that span is
    not valid JSON, every ``[`` is tried in turn and the first well-formed
    array is returned, preferring one that holds objects.

    Raises ``ParseError`` when the text contains no parseable array.
    """
    if not text or not text.strip():
        raise ParseError("empty model output")

    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        raise ParseError("no JSON array in model output")

    try:
        parsed = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        parsed = None
    if isinstance(parsed, list):
        return parsed

    first_array: list[Any] | None = None
    pos = start
    while pos != -1:
        try:
            candidate, _ = _decoder.raw_decode(text, pos)
        except json.JSONDecodeError:
            candidate = None
        if isinstance(candidate, list):
            if any(isinstance(entry, dict) for entry in candidate):
                return candidate
            if first_array is None:
                first_array = candidate
        pos = text.find("[", pos + 1)

    if first_array is not None:
        return first_array
    raise ParseError("model output holds no well-formed JSON array")
