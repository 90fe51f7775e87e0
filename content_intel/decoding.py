"""
Decoding of raw oracle responses.

Models often wrap JSON in prose or markdown code fences ("Here you go:
```json ... ```"). Structured payloads are therefore located by taking the span
from the first opening bracket to the last closing bracket and parsing only
that span. There is no partial recovery: if the span does not parse, the
response is rejected.
"""

import json
import logging
from typing import Any, Optional

from .errors import EmptyResponse, MalformedResponse, TooShort

logger = logging.getLogger(__name__)


def _bracket_span(raw: Optional[str], open_char: str, close_char: str) -> Optional[str]:
    text = raw or ""
    start = text.find(open_char)
    end = text.rfind(close_char)
    if start == -1 or end == -1 or end < start:
        return None
    return text[start:end + 1]


def _decode_span(raw: Optional[str], open_char: str, close_char: str, expected: type, what: str) -> Any:
    span = _bracket_span(raw, open_char, close_char)
    if span is None:
        raise MalformedResponse(f"No JSON {what} found in response")
    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse JSON {what} from response ({len(raw or '')} chars): {e}")
        raise MalformedResponse(f"Invalid JSON {what} in response: {e}") from e
    if not isinstance(data, expected):
        raise MalformedResponse(f"Expected a JSON {what}, got {type(data).__name__}")
    return data


def decode_object(raw: Optional[str]) -> dict:
    """Extract a JSON object from a model response."""
    return _decode_span(raw, "{", "}", dict, "object")


def decode_array(raw: Optional[str]) -> list:
    """Extract a JSON array from a model response."""
    return _decode_span(raw, "[", "]", list, "array")


def decode_prose(raw: Optional[str], min_length: Optional[int] = None) -> str:
    """
    Trim a prose (HTML) response.

    Args:
        raw: Raw response text.
        min_length: Minimum viable length. When given, empty text raises
            EmptyResponse and shorter text raises TooShort.

    Returns:
        The trimmed text.
    """
    text = (raw or "").strip()
    if min_length is not None:
        if not text:
            raise EmptyResponse("Generated content is empty")
        if len(text) < min_length:
            raise TooShort(f"Generated content is too short ({len(text)} < {min_length} chars)")
    return text
