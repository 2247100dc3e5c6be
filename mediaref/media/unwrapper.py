import json
from typing import Any, Optional

from mediaref.media.sanitizer import MAX_PASSES


def _url_field(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        url = value.get("url")
        if isinstance(url, str) and url:
            return url
    return None


def unwrap(text: str) -> Optional[str]:
    """
    Pull the real reference out of a JSON container.

    Handles `["url", ...]`, `[{"url": ...}]`, `{"url": ...}` and a bare
    JSON string. Returns None when there is nothing to unwrap.
    """
    if not text or ("[" not in text and "{" not in text):
        return None

    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None

    if isinstance(parsed, list):
        if not parsed:
            return None
        first = parsed[0]
        if isinstance(first, str):
            return first
        return _url_field(first)

    if isinstance(parsed, dict):
        return _url_field(parsed)

    if isinstance(parsed, str):
        return parsed

    return None


def unwrap_all(text: str) -> str:
    """
    Keep unwrapping until the value stops being a JSON container,
    e.g. a JSON string that itself holds a JSON array.
    """
    for _ in range(MAX_PASSES):
        inner = unwrap(text.strip())
        if inner is None or inner == text:
            break
        text = inner
    return text
