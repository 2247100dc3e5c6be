"""
Media reference resolution pipeline.

    raw value -> unwrap -> sanitize -> classify -> build -> ResolutionResult

`resolve` is total: whatever an upstream writer stored, image
components get back a renderable URL and never an exception.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from mediaref.config import MediaConfig, get_config

from .builder import build
from .classifier import classify
from .models import ResolutionResult
from .sanitizer import sanitize
from .unwrapper import unwrap_all


def stringify_input(raw: Any) -> str:
    """Readable form of the raw value for diagnostics (lists comma-joined)."""
    try:
        if isinstance(raw, (list, tuple)):
            return ",".join(str(item) for item in raw)
        return str(raw)
    except Exception:
        return f"<unprintable {type(raw).__name__}>"


def clean_reference(text: str) -> str:
    """
    Unwrap and sanitize one string. Unwrapping runs first on the
    trimmed value while its JSON quoting is still intact.
    """
    return sanitize(unwrap_all(text.strip()))


def _resolve_string(text: str, fallback: str, config: MediaConfig, original: str) -> ResolutionResult:
    cleaned = clean_reference(text)
    kind = classify(cleaned)
    return build(cleaned, kind, fallback, config=config, original_input=original)


def resolve(
    raw: Any,
    fallback: Optional[str] = None,
    config: Optional[MediaConfig] = None,
) -> ResolutionResult:
    """
    Resolve a raw media reference to one canonical URL.

    Args:
        raw: str, list/tuple of str (first item wins) or None.
            Any other type resolves to the fallback.
        fallback: URL used when nothing can be resolved.
            Defaults to the configured fallback.
        config: Storage settings; defaults to get_config().

    Returns:
        ResolutionResult: always fully populated.
    """
    config = config or get_config()
    fallback_url = fallback or config.fallback_url
    original = stringify_input(raw)

    try:
        if raw is None:
            return ResolutionResult.fallback(fallback_url, original)

        if isinstance(raw, (list, tuple)):
            first = raw[0] if raw else None
            if isinstance(first, str) and first.strip():
                return _resolve_string(first, fallback_url, config, original)
            return ResolutionResult.fallback(fallback_url, original)

        if isinstance(raw, str):
            return _resolve_string(raw, fallback_url, config, original)

        return ResolutionResult.fallback(fallback_url, original)
    except Exception as e:
        logging.error("Media reference resolution failed for %r: %s", original, e)
        return ResolutionResult.fallback(fallback_url, original)


def resolve_url(
    raw: Any,
    fallback: Optional[str] = None,
    config: Optional[MediaConfig] = None,
) -> str:
    """
    Shortcut returning only the resolved URL.
    """
    return resolve(raw, fallback, config).url


# Post columns holding a cover image, newest format first
COVER_FIELDS = ("cover_images", "featured_image_url")


def resolve_post_cover(
    post: Any,
    fallback: Optional[str] = None,
    config: Optional[MediaConfig] = None,
) -> ResolutionResult:
    """
    Resolve a post's cover image from `cover_images`, falling back to
    the legacy `featured_image_url` when the former does not resolve.
    """
    config = config or get_config()
    fallback_url = fallback or config.fallback_url

    if not isinstance(post, dict):
        return ResolutionResult.fallback(fallback_url, stringify_input(post))

    result = None
    for field in COVER_FIELDS:
        raw = post.get(field)
        if not raw:
            continue
        result = resolve(raw, fallback_url, config)
        if result.source != "fallback":
            return result

    if result is None:
        return ResolutionResult.fallback(fallback_url, "None")
    return result
