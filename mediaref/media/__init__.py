"""
Media reference resolution.

Turns whatever an upstream writer stored for an image (bare path,
JSON array, bracket-polluted string, full URL, storage path) into one
canonical URL:

- Sanitizer: strip brackets, quotes and their encoded forms
- Unwrapper: open JSON containers
- Classifier: decide what the cleaned value is
- Builder: produce the final URL or the fallback

Nothing in this package does I/O. It is pure logic.
"""

from .models import Kind, ResolutionResult
from .pipeline import resolve, resolve_url, resolve_post_cover
from .cache import ResolutionCache, resolve_cached, clear_cache

__all__ = [
    "Kind",
    "ResolutionResult",
    "resolve",
    "resolve_url",
    "resolve_post_cover",
    "ResolutionCache",
    "resolve_cached",
    "clear_cache",
]
