from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Any, Hashable, Optional, Tuple

from mediaref.config import MediaConfig, get_config

from .models import ResolutionResult
from .pipeline import resolve

DEFAULT_MAXSIZE = 512


def _cache_key(
    raw: Any,
    fallback: Optional[str],
    config: Optional[MediaConfig] = None,
) -> Optional[Tuple[Hashable, ...]]:
    """
    Hashable key for (raw, fallback, config), or None when raw cannot be keyed.
    Lists are keyed as tuples; the type is part of the key so "a" and
    ["a"] keep their own original_input.
    """
    if isinstance(raw, list):
        raw = tuple(raw)
    try:
        hash(raw)
    except TypeError:
        return None
    return (type(raw).__name__, raw, fallback, config)


class ResolutionCache:
    """
    Size-bounded LRU of resolved references.

    resolve() is pure, so entries never need invalidation; results are
    stored whole under a lock.
    """

    def __init__(self, maxsize: int = DEFAULT_MAXSIZE) -> None:
        if maxsize <= 0:
            raise ValueError("maxsize must be positive")
        self.maxsize = maxsize
        self._entries: "OrderedDict[Tuple[Hashable, ...], ResolutionResult]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(
        self,
        raw: Any,
        fallback: Optional[str] = None,
        config: Optional[MediaConfig] = None,
    ) -> ResolutionResult:
        key = _cache_key(raw, fallback, config)
        if key is None:
            return resolve(raw, fallback, config)

        with self._lock:
            hit = self._entries.get(key)
            if hit is not None:
                self._entries.move_to_end(key)
                return hit

        result = resolve(raw, fallback, config)

        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)

        return result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


# Shared cache for render paths; fine for a single process
_CACHE = ResolutionCache()


def resolve_cached(raw: Any, fallback: Optional[str] = None) -> ResolutionResult:
    # Keyed on the active config: entries never outlive a set_config()
    return _CACHE.get(raw, fallback, get_config())


def clear_cache() -> None:
    _CACHE.clear()
