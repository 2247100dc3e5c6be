from __future__ import annotations

import re
from typing import Optional

from mediaref.config import MediaConfig, get_config

from .models import Kind, ResolutionResult
from .storage import STORAGE_MARKER, storage_object_url

SCHEMES = ("https://", "http://")


def normalize_url(text: str) -> str:
    """
    Give a URL-like string a scheme and collapse repeated slashes in
    its path. Query string and fragment are left untouched.
    """
    positions = [i for i in (text.find(s) for s in SCHEMES) if i >= 0]
    if positions:
        text = text[min(positions):]
    else:
        # Bare host/path or protocol-relative
        text = "https://" + text.lstrip("/")

    scheme, rest = text.split("://", 1)
    rest = rest.lstrip("/")

    tail = ""
    m = re.search(r"[?#]", rest)
    if m:
        rest, tail = rest[:m.start()], rest[m.start():]

    return f"{scheme}://{re.sub(r'/{2,}', '/', rest)}{tail}"


def has_host(url: str) -> bool:
    """True if a normalised URL names a host after its scheme."""
    rest = url.split("://", 1)[-1]
    return bool(re.split(r"[/?#]", rest, maxsplit=1)[0].strip())


def url_source(url: str) -> str:
    return "supabase" if STORAGE_MARKER in url else "external"


def build(
    text: str,
    kind: Kind,
    fallback: str,
    config: Optional[MediaConfig] = None,
    original_input: Optional[str] = None,
) -> ResolutionResult:
    """
    Turn a classified reference into its final URL.

    COMPLETE_URL and PROTOCOL_RELATIVE are normalised, STORAGE_PATH is
    built against the storage base, LOCAL_PATH passes through and
    anything else becomes the fallback.
    """
    config = config or get_config()
    original = text if original_input is None else original_input

    if not text or kind is Kind.UNKNOWN:
        return ResolutionResult.fallback(fallback, original)

    if kind in (Kind.COMPLETE_URL, Kind.PROTOCOL_RELATIVE):
        prefix = "https:" if kind is Kind.PROTOCOL_RELATIVE else ""
        url = normalize_url(prefix + text)
        if not has_host(url):
            return ResolutionResult.fallback(fallback, original)
        source = url_source(url)
    elif kind is Kind.STORAGE_PATH:
        url = storage_object_url(text, config.storage_base)
        if url is None:
            return ResolutionResult.fallback(fallback, original)
        source = "supabase"
    elif kind is Kind.LOCAL_PATH:
        url = text
        source = "local"
    else:
        return ResolutionResult.fallback(fallback, original)

    return ResolutionResult(
        url=url,
        is_valid=url != fallback,
        source=source,
        original_input=original,
    )
