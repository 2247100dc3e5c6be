from __future__ import annotations

from .models import Kind
from .storage import BUCKET_PREFIXES, STORAGE_MARKER, UUID_PREFIX

LOCAL_PREFIXES = ("/assets/", "./assets/")


def is_complete_url(text: str) -> bool:
    """Scheme-qualified, or a public object URL that lost part of its head."""
    return (
        text.startswith("http://")
        or text.startswith("https://")
        or STORAGE_MARKER in text
    )


def is_storage_path(text: str) -> bool:
    if "/" not in text:
        return False
    if any(text.startswith(p) for p in BUCKET_PREFIXES):
        return True
    return bool(UUID_PREFIX.match(text))


def is_local_path(text: str) -> bool:
    return text.startswith(LOCAL_PREFIXES)


def classify(text: str) -> Kind:
    """
    Decide what a cleaned reference is. First match wins, so a full
    storage URL is a COMPLETE_URL and never rebuilt as a STORAGE_PATH.
    """
    if not text:
        return Kind.UNKNOWN
    if is_complete_url(text):
        return Kind.COMPLETE_URL
    if text.startswith("//"):
        return Kind.PROTOCOL_RELATIVE
    if is_storage_path(text):
        return Kind.STORAGE_PATH
    if is_local_path(text):
        return Kind.LOCAL_PATH
    return Kind.UNKNOWN
