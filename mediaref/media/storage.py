"""
Storage bucket layout for the platform's public object store.

Static configuration only: which path prefixes map to which bucket,
and how a storage-relative path becomes a public object URL.
"""

import logging
import re
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# Present in every public object URL, with or without scheme
STORAGE_MARKER = "supabase.co/storage/v1/object/public/"

# Path prefix -> bucket name
BUCKET_PREFIXES: Mapping[str, str] = MappingProxyType({
    "post-media/": "post-media",
    "cover-images/": "cover-images",
    "avatars/": "avatars",
    "profile-images/": "profile-images",
})

# Uploads keyed by user id (`<uuid>/file.jpg`) went to cover images
DEFAULT_BUCKET = "cover-images"

UUID_PREFIX = re.compile(r"^[\w-]{36}/")


def match_bucket(path: str) -> Optional[Tuple[str, str]]:
    """
    Return (prefix, bucket) for the longest known prefix of path,
    ("", DEFAULT_BUCKET) for a UUID-scoped path, or None.
    """
    matches = [p for p in BUCKET_PREFIXES if path.startswith(p)]
    if matches:
        prefix = max(matches, key=len)
        return prefix, BUCKET_PREFIXES[prefix]

    if UUID_PREFIX.match(path):
        return "", DEFAULT_BUCKET

    return None


def storage_object_url(path: str, storage_base: str) -> Optional[str]:
    """
    Build `{storage_base}/{bucket}/{object}` for a storage-relative path.

    Returns None when the path names no bucket or no object.
    """
    match = match_bucket(path)
    if match is None:
        return None

    prefix, bucket = match
    remainder = path[len(prefix):]
    remainder = re.sub(r"\s+", "", remainder)
    remainder = re.sub(r"/{2,}", "/", remainder).lstrip("/")

    if not remainder:
        return None

    url = f"{storage_base.rstrip('/')}/{bucket}/{remainder}"
    logging.debug(
        "Constructed storage URL path=%r bucket=%s object=%r url=%s",
        path, bucket, remainder, url,
    )
    return url
