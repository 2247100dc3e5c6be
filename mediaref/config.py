from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_SUPABASE_URL = "https://ybybtquplonmoopexljw.supabase.co"
STORAGE_PUBLIC_PATH = "/storage/v1/object/public"
DEFAULT_FALLBACK_URL = "/assets/images/default-banner.jpg"


@dataclass(frozen=True)
class MediaConfig:
    """
    Process-wide settings for media reference resolution.

    storage_base: public object root, e.g.
        https://<project>.supabase.co/storage/v1/object/public
    fallback_url: asset substituted when a reference cannot be resolved.
    """

    storage_base: str = DEFAULT_SUPABASE_URL + STORAGE_PUBLIC_PATH
    fallback_url: str = DEFAULT_FALLBACK_URL

    def __post_init__(self) -> None:
        # Builder joins with "/", so keep the base free of trailing slashes
        object.__setattr__(self, "storage_base", self.storage_base.rstrip("/"))

    @classmethod
    def from_env(cls) -> "MediaConfig":
        """
        Build from environment.

        MEDIA_STORAGE_BASE wins over SUPABASE_URL; MEDIA_FALLBACK_URL
        replaces the default banner.
        """
        storage_base = os.getenv("MEDIA_STORAGE_BASE")
        if not storage_base:
            supabase_url = os.getenv("SUPABASE_URL") or DEFAULT_SUPABASE_URL
            storage_base = supabase_url.rstrip("/") + STORAGE_PUBLIC_PATH

        fallback_url = os.getenv("MEDIA_FALLBACK_URL") or DEFAULT_FALLBACK_URL

        return cls(storage_base=storage_base, fallback_url=fallback_url)


# Set once, on first use or at startup
_config: Optional[MediaConfig] = None


def get_config() -> MediaConfig:
    global _config
    if _config is None:
        _config = MediaConfig.from_env()
    return _config


def set_config(config: Optional[MediaConfig]) -> None:
    """
    Install the process-wide config. Passing None re-reads the
    environment on next use.
    """
    global _config
    _config = config
