import pytest

from mediaref.config import MediaConfig, set_config
from mediaref.media.cache import clear_cache

STORAGE_BASE = "https://proj.supabase.co/storage/v1/object/public"
FALLBACK = "/assets/images/default-banner.jpg"


@pytest.fixture(autouse=True)
def media_config():
    """Pin storage settings so tests never depend on the environment."""
    config = MediaConfig(storage_base=STORAGE_BASE, fallback_url=FALLBACK)
    set_config(config)
    clear_cache()
    yield config
    set_config(None)
    clear_cache()
