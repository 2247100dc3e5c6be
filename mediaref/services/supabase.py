from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from supabase import create_client, Client

POSTS_TABLE = "posts"
POST_COLUMNS = "id,title,cover_images,featured_image_url"

# Lazily-initialized Supabase client
_client: Optional[Client] = None


def _get_client() -> Client:
    """
    Build the client on first use so importing this module does not
    require credentials (e.g. when only resolving references).
    """
    global _client
    if _client is None:
        url = os.getenv("SUPABASE_URL")
        key = os.getenv("SUPABASE_ANON_KEY")
        if not url or not key:
            raise RuntimeError("SUPABASE_URL / SUPABASE_ANON_KEY are not set")
        _client = create_client(url, key)
    return _client


# ================================
# POSTS WITH COVER IMAGES
# ================================
def fetch_recent_posts(limit: int = 5) -> Tuple[Optional[List[Dict[str, Any]]], Optional[str]]:
    """
    Fetch the newest posts with their raw cover image references.
    Returns:
        (rows, error_str)
    """
    try:
        response = (
            _get_client()
            .table(POSTS_TABLE)
            .select(POST_COLUMNS)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return list(response.data or []), None
    except Exception as e:
        logging.error("[SUPABASE ERROR %s] %s", POSTS_TABLE, e)
        return None, str(e)
