from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, jsonify, request

from mediaref.diagnostics import analyze_records
from mediaref.media.cache import resolve_cached
from mediaref.services.supabase import fetch_recent_posts

api = Blueprint("api", __name__)

DEFAULT_DEBUG_LIMIT = 5
MAX_DEBUG_LIMIT = 50


@api.route("/", methods=["GET"])
def healthcheck() -> str:
    return "mediaref running"


@api.route("/resolve", methods=["POST"])
def resolve_reference() -> Any:
    """
    Resolve one raw reference.

    Body: {"input": <raw value>, "fallback": <optional url>}
    """
    body: Dict[str, Any] = request.get_json(silent=True) or {}
    raw = body.get("input")
    fallback = body.get("fallback")
    if not isinstance(fallback, str):
        fallback = None

    result = resolve_cached(raw, fallback)

    return jsonify(result.to_dict())


@api.route("/debug/images", methods=["GET"])
def debug_images() -> Any:
    """
    Resolve cover images of the newest posts and report which ones
    fall back.
    """
    limit = request.args.get("limit", default=DEFAULT_DEBUG_LIMIT, type=int)
    limit = max(1, min(limit, MAX_DEBUG_LIMIT))

    rows, error = fetch_recent_posts(limit)
    if error:
        logging.error("[DEBUG IMAGES] could not load posts: %s", error)
        return jsonify({"ok": False, "error": error}), 502

    report = analyze_records(rows or [], limit=limit)
    if report["error_count"]:
        logging.warning(
            "[DEBUG IMAGES] %s of %s posts resolve to the fallback",
            report["error_count"], len(report["entries"]),
        )

    return jsonify({"ok": True, **report})
