from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from mediaref.media.pipeline import COVER_FIELDS, resolve, resolve_post_cover
from mediaref.media.validator import validate_result
from mediaref.utils.time import now_iso

TITLE_PREVIEW = 30


def _preview(title: Any) -> str:
    if not title:
        return ""
    return str(title)[:TITLE_PREVIEW] + "..."


def analyze_records(
    records: Iterable[Dict[str, Any]],
    field: Optional[str] = None,
    limit: int = 5,
    fallback: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Resolve the image reference of the first `limit` records and report
    what each one turned into. Without `field`, records are treated as
    posts and their cover is resolved across the cover columns.

    Used by the image debug endpoint to spot rows whose stored value
    no longer resolves.
    """
    entries: List[Dict[str, Any]] = []

    for record in list(records)[:limit]:
        if field is None:
            result = resolve_post_cover(record, fallback)
        else:
            result = resolve(record.get(field), fallback)
        payload = result.to_dict()

        issues: List[str] = []
        ok, err = validate_result(payload)
        if not ok and err:
            issues.append(f"Schema validation failed: {err}")

        entries.append({
            "post_id": record.get("id"),
            "title": _preview(record.get("title")),
            "raw": result.original_input,
            "final_url": result.url,
            "source": result.source,
            "has_error": not result.is_valid,
            "is_empty": result.source == "fallback",
            "issues": issues,
        })

    return {
        "generated_at": now_iso(),
        "field": field or ",".join(COVER_FIELDS),
        "entries": entries,
        "error_count": sum(1 for e in entries if e["has_error"]),
        "empty_count": sum(1 for e in entries if e["is_empty"]),
    }
