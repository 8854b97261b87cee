"""Turn backend usage rows into display rows. No app imports to avoid circular deps."""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from fastapi import Request

from shortlink.common.headers import build_base_url
from shortlink.common.url_builder import build_short_url
from shortlink.ranking import Range, destination_of, first_present, metric, total_hits


def public_base_url(request: Request) -> str:
    """Base URL users should see in short links (proxy headers, then host, then config)."""
    config = request.app.state.config
    return build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.frontend_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )


def _listing_hits(row: Mapping[str, Any]):
    # The all-URLs listing reports a bare "hits" counter
    value = first_present(row, ("hits",))
    return total_hits(row) if value is None else value


def display_rows(
    rows: Sequence[Mapping[str, Any]],
    base_url: str,
    range_: Optional[Range] = None,
) -> List[Dict[str, Any]]:
    """One flat dict per row, with the selected metric when a range is given."""
    result = []
    for row in rows:
        slug = str(row.get("slug") or "")
        created_at = row.get("createdAt") or row.get("created_at")
        result.append({
            "slug": slug,
            "url": destination_of(row),
            "created_at": str(created_at) if created_at else None,
            "hits": metric(row, range_) if range_ is not None else _listing_hits(row),
            "hits_total": total_hits(row),
            "short_url": build_short_url(slug, base_url) if slug else None,
        })
    return result
