"""
Engine response -> API response shaping: paging, facets and suggestion lists.
"""

from typing import Any, Mapping

from product_search.schemas.search import FacetItem, SearchRequest, SearchResponse
from product_search.search.documents import from_hit
from product_search.search.queries import BRANDS_FACET, CATEGORIES_FACET, PRICE_FACET, SUGGESTION_NAME

# Label for the open upper side of a price bucket
UNBOUNDED = "*"


def response_body(response: Any) -> Mapping[str, Any]:
    """ES 8 returns ObjectApiResponse; support both .body and plain dicts."""
    return getattr(response, "body", response)


def _format_bound(value: float) -> str:
    return f"{float(value):g}"


def price_bucket_label(bucket: Mapping[str, Any]) -> str:
    lower = bucket.get("from")
    upper = bucket.get("to")
    lower_label = _format_bound(lower) if lower is not None else "0"
    upper_label = _format_bound(upper) if upper is not None else UNBOUNDED
    return f"{lower_label}-{upper_label}"


def _keyed_facet(aggregation: Mapping[str, Any]) -> list[FacetItem]:
    return [
        FacetItem(value=str(bucket.get("key", "")), count=bucket.get("doc_count") or 0)
        for bucket in aggregation.get("buckets", [])
    ]


def build_facets(aggregations: Mapping[str, Any]) -> dict[str, list[FacetItem]]:
    facets: dict[str, list[FacetItem]] = {}
    for name in (CATEGORIES_FACET, BRANDS_FACET):
        if name in aggregations:
            facets[name] = _keyed_facet(aggregations[name])
    if PRICE_FACET in aggregations:
        facets[PRICE_FACET] = [
            FacetItem(value=price_bucket_label(bucket), count=bucket.get("doc_count") or 0)
            for bucket in aggregations[PRICE_FACET].get("buckets", [])
        ]
    return facets


def _total(hits: Mapping[str, Any], fallback: int) -> int:
    total = hits.get("total")
    if isinstance(total, Mapping):
        return int(total.get("value", fallback))
    if isinstance(total, int):
        return total
    return fallback


def shape_search_response(response: Any, request: SearchRequest, elapsed_ms: float) -> SearchResponse:
    body = response_body(response)
    hits = body.get("hits", {})
    products = [from_hit(hit) for hit in hits.get("hits", [])]
    facets: dict[str, list[FacetItem]] = {}
    aggregations = body.get("aggregations")
    if request.include_facets and aggregations:
        facets = build_facets(aggregations)
    return SearchResponse(
        products=products,
        total_count=_total(hits, len(products)),
        page=request.page,
        page_size=request.page_size,
        facets=facets,
        execution_time_ms=int(elapsed_ms),
    )


def extract_suggestions(response: Any) -> list[str]:
    """Option texts across all groups, first occurrence wins. The engine already capped the size."""
    body = response_body(response)
    groups = (body.get("suggest") or {}).get(SUGGESTION_NAME, [])
    suggestions: list[str] = []
    seen: set[str] = set()
    for group in groups:
        for option in group.get("options", []):
            text = option.get("text")
            if text is None or text in seen:
                continue
            seen.add(text)
            suggestions.append(text)
    return suggestions
