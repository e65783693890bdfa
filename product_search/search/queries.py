"""
Search request -> Elasticsearch query DSL.
Pure functions; the service attaches their output to the search call.
"""

from typing import Any

from product_search.schemas.search import SearchRequest, SortOption
from product_search.search.index import SUGGEST_CONTEXT

# Per-field weights for the free-text match
TEXT_FIELDS = ["title^2.0", "brand^1.5", "category^1.2", "description^1.0"]

SUGGESTION_NAME = "product_suggest"
SUGGEST_FIELD = "suggest"
# Empty prefix match over the category context, i.e. every category
ALL_CATEGORIES = [{"context": "", "prefix": True}]

CATEGORIES_FACET = "categories"
BRANDS_FACET = "brands"
PRICE_FACET = "price_ranges"

# (from, to) pairs; None leaves that side open
PRICE_RANGES: list[tuple[float | None, float | None]] = [
    (None, 25),
    (25, 50),
    (50, 100),
    (100, 200),
    (200, None),
]

_SORTS: dict[str, list[dict[str, Any]]] = {
    SortOption.PRICE_ASC.value: [{"price": {"order": "asc"}}],
    SortOption.PRICE_DESC.value: [{"price": {"order": "desc"}}],
    SortOption.TITLE.value: [{"title.keyword": {"order": "asc"}}],
}
_RELEVANCE_SORT: list[dict[str, Any]] = [{"_score": {"order": "desc"}}]


def build_text_clause(query: str) -> dict[str, Any]:
    """Boosted best-fields match with typo tolerance, or match_all for a blank query."""
    if not query or not query.strip():
        return {"match_all": {}}
    return {
        "multi_match": {
            "query": query,
            "fields": list(TEXT_FIELDS),
            "type": "best_fields",
            "fuzziness": "AUTO",
        }
    }


def build_filters(request: SearchRequest) -> list[dict[str, Any]]:
    filters: list[dict[str, Any]] = []
    if request.categories:
        filters.append({"terms": {"category": list(request.categories)}})
    if request.brands:
        filters.append({"terms": {"brand": list(request.brands)}})
    price: dict[str, float] = {}
    if request.min_price is not None:
        price["gte"] = float(request.min_price)
    if request.max_price is not None:
        price["lte"] = float(request.max_price)
    if price:
        filters.append({"range": {"price": price}})
    return filters


def build_query(request: SearchRequest) -> dict[str, Any]:
    """Text clause scores in ``must``; filters constrain without scoring."""
    bool_clause: dict[str, Any] = {"must": [build_text_clause(request.query)]}
    filters = build_filters(request)
    if filters:
        bool_clause["filter"] = filters
    return {"bool": bool_clause}


def build_sort(sort_by: str | None) -> list[dict[str, Any]]:
    return [dict(s) for s in _SORTS.get((sort_by or "").strip().lower(), _RELEVANCE_SORT)]


def build_pagination(page: int, page_size: int) -> dict[str, int]:
    # No cap: deep pages go to the engine as-is
    return {"from_": (page - 1) * page_size, "size": page_size}


def build_aggregations(include_facets: bool, terms_size: int = 50) -> dict[str, Any] | None:
    if not include_facets:
        return None
    ranges = []
    for lower, upper in PRICE_RANGES:
        bucket: dict[str, float] = {}
        if lower is not None:
            bucket["from"] = lower
        if upper is not None:
            bucket["to"] = upper
        ranges.append(bucket)
    return {
        CATEGORIES_FACET: {"terms": {"field": "category", "size": terms_size}},
        BRANDS_FACET: {"terms": {"field": "brand", "size": terms_size}},
        PRICE_FACET: {"range": {"field": "price", "ranges": ranges}},
    }


def build_suggest(prefix: str, size: int, category: str | None = None) -> dict[str, Any]:
    completion: dict[str, Any] = {"field": SUGGEST_FIELD, "size": size}
    # A context-enabled completion field rejects queries without contexts
    completion["contexts"] = {SUGGEST_CONTEXT: [category] if category else ALL_CATEGORIES}
    return {SUGGESTION_NAME: {"prefix": prefix, "completion": completion}}
