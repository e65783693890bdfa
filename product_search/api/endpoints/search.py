"""
Search endpoints - full-text search with filters/facets, and autocomplete suggestions.
Each operation accepts a JSON body (POST) or a query string (GET).
"""

from decimal import Decimal

from fastapi import APIRouter, Query

from product_search.core.dependencies import Search
from product_search.schemas.search import (
    SearchRequest,
    SearchResponse,
    SortOption,
    SuggestionRequest,
    SuggestionResponse,
)

router = APIRouter()


def _split_csv(value: str | None) -> list[str] | None:
    """'a,b' -> ['a', 'b']; blank parts are dropped."""
    if value is None:
        return None
    parts = [part.strip() for part in value.split(",") if part.strip()]
    return parts or None


@router.post("", response_model=SearchResponse)
async def search_products(request: SearchRequest, search: Search):
    return await search.search_products(request)


@router.get("", response_model=SearchResponse)
async def search_products_get(
    search: Search,
    q: str = Query("", description="Free-text query; empty matches everything"),
    categories: str | None = Query(None, description="Comma-separated categories"),
    brands: str | None = Query(None, description="Comma-separated brands"),
    min_price: Decimal | None = Query(None, alias="minPrice"),
    max_price: Decimal | None = Query(None, alias="maxPrice"),
    sort_by: str = Query(SortOption.RELEVANCE.value, alias="sortBy"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, gt=0, alias="pageSize"),
    include_facets: bool = Query(True, alias="includeFacets"),
):
    request = SearchRequest(
        query=q,
        categories=_split_csv(categories),
        brands=_split_csv(brands),
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        page=page,
        page_size=page_size,
        include_facets=include_facets,
    )
    return await search.search_products(request)


@router.post("/suggestions", response_model=SuggestionResponse)
async def get_suggestions(request: SuggestionRequest, search: Search):
    return await search.get_suggestions(request)


@router.get("/suggestions", response_model=SuggestionResponse)
async def get_suggestions_get(
    search: Search,
    prefix: str = Query(..., description="Text typed so far"),
    size: int = Query(10, gt=0),
    category: str | None = Query(None, description="Only suggest within this category"),
):
    return await search.get_suggestions(SuggestionRequest(prefix=prefix, size=size, category=category))
