"""
Search service - runs translated queries against the products index and shapes the results.
Keeps controllers thin; engine failures are raised as typed errors.
"""

import logging
from time import perf_counter

from elasticsearch import ApiError, AsyncElasticsearch, TransportError
from prometheus_client import Histogram

from product_search.core.exceptions import translate_engine_error
from product_search.schemas.search import SearchRequest, SearchResponse, SuggestionRequest, SuggestionResponse
from product_search.search.queries import (
    build_aggregations,
    build_pagination,
    build_query,
    build_sort,
    build_suggest,
)
from product_search.search.shaping import extract_suggestions, shape_search_response

logger = logging.getLogger(__name__)

ENGINE_LATENCY = Histogram(
    "product_search_engine_seconds",
    "Latency of search engine calls",
    ["operation"],
)


class SearchService:
    """Product search and autocomplete over one index."""

    def __init__(self, es: AsyncElasticsearch, index: str, facet_terms_size: int = 50):
        self.es = es
        self.index = index
        self.facet_terms_size = facet_terms_size

    async def search_products(self, request: SearchRequest) -> SearchResponse:
        params = {
            "index": self.index,
            "query": build_query(request),
            "sort": build_sort(request.sort_by),
            "track_total_hits": True,
            **build_pagination(request.page, request.page_size),
        }
        aggs = build_aggregations(request.include_facets, self.facet_terms_size)
        if aggs:
            params["aggs"] = aggs

        start = perf_counter()
        try:
            response = await self.es.search(**params)
        except (ApiError, TransportError) as exc:
            logger.error("Search failed: query=%r error=%s", request.query, exc)
            raise translate_engine_error(exc, "Search failed") from exc
        elapsed = perf_counter() - start
        ENGINE_LATENCY.labels(operation="search").observe(elapsed)

        result = shape_search_response(response, request, elapsed * 1000)
        logger.info(
            "search: q=%r page=%d size=%d total=%d took=%.2fms",
            request.query,
            request.page,
            request.page_size,
            result.total_count,
            elapsed * 1000,
        )
        return result

    async def get_suggestions(self, request: SuggestionRequest) -> SuggestionResponse:
        start = perf_counter()
        try:
            # Suggestion-only call: no ranked documents
            response = await self.es.search(
                index=self.index,
                size=0,
                suggest=build_suggest(request.prefix, request.size, request.category),
            )
        except (ApiError, TransportError) as exc:
            logger.error("Suggestion failed: prefix=%r error=%s", request.prefix, exc)
            raise translate_engine_error(exc, "Suggestion failed") from exc
        ENGINE_LATENCY.labels(operation="suggest").observe(perf_counter() - start)
        return SuggestionResponse(suggestions=extract_suggestions(response))
