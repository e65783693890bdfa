"""
FastAPI dependencies - the shared engine client and the components built on it.
Components receive the client explicitly; tests swap it via dependency_overrides.
"""

from typing import Annotated

from elasticsearch import AsyncElasticsearch
from fastapi import Depends, Request

from product_search.config import Settings, get_settings
from product_search.core.exceptions import BackendUnavailableError
from product_search.repositories.product_repository import ProductRepository
from product_search.services.search_service import SearchService


def get_elasticsearch(request: Request) -> AsyncElasticsearch:
    """Client created by the app lifespan."""
    es = getattr(request.app.state, "elasticsearch", None)
    if es is None:
        raise BackendUnavailableError("Search engine is not available")
    return es


AppSettings = Annotated[Settings, Depends(get_settings)]
SearchClient = Annotated[AsyncElasticsearch, Depends(get_elasticsearch)]


def get_product_repository(es: SearchClient, settings: AppSettings) -> ProductRepository:
    return ProductRepository(es, settings.products_index, settings.embedding_dimensions)


def get_search_service(es: SearchClient, settings: AppSettings) -> SearchService:
    return SearchService(es, settings.products_index, settings.facet_terms_size)


Products = Annotated[ProductRepository, Depends(get_product_repository)]
Search = Annotated[SearchService, Depends(get_search_service)]
