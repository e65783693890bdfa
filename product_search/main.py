"""
FastAPI application entry point.
Mounts routes, CORS and Prometheus metrics; the lifespan owns the search engine client
and bootstraps the products index.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from product_search import __version__
from product_search.api.router import api_router
from product_search.config import get_settings
from product_search.core.exceptions import register_exception_handlers
from product_search.core.logging import configure_logging
from product_search.search.elasticsearch_client import create_elasticsearch
from product_search.search.index import ensure_products_index

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create the ES client and ensure the index. Shutdown: close the client."""
    settings = get_settings()
    configure_logging(settings.log_level)
    es = create_elasticsearch(settings)
    app.state.elasticsearch = es
    try:
        ready = await ensure_products_index(es, settings.products_index, settings.embedding_dimensions)
        if not ready:
            if settings.require_index_on_startup:
                raise RuntimeError(f"Products index {settings.products_index!r} is not available")
            logger.warning("Starting without products index %s; search calls will fail", settings.products_index)
        yield
    finally:
        app.state.elasticsearch = None
        await es.close()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Product CRUD, faceted search and autocomplete over Elasticsearch.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router, prefix="/api")
    register_exception_handlers(app)
    return app


app = create_app()
