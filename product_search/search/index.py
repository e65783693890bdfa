"""
Products index bootstrap - create the index with its mapping if it does not exist.
Safe to call on every startup.
"""

import logging
from typing import Any

from elasticsearch import ApiError, AsyncElasticsearch, BadRequestError, TransportError

logger = logging.getLogger(__name__)

ANALYZER = "standard_analyzer"
SUGGEST_CONTEXT = "category"
# Context value for products without a category; the engine rejects empty context values
NO_CATEGORY_CONTEXT = "_none"


def products_index_settings() -> dict[str, Any]:
    """Single node friendly: one shard, no replicas."""
    return {
        "number_of_shards": 1,
        "number_of_replicas": 0,
        "analysis": {
            "analyzer": {
                ANALYZER: {"type": "standard", "stopwords": "_english_"},
            }
        },
    }


def products_index_mappings(embedding_dimensions: int) -> dict[str, Any]:
    return {
        "properties": {
            "id": {"type": "keyword"},
            "title": {
                "type": "text",
                "analyzer": ANALYZER,
                "fields": {"keyword": {"type": "keyword"}},
            },
            "description": {"type": "text", "analyzer": ANALYZER},
            "category": {"type": "keyword"},
            "brand": {"type": "keyword"},
            "sku": {"type": "keyword"},
            "tags": {"type": "keyword"},
            "price": {"type": "double"},
            "attributes": {"type": "object"},
            "createdAt": {"type": "date"},
            "suggest": {
                "type": "completion",
                "contexts": [{"name": SUGGEST_CONTEXT, "type": "category"}],
            },
            # Reserved for vector search; nothing queries it yet
            "embeddingVector": {"type": "dense_vector", "dims": embedding_dimensions},
        }
    }


def _error_type(exc: ApiError) -> str:
    """Engine error type from the response body, falling back to the exception message."""
    error = exc.body.get("error") if isinstance(exc.body, dict) else None
    if isinstance(error, dict):
        return error.get("type", "")
    return exc.message


async def index_exists(es: AsyncElasticsearch, index: str) -> bool:
    """Readiness check: False when the index is missing or the cluster is unreachable."""
    try:
        return bool(await es.indices.exists(index=index))
    except (ApiError, TransportError) as exc:
        logger.warning("index_exists failed for %s: %s", index, exc)
        return False


async def ensure_products_index(es: AsyncElasticsearch, index: str, embedding_dimensions: int) -> bool:
    """Create the products index if missing. Returns False (and logs) when it cannot be ensured."""
    try:
        if await es.indices.exists(index=index):
            return True
        logger.info("Creating products index %s", index)
        await es.indices.create(
            index=index,
            settings=products_index_settings(),
            mappings=products_index_mappings(embedding_dimensions),
        )
    except BadRequestError as exc:
        # Another worker created it between the exists check and the create
        if _error_type(exc) == "resource_already_exists_exception":
            logger.info("Index %s already exists", index)
            return True
        logger.error("Failed to create index %s: %s", index, exc)
        return False
    except (ApiError, TransportError) as exc:
        logger.error("Failed to create index %s: %s", index, exc)
        return False
    logger.info("Products index %s created", index)
    return True
