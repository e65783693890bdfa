"""
Product repository - product CRUD translated to index operations.
Writes wait for the index refresh so the next read or search sees them.
Engine failures surface as typed errors; full engine detail is only logged.
"""

import logging

from elasticsearch import ApiError, AsyncElasticsearch, TransportError

from product_search.core.exceptions import (
    ErrorKind,
    ProductNotFoundError,
    ValidationFailedError,
    kind_for_status,
    translate_engine_error,
)
from product_search.schemas.product import BulkIndexResult, Product
from product_search.search.documents import from_hit, to_document
from product_search.search.shaping import response_body

logger = logging.getLogger(__name__)

WAIT_FOR_REFRESH = "wait_for"


def _bulk_error_kind(status_code: int | None) -> ErrorKind:
    if status_code == 400:
        return ErrorKind.VALIDATION
    return kind_for_status(status_code)


class ProductRepository:
    """Product documents in one index. No version checks: last writer wins."""

    def __init__(self, es: AsyncElasticsearch, index: str, embedding_dimensions: int = 768):
        self.es = es
        self.index = index
        self.embedding_dimensions = embedding_dimensions

    def _check_embedding(self, product: Product) -> None:
        vector = product.embedding_vector
        if vector is not None and len(vector) != self.embedding_dimensions:
            raise ValidationFailedError(
                f"embeddingVector must have {self.embedding_dimensions} dimensions, got {len(vector)}"
            )

    async def index_product(self, product: Product) -> Product:
        """Create or fully replace a product under its own id."""
        self._check_embedding(product)
        document = to_document(product)
        try:
            await self.es.index(index=self.index, id=product.id, document=document, refresh=WAIT_FOR_REFRESH)
        except (ApiError, TransportError) as exc:
            logger.error("Failed to index product %s: %s", product.id, exc)
            raise translate_engine_error(exc, "Failed to index product") from exc
        return product

    async def index_products(self, products: list[Product]) -> list[BulkIndexResult]:
        """One bulk request; returns the outcome of every product in input order."""
        if not products:
            return []
        for product in products:
            self._check_embedding(product)
        operations: list[dict] = []
        for product in products:
            operations.append({"index": {"_index": self.index, "_id": product.id}})
            operations.append(to_document(product))
        try:
            response = await self.es.bulk(operations=operations, refresh=WAIT_FOR_REFRESH)
        except (ApiError, TransportError) as exc:
            logger.error("Bulk indexing of %d products failed: %s", len(products), exc)
            raise translate_engine_error(exc, "Failed to index products") from exc

        items = response_body(response).get("items", [])
        results: list[BulkIndexResult] = []
        for position, product in enumerate(products):
            outcome = items[position].get("index", {}) if position < len(items) else None
            if outcome is None:
                logger.error("Bulk response has no item for product %s", product.id)
                results.append(BulkIndexResult(id=product.id, indexed=False, error=ErrorKind.BACKEND_ERROR))
            elif outcome.get("error"):
                logger.error("Failed to index product %s: %s", product.id, outcome["error"])
                results.append(
                    BulkIndexResult(id=product.id, indexed=False, error=_bulk_error_kind(outcome.get("status")))
                )
            else:
                results.append(BulkIndexResult(id=product.id, indexed=True))
        indexed = sum(1 for r in results if r.indexed)
        logger.info("Indexed %d of %d products", indexed, len(products))
        return results

    async def get_product(self, product_id: str) -> Product | None:
        """Point lookup. None when the product (or the index) does not exist."""
        try:
            response = await self.es.options(ignore_status=404).get(index=self.index, id=product_id)
        except (ApiError, TransportError) as exc:
            logger.error("Failed to get product %s: %s", product_id, exc)
            raise translate_engine_error(exc, "Failed to get product") from exc
        body = response_body(response)
        if not body.get("found"):
            return None
        return from_hit(body)

    async def delete_product(self, product_id: str) -> None:
        """Raises ProductNotFoundError when there was nothing to delete."""
        try:
            response = await self.es.options(ignore_status=404).delete(index=self.index, id=product_id)
        except (ApiError, TransportError) as exc:
            logger.error("Failed to delete product %s: %s", product_id, exc)
            raise translate_engine_error(exc, "Failed to delete product") from exc
        if response_body(response).get("result") != "deleted":
            raise ProductNotFoundError(f"Product {product_id} not found")

    async def update_product(self, product: Product) -> Product:
        """Full replace; same as index_product."""
        return await self.index_product(product)
