"""
Product <-> index document mapping.
The completion payload is derived here, right before a document is written.
"""

from typing import Any

from product_search.schemas.product import Product, SuggestPayload
from product_search.search.index import NO_CATEGORY_CONTEXT, SUGGEST_CONTEXT


def build_suggestion(product: Product) -> SuggestPayload:
    """Weighted terms are the non-blank title, brand and category; context is the category."""
    terms = [value for value in (product.title, product.brand, product.category) if value and value.strip()]
    category = product.category if product.category and product.category.strip() else NO_CATEGORY_CONTEXT
    return SuggestPayload(input=terms, contexts={SUGGEST_CONTEXT: [category]})


def to_document(product: Product) -> dict[str, Any]:
    """Recompute the suggestion on the product and serialize it for the index."""
    product.suggest = build_suggestion(product)
    return product.model_dump(mode="json", by_alias=True, exclude_none=True)


def from_document(source: dict[str, Any]) -> Product:
    return Product.model_validate(source)


def from_hit(hit: dict[str, Any]) -> Product:
    """Build a product from a get/search hit; the hit ``_id`` fills a missing ``id``."""
    source = dict(hit.get("_source") or {})
    source.setdefault("id", hit.get("_id"))
    return from_document(source)
