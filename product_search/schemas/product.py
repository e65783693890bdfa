"""Product request/response schemas - the document stored in the products index."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from pydantic import Field, field_validator

from product_search.core.exceptions import ErrorKind
from product_search.schemas.base import CamelModel, Money


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SuggestPayload(CamelModel):
    """Completion field body: weighted input terms plus the category context."""

    input: list[str] = Field(default_factory=list)
    contexts: dict[str, list[str]] = Field(default_factory=dict)


class Product(CamelModel):
    id: str = Field(default_factory=_new_id)
    title: str = ""
    description: str = ""
    category: str = ""
    brand: str = ""
    sku: str = ""
    price: Money = Decimal("0")
    attributes: dict[str, str] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    embedding_vector: list[float] | None = None
    # Derived from title/brand/category on every write; caller input is discarded
    suggest: SuggestPayload = Field(default_factory=SuggestPayload)

    @field_validator("id", mode="before")
    @classmethod
    def _generate_blank_id(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return _new_id()
        return value


class BulkIndexResult(CamelModel):
    """Outcome of one document in a bulk write."""

    id: str
    indexed: bool
    error: ErrorKind | None = None


class BulkIndexResponse(CamelModel):
    message: str
    items: list[BulkIndexResult]
