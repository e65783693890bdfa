"""Search and suggestion request/response schemas - the public search contract."""

from enum import Enum

from pydantic import Field, field_validator

from product_search.schemas.base import CamelModel, Money
from product_search.schemas.product import Product


class SortOption(str, Enum):
    RELEVANCE = "relevance"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    TITLE = "title"


class SearchRequest(CamelModel):
    query: str = ""
    categories: list[str] | None = None
    brands: list[str] | None = None
    min_price: Money | None = None
    max_price: Money | None = None
    # Free-form; unknown values sort by relevance
    sort_by: str = SortOption.RELEVANCE.value
    page: int = Field(1, ge=1)
    page_size: int = Field(20, gt=0)
    include_facets: bool = True

    @field_validator("query", mode="before")
    @classmethod
    def _none_query_is_blank(cls, value):
        return "" if value is None else value


class FacetItem(CamelModel):
    value: str
    count: int


class SearchResponse(CamelModel):
    products: list[Product] = Field(default_factory=list)
    total_count: int = 0
    page: int = 0
    page_size: int = 0
    facets: dict[str, list[FacetItem]] = Field(default_factory=dict)
    execution_time_ms: int = 0


class SuggestionRequest(CamelModel):
    prefix: str = ""
    size: int = Field(10, gt=0)
    # Restrict completions to one category context
    category: str | None = None


class SuggestionResponse(CamelModel):
    suggestions: list[str] = Field(default_factory=list)
