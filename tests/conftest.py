"""
Pytest fixtures - in-memory search engine fake and an HTTP client wired to it.
No Elasticsearch cluster is needed; the fake records every call it receives.
"""

import copy
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from product_search.core.dependencies import get_elasticsearch
from product_search.main import app


class FakeIndices:
    def __init__(self):
        self.existing: set[str] = set()
        self.created: dict[str, dict[str, Any]] = {}
        self.error: Exception | None = None
        # Raised by create only, after a successful exists check
        self.create_error: Exception | None = None

    async def exists(self, index: str) -> bool:
        if self.error is not None:
            raise self.error
        return index in self.existing

    async def create(self, index: str, settings: dict | None = None, mappings: dict | None = None):
        if self.error is not None:
            raise self.error
        if self.create_error is not None:
            raise self.create_error
        self.created[index] = {"settings": settings, "mappings": mappings}
        self.existing.add(index)
        return {"acknowledged": True, "index": index}


class FakeElasticsearch:
    """Stands in for AsyncElasticsearch: documents by id, canned search responses."""

    def __init__(self):
        self.indices = FakeIndices()
        self.documents: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.search_response: dict[str, Any] = {"hits": {"total": {"value": 0}, "hits": []}}
        self.suggest_response: dict[str, Any] = {"suggest": {"product_suggest": []}}
        # id -> {"status": ..., "error": ...} for bulk items that should fail
        self.bulk_failures: dict[str, dict[str, Any]] = {}
        self.error: Exception | None = None
        self.closed = False

    def options(self, **kwargs):
        return self

    def _record(self, name: str, **kwargs) -> None:
        self.calls.append((name, kwargs))
        if self.error is not None:
            raise self.error

    def last_call(self, name: str) -> dict[str, Any]:
        return [kwargs for call, kwargs in self.calls if call == name][-1]

    async def index(self, index: str, id: str, document: dict, refresh: str | None = None):
        self._record("index", index=index, id=id, document=document, refresh=refresh)
        self.documents[id] = copy.deepcopy(document)
        return {"_index": index, "_id": id, "result": "created"}

    async def bulk(self, operations: list[dict], refresh: str | None = None):
        self._record("bulk", operations=operations, refresh=refresh)
        items = []
        for action, document in zip(operations[::2], operations[1::2]):
            doc_id = action["index"]["_id"]
            if doc_id in self.bulk_failures:
                items.append({"index": {"_id": doc_id, **self.bulk_failures[doc_id]}})
                continue
            self.documents[doc_id] = copy.deepcopy(document)
            items.append({"index": {"_id": doc_id, "status": 201, "result": "created"}})
        return {"errors": any("error" in item["index"] for item in items), "items": items}

    async def get(self, index: str, id: str):
        self._record("get", index=index, id=id)
        if id not in self.documents:
            return {"_index": index, "_id": id, "found": False}
        return {"_index": index, "_id": id, "found": True, "_source": copy.deepcopy(self.documents[id])}

    async def delete(self, index: str, id: str):
        self._record("delete", index=index, id=id)
        if self.documents.pop(id, None) is None:
            return {"_index": index, "_id": id, "result": "not_found"}
        return {"_index": index, "_id": id, "result": "deleted"}

    async def search(self, **kwargs):
        self._record("search", **kwargs)
        if "suggest" in kwargs:
            return self.suggest_response
        return self.search_response

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest_asyncio.fixture
async def client(fake_es: FakeElasticsearch):
    app.dependency_overrides[get_elasticsearch] = lambda: fake_es
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def widget() -> dict[str, Any]:
    return {
        "title": "Blue Widget",
        "description": "A sturdy blue widget for everyday jobs",
        "category": "Hardware",
        "brand": "Acme",
        "sku": "ACM-001",
        "price": 19.99,
        "attributes": {"color": "blue"},
        "tags": ["sale", "new"],
    }
