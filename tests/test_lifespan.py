"""
Lifespan tests - client ownership and the index bootstrap gate at startup.
"""

import pytest
from elasticsearch import ConnectionError as ESConnectionError
from fastapi import FastAPI

from product_search import main
from product_search.config import Settings


@pytest.fixture
def startup(monkeypatch, fake_es):
    """Point the lifespan at the fake engine; returns a setter for the startup gate."""
    monkeypatch.setattr(main, "create_elasticsearch", lambda settings: fake_es)
    monkeypatch.setattr(main, "configure_logging", lambda level: None)

    def use(require_index: bool) -> None:
        settings = Settings(_env_file=None, require_index_on_startup=require_index)
        monkeypatch.setattr(main, "get_settings", lambda: settings)

    use(True)
    return use


@pytest.mark.asyncio
async def test_startup_creates_index_and_shutdown_closes_client(startup, fake_es):
    test_app = FastAPI()

    async with main.lifespan(test_app):
        assert test_app.state.elasticsearch is fake_es
        assert "products" in fake_es.indices.created
        assert fake_es.closed is False

    assert test_app.state.elasticsearch is None
    assert fake_es.closed is True


@pytest.mark.asyncio
async def test_startup_fails_when_index_required(startup, fake_es):
    fake_es.indices.error = ESConnectionError("connection refused")
    test_app = FastAPI()

    with pytest.raises(RuntimeError, match="products"):
        async with main.lifespan(test_app):
            pass

    assert fake_es.closed is True
    assert test_app.state.elasticsearch is None


@pytest.mark.asyncio
async def test_startup_continues_when_index_optional(startup, fake_es):
    startup(False)
    fake_es.indices.error = ESConnectionError("connection refused")
    test_app = FastAPI()

    async with main.lifespan(test_app):
        assert test_app.state.elasticsearch is fake_es

    assert fake_es.closed is True
