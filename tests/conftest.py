from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from feast_recipes.app.core.config import get_settings
from feast_recipes.app.main import create_app

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def fixture_html():
    return load_fixture


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def settings():
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def mock_http(monkeypatch):
    """Route every ``httpx.AsyncClient`` through a handler; returns the recorded client kwargs."""
    real_client = httpx.AsyncClient
    calls = []

    def install(handler):
        transport = httpx.MockTransport(handler)

        def client_factory(*args, **kwargs):
            calls.append(kwargs)
            return real_client(*args, transport=transport, **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", client_factory)
        return calls

    return install
