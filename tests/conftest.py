"""Shared fixtures for the Product Rating API tests."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from product_rating_api.app.core.config import Settings
from product_rating_api.app.main import create_app
from product_rating_api.app.services.product_service import ProductService
from product_rating_api.app.services.product_store import InMemoryProductStore


class FakeClock:
    """Clock that advances one second on every call."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


class SequentialIds:
    """Deterministic id factory: ``product-0001``, ``product-0002``, ..."""

    def __init__(self) -> None:
        self.issued = 0

    def __call__(self) -> str:
        self.issued += 1
        return f"product-{self.issued:04d}"


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def id_factory():
    return SequentialIds()


@pytest.fixture
def store():
    return InMemoryProductStore()


@pytest.fixture
def service(store, id_factory, clock):
    return ProductService(store, id_factory=id_factory, clock=clock)


@pytest.fixture
def api(store, id_factory, clock):
    """TestClient for an app wired to the in-memory store."""
    app = create_app(
        settings=Settings(store_backend="memory"),
        store=store,
        id_factory=id_factory,
        clock=clock,
    )
    with TestClient(app) as client:
        yield client
