"""Tests for the HTTP API.

These tests drive the FastAPI application through ``TestClient`` with
the in-memory store, covering status codes, JSON shapes and the
mapping of domain errors to HTTP errors.
"""

import os
import subprocess
import sys

import pytest
from fastapi.testclient import TestClient

from product_rating_api.app.core.config import Settings
from product_rating_api.app.main import build_store, create_app
from product_rating_api.app.services.product_store import (
    InMemoryProductStore,
    SqliteProductStore,
)

BASE = "/api/v1/products"

PAYLOAD = {
    "name": "Trail shoes",
    "description": "Lightweight running shoes",
    "URL": "https://example.com/shoes",
}


def create_product(api, **overrides):
    body = dict(PAYLOAD, **overrides)
    response = api.post(f"{BASE}/", json=body)
    assert response.status_code == 201
    return response.json()


class TestProductEndpoints:
    """CRUD endpoints."""

    def test_health(self, api):
        response = api.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_list_products_empty(self, api):
        response = api.get(f"{BASE}/")

        assert response.status_code == 200
        assert response.json() == []

    def test_create_product(self, api):
        product = create_product(api)

        assert product["id"] == "product-0001"
        assert product["name"] == "Trail shoes"
        assert product["URL"] == "https://example.com/shoes"
        assert product["ratings"] == []
        assert product["updated_at"] is None
        assert product["created_at"].startswith("2024-01-01T12:00:00")

    def test_created_product_is_retrievable(self, api):
        product = create_product(api)

        response = api.get(f"{BASE}/{product['id']}")

        assert response.status_code == 200
        assert response.json() == product

    @pytest.mark.parametrize("field", ["name", "description", "URL"])
    def test_create_product_missing_field(self, api, field):
        body = dict(PAYLOAD)
        del body[field]

        response = api.post(f"{BASE}/", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == f"Missing required fields: {field}"
        assert api.get(f"{BASE}/").json() == []

    def test_create_product_empty_field(self, api):
        response = api.post(f"{BASE}/", json=dict(PAYLOAD, name=""))

        assert response.status_code == 400

    def test_get_unknown_product(self, api):
        response = api.get(f"{BASE}/unknown")

        assert response.status_code == 404
        assert response.json()["detail"] == "Product with id=unknown not found"

    def test_update_product(self, api):
        product = create_product(api)

        response = api.put(
            f"{BASE}/{product['id']}",
            json={"name": "Road shoes", "URL": "https://example.com/road"},
        )
        fetched = api.get(f"{BASE}/{product['id']}").json()

        assert response.status_code == 200
        assert fetched == response.json()
        assert fetched["name"] == "Road shoes"
        assert fetched["URL"] == "https://example.com/road"
        assert fetched["description"] == PAYLOAD["description"]
        assert fetched["updated_at"] is not None
        assert fetched["updated_at"] >= fetched["created_at"]

    def test_update_unknown_product(self, api):
        response = api.put(f"{BASE}/unknown", json=PAYLOAD)

        assert response.status_code == 404

    def test_delete_product(self, api):
        product = create_product(api)

        response = api.delete(f"{BASE}/{product['id']}")

        assert response.status_code == 200
        assert response.json() == product
        assert api.get(f"{BASE}/{product['id']}").status_code == 404
        assert api.delete(f"{BASE}/{product['id']}").status_code == 404

    def test_list_reflects_adds_and_deletes(self, api):
        ids = [create_product(api, name=f"Shoe {i}")["id"] for i in range(3)]
        api.delete(f"{BASE}/{ids[0]}")

        listed = api.get(f"{BASE}/").json()

        assert [p["id"] for p in listed] == ids[1:]


    def test_authorization_header_is_ignored(self, api):
        """The service accepts requests with or without a bearer token."""
        response = api.get(f"{BASE}/", headers={"Authorization": "Bearer anything"})

        assert response.status_code == 200


class TestRatingEndpoints:
    """Rating and average endpoints."""

    def test_rate_product(self, api):
        product = create_product(api)

        response = api.post(f"{BASE}/{product['id']}/ratings", json={"rating": 3})

        assert response.status_code == 200
        assert response.json()["ratings"] == [3]

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rate_product_out_of_range(self, api, rating):
        product = create_product(api)

        response = api.post(f"{BASE}/{product['id']}/ratings", json={"rating": rating})

        assert response.status_code == 400
        assert response.json()["detail"] == "Rating should be an integer between 1 and 5."
        assert api.get(f"{BASE}/{product['id']}").json()["ratings"] == []

    @pytest.mark.parametrize("rating", [True, 3.0, "3", 2.5, None])
    def test_rate_product_rejects_non_integer_body(self, api, rating):
        """Booleans, floats and numeric strings are not coerced into ratings."""
        product = create_product(api)

        response = api.post(f"{BASE}/{product['id']}/ratings", json={"rating": rating})

        assert response.status_code == 422
        assert api.get(f"{BASE}/{product['id']}").json()["ratings"] == []

    def test_rate_unknown_product(self, api):
        response = api.post(f"{BASE}/unknown/ratings", json={"rating": 3})

        assert response.status_code == 404

    def test_average_rating_unrated(self, api):
        product = create_product(api)

        response = api.get(f"{BASE}/{product['id']}/rating")

        assert response.status_code == 200
        assert response.json() == {
            "id": product["id"],
            "average_rating": 0,
            "ratings_count": 0,
        }

    def test_average_rating(self, api):
        product = create_product(api)
        for rating in (1, 2, 2):
            api.post(f"{BASE}/{product['id']}/ratings", json={"rating": rating})

        body = api.get(f"{BASE}/{product['id']}/rating").json()

        assert body["average_rating"] == 1.67
        assert body["ratings_count"] == 3

    def test_average_rating_unknown_product(self, api):
        response = api.get(f"{BASE}/unknown/rating")

        assert response.status_code == 404


class TestAppFactory:
    """Store selection in create_app."""

    def test_build_store_memory(self):
        assert isinstance(build_store(Settings(store_backend="memory")), InMemoryProductStore)

    def test_build_store_sqlite(self, tmp_path):
        settings = Settings(store_backend="sqlite", database_url=str(tmp_path / "app.db"))

        assert isinstance(build_store(settings), SqliteProductStore)
        assert (tmp_path / "app.db").exists()

    def test_build_store_unknown_backend(self):
        with pytest.raises(ValueError):
            build_store(Settings(store_backend="redis"))

    def test_app_uses_settings(self):
        app = create_app(settings=Settings(project_name="Catalog", store_backend="memory"))

        assert app.title == "Catalog"

    def test_sqlite_store_created_on_startup(self, tmp_path):
        db_file = tmp_path / "startup.db"
        app = create_app(settings=Settings(store_backend="sqlite", database_url=str(db_file)))

        assert not db_file.exists()
        assert app.state.product_service is None

        with TestClient(app) as client:
            response = client.post(f"{BASE}/", json=PAYLOAD)

            assert response.status_code == 201
            assert isinstance(app.state.product_service.store, SqliteProductStore)
        assert db_file.exists()

    def test_importing_package_creates_no_database(self, tmp_path):
        """Importing the application modules must not touch the filesystem."""
        db_file = tmp_path / "import.db"
        env = dict(os.environ, DATABASE_URL=str(db_file))
        env.pop("STORE_BACKEND", None)
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [project_root, env.get("PYTHONPATH")]))

        result = subprocess.run(
            [sys.executable, "-c", "import product_rating_api.app.main"],
            cwd=str(tmp_path),
            env=env,
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr
        assert not db_file.exists()
