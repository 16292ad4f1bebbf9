"""Product Rating API client.

A thin wrapper around the REST API served by ``product_rating_api.app``.
It uses the ``requests`` library internally and exposes one method per
operation:

* :meth:`list_products` – return every product.
* :meth:`get_product` – fetch a single product by id.
* :meth:`add_product` – create a product.
* :meth:`rate_product` – append a rating from 1 to 5.
* :meth:`calculate_average_rating` – fetch the average rating.
* :meth:`update_product` – overlay new field values.
* :meth:`delete_product` – remove a product.

No method raises for HTTP or network failures.  Each returns a tuple
``(data, error)``: on success ``error`` is ``None``; on failure ``data``
is ``None`` (or an empty list) and ``error`` is a dictionary with keys
``status_code`` and ``message``.  An optional API key is sent as a
bearer token for deployments behind an authenticating gateway; the
service itself does not check it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]

DEFAULT_TIMEOUT = 15
API_PREFIX = "/api/v1/products"


class ProductRatingClient:
    """Client for interacting with the Product Rating API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            api_key: Optional API key.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` is included in
                all requests.  The Product Rating API ignores it; only a
                gateway in front of the service would enforce it.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for the server before giving up.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url`.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": str(message)}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Product operations
    # ------------------------------------------------------------------
    def list_products(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all products.

        Returns:
            A tuple ``(products, error)``.  ``products`` is empty on
            failure.
        """
        data, error = self._request("GET", f"{API_PREFIX}/")
        if error:
            return [], error
        return data or [], None

    def get_product(self, product_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single product by id."""
        return self._request("GET", f"{API_PREFIX}/{product_id}")

    def add_product(
        self, name: str, description: str, url: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a product and return it as stored by the server."""
        payload = {"name": name, "description": description, "URL": url}
        return self._request("POST", f"{API_PREFIX}/", json_body=payload)

    def rate_product(
        self, product_id: str, rating: int
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Append ``rating`` to the product's ratings."""
        return self._request(
            "POST", f"{API_PREFIX}/{product_id}/ratings", json_body={"rating": rating}
        )

    def calculate_average_rating(self, product_id: str) -> Tuple[Optional[float], Optional[Error]]:
        """Return the product's average rating (``0`` when unrated)."""
        data, error = self._request("GET", f"{API_PREFIX}/{product_id}/rating")
        if error:
            return None, error
        return data.get("average_rating") if isinstance(data, dict) else None, None

    def update_product(
        self, product_id: str, **fields: Any
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update a product.

        Keyword arguments are the fields to change: ``name``,
        ``description`` and ``url`` (sent as ``URL``).
        """
        payload = {("URL" if key == "url" else key): value for key, value in fields.items()}
        return self._request("PUT", f"{API_PREFIX}/{product_id}", json_body=payload)

    def delete_product(self, product_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Delete a product and return the removed record."""
        return self._request("DELETE", f"{API_PREFIX}/{product_id}")
