"""
Top‑level package for the Product Rating API.

The package holds the FastAPI application under ``app`` and a small
HTTP client in ``client``.  Importing the package itself has no side
effects; the ASGI application lives at ``product_rating_api.app.main``.
"""

__all__ = []
