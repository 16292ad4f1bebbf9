"""
API dependencies.

The ``ProductService`` is built once in ``create_app`` and kept on
``app.state``; route handlers receive it through ``get_product_service``
rather than importing a global.
"""

from fastapi import Request

from ..services.product_service import ProductService


def get_product_service(request: Request) -> ProductService:
    """Return the service attached to the running application."""
    return request.app.state.product_service
