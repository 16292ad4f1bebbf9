"""
Product endpoints for API v1.

These routes expose the product lifecycle (list, get, create, update,
delete) and the rating operations (rate, average).  Domain errors
raised by ``ProductService`` are translated to HTTP errors here: an
unknown id becomes 404 and a validation failure (missing fields or an
out-of-range rating) becomes 400.  The error message is returned as the
``detail`` of the response.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from product_rating_api.app.api.dependencies import get_product_service
from product_rating_api.app.core.errors import (
    ProductNotFoundError,
    ProductValidationError,
)
from product_rating_api.app.schemas.product import (
    AverageRating,
    Product,
    ProductPayload,
    ProductUpdate,
    RatingCreate,
)
from product_rating_api.app.services.product_service import ProductService


router = APIRouter()


@router.get("/", response_model=List[Product], summary="List products")
def list_products(
    service: ProductService = Depends(get_product_service),
) -> List[Product]:
    """Return all products ordered by id.  Empty list when none exist."""
    return service.list_products()


@router.get("/{product_id}", response_model=Product, summary="Get a product")
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Product:
    try:
        return service.get_product(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post(
    "/",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
def add_product(
    payload: ProductPayload,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Create a new product.

    ``name``, ``description`` and ``URL`` are required and must be
    non-empty; otherwise 400 is returned and nothing is stored.
    """
    try:
        return service.add_product(payload)
    except ProductValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get(
    "/{product_id}/rating",
    response_model=AverageRating,
    summary="Average rating of a product",
)
def calculate_average_rating(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> AverageRating:
    """Return the mean rating rounded to two decimals (``0`` if unrated)."""
    try:
        return service.rating_summary(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post(
    "/{product_id}/ratings",
    response_model=Product,
    summary="Rate a product",
)
def rate_product(
    product_id: str,
    data: RatingCreate,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Append a rating from 1 to 5 and return the updated product."""
    try:
        return service.rate_product(product_id, data.rating)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ProductValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.put("/{product_id}", response_model=Product, summary="Update a product")
def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Update an existing product.

    Partial updates are supported; unspecified fields remain
    unchanged.  ``updated_at`` is set on every call.
    """
    try:
        return service.update_product(product_id, payload)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{product_id}", response_model=Product, summary="Delete a product")
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Delete a product and return the removed record."""
    try:
        return service.delete_product(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
