"""
Pydantic models for product data.

``Product`` is the stored record and the API response body.  It is
frozen: every mutation builds a new instance (see
``services.product_service.apply_changes``) and writes it back under
the same id.  ``ProductPayload`` is the body for creating a product,
``ProductUpdate`` the body for updating one.  The link field is named
``URL`` on the wire and ``url`` in Python.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt


class Product(BaseModel):
    """A product together with its rating history."""

    id: str = Field(..., examples=["1b4e28ba-2fa1-11d2-883f-0016d3cca427"])
    name: str = Field(..., examples=["Mechanical keyboard"])
    description: str = Field(..., examples=["Tenkeyless, brown switches"])
    url: str = Field(..., alias="URL", examples=["https://example.com/keyboard"])
    ratings: List[int] = Field(default_factory=list, examples=[[4, 5]])
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class ProductPayload(BaseModel):
    """Schema for creating a product.

    Fields are optional at the schema level so that a missing or empty
    field reaches the service, which reports every missing field in one
    error instead of failing on the first.
    """

    name: Optional[str] = Field(None, examples=["Mechanical keyboard"])
    description: Optional[str] = Field(None, examples=["Tenkeyless, brown switches"])
    url: Optional[str] = Field(None, alias="URL", examples=["https://example.com/keyboard"])

    model_config = {
        "populate_by_name": True,
    }


class ProductUpdate(BaseModel):
    """Schema for updating a product.

    Only fields present in the request are overlaid onto the stored
    record.  Empty strings are accepted as-is.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = Field(None, alias="URL")

    model_config = {
        "populate_by_name": True,
    }


class RatingCreate(BaseModel):
    """Schema for rating a product.

    ``rating`` is strict: JSON ``true``, ``3.0`` or ``"3"`` are rejected
    instead of being coerced to an integer.
    """

    rating: StrictInt = Field(..., examples=[4], description="Rating from 1 to 5")


class AverageRating(BaseModel):
    """Average of a product's ratings; ``0`` when it has none."""

    id: str
    average_rating: float
    ratings_count: int
