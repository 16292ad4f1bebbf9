"""
Business logic for products and their ratings.

``ProductService`` implements the record lifecycle on top of a
``ProductStore``: create, read, list, update, delete, append a rating
and compute the average rating.  Each operation is a single
read-modify-write under one key; there are no cross-record invariants.

Records are never mutated in place.  ``apply_changes`` and
``append_rating`` build a new ``Product`` and the service writes it back
under the same id.  The id generator and the clock are injected so that
tests can make both deterministic.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from ..core.errors import (
    ProductNotFoundError,
    ProductValidationError,
    RatingOutOfRangeError,
)
from ..schemas.product import AverageRating, Product, ProductPayload, ProductUpdate
from .product_store import ProductStore

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def generate_id() -> str:
    """Return a random UUID4 string."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def validate_rating(rating: Any) -> int:
    """Return ``rating`` if it is an integer in [1, 5].

    Booleans and floats are rejected even when they compare equal to a
    valid integer.
    """
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise RatingOutOfRangeError(rating)
    if rating < MIN_RATING or rating > MAX_RATING:
        raise RatingOutOfRangeError(rating)
    return rating


def apply_changes(product: Product, changes: Dict[str, Any]) -> Product:
    """Return a copy of ``product`` with ``changes`` applied.

    Keys are Python field names (``url``, not ``URL``).
    """
    return product.model_copy(update=changes)


def append_rating(product: Product, rating: int) -> Product:
    return apply_changes(product, {"ratings": [*product.ratings, rating]})


def average_rating(ratings: List[int]) -> float:
    """Arithmetic mean rounded to two decimals, ``0`` for no ratings."""
    if not ratings:
        return 0
    return round(sum(ratings) / len(ratings), 2)


class ProductService:
    """Service for managing products and their ratings."""

    def __init__(
        self,
        store: ProductStore,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.id_factory = id_factory or generate_id
        self.clock = clock or utc_now

    def _require(self, product_id: str) -> Product:
        product = self.store.get(product_id)
        if product is None:
            logger.warning("Product %s not found", product_id)
            raise ProductNotFoundError(product_id)
        return product

    def list_products(self) -> List[Product]:
        """Return every stored product in key order."""
        return self.store.values()

    def get_product(self, product_id: str) -> Product:
        """Retrieve a single product by id.

        Raises ``ProductNotFoundError`` if the id is unknown.
        """
        return self._require(product_id)

    def add_product(self, payload: ProductPayload) -> Product:
        """Create a new product.

        ``name``, ``description`` and ``URL`` must all be non-empty;
        otherwise ``ProductValidationError`` lists the missing fields and
        nothing is stored.  The new product gets a fresh id, no ratings,
        ``created_at`` set to now and no ``updated_at``.
        """
        missing = [
            label
            for label, value in (
                ("name", payload.name),
                ("description", payload.description),
                ("URL", payload.url),
            )
            if not value
        ]
        if missing:
            logger.warning("Rejected product creation, missing fields: %s", ", ".join(missing))
            raise ProductValidationError(missing_fields=missing)

        product = Product(
            id=self.id_factory(),
            name=payload.name,
            description=payload.description,
            url=payload.url,
            ratings=[],
            created_at=self.clock(),
            updated_at=None,
        )
        self.store.insert(product.id, product)
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    def rate_product(self, product_id: str, rating: Any) -> Product:
        """Append ``rating`` to the product's ratings.

        The rating is validated before anything is written, so a
        ``RatingOutOfRangeError`` leaves the stored record untouched.
        """
        product = self._require(product_id)
        try:
            validate_rating(rating)
        except RatingOutOfRangeError:
            logger.warning("Rejected rating %r for product %s", rating, product_id)
            raise
        updated = append_rating(product, rating)
        self.store.insert(product_id, updated)
        logger.info("Product %s rated %s", product_id, rating)
        return updated

    def calculate_average_rating(self, product_id: str) -> float:
        """Return the product's average rating, ``0`` if it has none."""
        return average_rating(self._require(product_id).ratings)

    def rating_summary(self, product_id: str) -> AverageRating:
        """Return average and count computed from a single read of the product."""
        ratings = self._require(product_id).ratings
        return AverageRating(
            id=product_id,
            average_rating=average_rating(ratings),
            ratings_count=len(ratings),
        )

    def update_product(self, product_id: str, payload: ProductUpdate) -> Product:
        """Overlay the supplied payload fields and refresh ``updated_at``.

        Fields absent from the payload (or sent as ``null``) keep their
        stored value.  No presence validation is applied, so empty
        strings are written as given.
        """
        product = self._require(product_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        changes["updated_at"] = self.clock()
        updated = apply_changes(product, changes)
        self.store.insert(product_id, updated)
        logger.info("Updated product %s (%s)", product_id, ", ".join(sorted(changes)))
        return updated

    def delete_product(self, product_id: str) -> Product:
        """Remove the product and return the removed record."""
        removed = self.store.remove(product_id)
        if removed is None:
            logger.warning("Product %s not found", product_id)
            raise ProductNotFoundError(product_id)
        logger.info("Deleted product %s", product_id)
        return removed
