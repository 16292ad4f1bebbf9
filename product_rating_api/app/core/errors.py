"""
Error types raised by the product service.

All of them derive from ``ValueError`` so callers that only care about
"the request was wrong" can catch that, while the API layer picks the
HTTP status from the concrete class.
"""

from typing import Iterable, Optional


class ProductError(ValueError):
    """Base class for product domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProductNotFoundError(ProductError):
    """Raised when an operation references an id absent from the store."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with id={product_id} not found")
        self.product_id = product_id


class ProductValidationError(ProductError):
    """Raised when required product fields are missing or empty."""

    def __init__(self, message: Optional[str] = None, missing_fields: Iterable[str] = ()) -> None:
        self.missing_fields = list(missing_fields)
        if message is None:
            message = "Missing required fields"
            if self.missing_fields:
                message += ": " + ", ".join(self.missing_fields)
        super().__init__(message)


class RatingOutOfRangeError(ProductValidationError):
    """Raised when a rating is not an integer between 1 and 5."""

    def __init__(self, rating: object) -> None:
        super().__init__("Rating should be an integer between 1 and 5.")
        self.rating = rating
