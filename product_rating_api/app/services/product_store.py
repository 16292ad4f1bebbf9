"""
Key-value storage for products.

A ``ProductStore`` is an ordered map from product id to ``Product``.
Its contract is deliberately small: point lookup, full enumeration in
key order, upsert and removal.  ``insert`` never fails on an existing
key; it overwrites and hands back the previous record, so callers are
responsible for generating fresh ids.

Two implementations are provided.  ``SqliteProductStore`` persists
records as JSON documents in the ``products`` table and survives
process restarts.  ``InMemoryProductStore`` keeps them in a dict and is
used by the test suite and by ``STORE_BACKEND=memory``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..core.db import get_cursor, init_db
from ..schemas.product import Product

logger = logging.getLogger(__name__)


class ProductStore(ABC):
    """Ordered map from product id to product record."""

    @abstractmethod
    def get(self, product_id: str) -> Optional[Product]:
        """Return the product stored under ``product_id`` or ``None``."""

    @abstractmethod
    def values(self) -> List[Product]:
        """Return every stored product ordered by id."""

    @abstractmethod
    def insert(self, product_id: str, product: Product) -> Optional[Product]:
        """Store ``product`` under ``product_id`` and return the previous value."""

    @abstractmethod
    def remove(self, product_id: str) -> Optional[Product]:
        """Delete ``product_id`` and return the removed value, if any."""


class InMemoryProductStore(ProductStore):
    """Dict-backed store; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._records: Dict[str, Product] = {}

    def get(self, product_id: str) -> Optional[Product]:
        return self._records.get(product_id)

    def values(self) -> List[Product]:
        return [self._records[key] for key in sorted(self._records)]

    def insert(self, product_id: str, product: Product) -> Optional[Product]:
        previous = self._records.get(product_id)
        self._records[product_id] = product
        return previous

    def remove(self, product_id: str) -> Optional[Product]:
        return self._records.pop(product_id, None)


class SqliteProductStore(ProductStore):
    """Store backed by the ``products`` table of a SQLite database.

    Every call opens its own connection, so an instance can be shared
    between request handlers running in different threads.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        init_db(db_path)

    @staticmethod
    def _load(raw: str) -> Product:
        return Product.model_validate_json(raw)

    @staticmethod
    def _dump(product: Product) -> str:
        return product.model_dump_json(by_alias=True)

    def get(self, product_id: str) -> Optional[Product]:
        with get_cursor(self.db_path) as cursor:
            row = cursor.execute(
                "SELECT record FROM products WHERE id = ?",
                (product_id,),
            ).fetchone()
        if not row:
            return None
        return self._load(row["record"])

    def values(self) -> List[Product]:
        with get_cursor(self.db_path) as cursor:
            rows = cursor.execute(
                "SELECT record FROM products ORDER BY id"
            ).fetchall()
        return [self._load(row["record"]) for row in rows]

    def insert(self, product_id: str, product: Product) -> Optional[Product]:
        with get_cursor(self.db_path) as cursor:
            row = cursor.execute(
                "SELECT record FROM products WHERE id = ?",
                (product_id,),
            ).fetchone()
            cursor.execute(
                """
                INSERT INTO products (id, record) VALUES (?, ?)
                ON CONFLICT(id) DO UPDATE SET record = excluded.record
                """,
                (product_id, self._dump(product)),
            )
        logger.debug("Stored product %s", product_id)
        return self._load(row["record"]) if row else None

    def remove(self, product_id: str) -> Optional[Product]:
        with get_cursor(self.db_path) as cursor:
            row = cursor.execute(
                "SELECT record FROM products WHERE id = ?",
                (product_id,),
            ).fetchone()
            if not row:
                return None
            cursor.execute("DELETE FROM products WHERE id = ?", (product_id,))
        logger.debug("Removed product %s", product_id)
        return self._load(row["record"])
