"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from servicedesk.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def decrement_qty(self, product_id: str, quantity: int) -> bool:
        """Atomically take *quantity* units out of stock.

        The check and the write happen as one step against the store.
        Returns False, leaving stock untouched, when fewer than *quantity*
        units are on hand at write time.
        """

    @abstractmethod
    def restore_qty(self, product_id: str, quantity: int) -> None:
        """Put back units taken by a decrement whose order write failed."""
