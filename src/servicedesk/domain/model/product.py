"""Product aggregate.

Products live independently of service orders. The order lifecycle only
ever consumes stock from them; cost changes never reach orders that already
captured a cost snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass

from servicedesk.domain.exceptions import InsufficientStockError, ValidationError
from servicedesk.domain.model.value_objects import Money, Quantity


@dataclass
class Product:
    """A stocked part.

    Invariants:
    - ``qty`` is never negative
    """

    id: str
    name: str
    reference: str
    qty: int
    cost: Money
    min_qty: int | None = None

    def __post_init__(self) -> None:
        if self.qty < 0:
            raise ValidationError(f"Stock for {self.name} cannot be negative")

    def has_stock_for(self, quantity: Quantity) -> bool:
        return self.qty >= quantity.value

    def consume(self, quantity: Quantity) -> None:
        """Take *quantity* units out of stock."""
        if not self.has_stock_for(quantity):
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity.value}, have {self.qty})"
            )
        self.qty -= quantity.value

    def restock(self, quantity: Quantity) -> None:
        self.qty += quantity.value

    @property
    def is_below_minimum(self) -> bool:
        return bool(self.min_qty) and self.qty < self.min_qty  # type: ignore[operator]
