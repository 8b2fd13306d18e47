"""Domain service: Inventory Ledger.

Coordinates the cross-aggregate operation of taking a part out of stock
and recording it on a service order. The two writes form one logical
unit: either the stock goes down *and* the order gains a line, or
neither changes.

Discipline:
  1. Load and validate everything up front (quantity, order, product,
     stock on hand). Fails fast before any mutation.
  2. Decrement stock through the repository's atomic conditional update,
     which re-checks availability at write time. A concurrent attach that
     drained the shelf in between loses here, not below zero.
  3. Save the order (version-checked). If that write fails, the decrement
     is compensated before the error propagates.
"""

from __future__ import annotations

import logging

from servicedesk.domain.exceptions import (
    ConcurrentUpdateError,
    EntityNotFoundError,
    InsufficientStockError,
)
from servicedesk.domain.model.service_order import ServiceOrderLineItem
from servicedesk.domain.model.value_objects import Quantity
from servicedesk.domain.repository.product_repository import ProductRepository
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)

logger = logging.getLogger(__name__)

# Order saves tried per attach before a concurrent update is surfaced
SAVE_ATTEMPTS = 2


class InventoryLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: ServiceOrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def reserve_and_attach(
        self, product_id: str, qty: int, order_id: int
    ) -> ServiceOrderLineItem:
        """Consume *qty* units of a product on an order.

        Returns the new line item. The line snapshots the product's name,
        reference and current cost.

        If another write to the order lands between our read and our save,
        the stock is returned and the whole attach is retried once against
        the fresh order. A second loss raises ``ConcurrentUpdateError``.
        """
        quantity = Quantity(qty)
        for _ in range(SAVE_ATTEMPTS - 1):
            try:
                return self._attach(product_id, quantity, order_id)
            except ConcurrentUpdateError:
                logger.info(
                    "Service order #%s changed during attach; retrying", order_id
                )
        return self._attach(product_id, quantity, order_id)

    def _attach(
        self, product_id: str, quantity: Quantity, order_id: int
    ) -> ServiceOrderLineItem:
        # Phase 1: load and validate
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Service order #{order_id} not found")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        if not product.has_stock_for(quantity):
            logger.warning(
                "Rejected %s x %s for %s: only %s in stock",
                quantity, product.name, order.order_number, product.qty,
            )
            raise InsufficientStockError(
                f"Insufficient stock for {product.name} "
                f"(need {quantity.value}, have {product.qty})"
            )

        line = ServiceOrderLineItem(
            id=order.next_product_line_id(),
            product_id=product.id,
            product_name=product.name,
            product_reference=product.reference,
            quantity=quantity,
            unit_cost=product.cost,
        )
        order.add_product_line(line)

        # Phase 2: conditional decrement, then the order write
        if not self._product_repo.decrement_qty(product.id, quantity.value):
            logger.warning(
                "Stock for %s changed before %s could take %s",
                product.name, order.order_number, quantity,
            )
            raise InsufficientStockError(
                f"Insufficient stock for {product.name} "
                f"(need {quantity.value}, stock changed concurrently)"
            )

        try:
            self._order_repo.save(order)
        except Exception:
            logger.warning(
                "Order %s not saved; returning %s x %s to stock",
                order.order_number, quantity, product.name,
            )
            self._product_repo.restore_qty(product.id, quantity.value)
            raise

        logger.info(
            "Attached %s x %s to %s", quantity, product.name, order.order_number
        )
        return line
