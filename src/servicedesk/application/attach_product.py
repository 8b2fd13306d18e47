"""Application service: Attach Product use case.

Thin wrapper over the Inventory Ledger, which owns the stock-and-order
atomicity.
"""

from __future__ import annotations

from servicedesk.application.dto import ServiceOrderDTO, to_order_dto
from servicedesk.domain.exceptions import EntityNotFoundError
from servicedesk.domain.repository.product_repository import ProductRepository
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)
from servicedesk.domain.service.inventory_ledger import InventoryLedger


class AttachProductHandler:

    def __init__(
        self,
        order_repo: ServiceOrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: int, product_id: str, qty: int) -> ServiceOrderDTO:
        ledger = InventoryLedger(self._product_repo, self._order_repo)
        ledger.reserve_and_attach(product_id, qty, order_id)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Service order #{order_id} not found")
        return to_order_dto(order)
