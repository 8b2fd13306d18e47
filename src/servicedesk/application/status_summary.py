"""Application service: desk status summary (query).

Counts orders per status and products below their minimum stock, the
figures the dashboard shows.
"""

from __future__ import annotations

from dataclasses import dataclass

from servicedesk.domain.model.service_order import ServiceOrderStatus
from servicedesk.domain.repository.product_repository import ProductRepository
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)


@dataclass(frozen=True)
class StockAlertDTO:
    product_id: str
    product_name: str
    qty: int
    min_qty: int


@dataclass(frozen=True)
class StatusSummaryDTO:
    orders_by_status: dict[str, int]
    open_queue_length: int
    stock_alerts: list[StockAlertDTO]


class StatusSummaryHandler:

    def __init__(
        self,
        order_repo: ServiceOrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self) -> StatusSummaryDTO:
        counts = {status.value: 0 for status in ServiceOrderStatus}
        for order in self._order_repo.list_all():
            counts[order.status.value] += 1

        alerts = [
            StockAlertDTO(
                product_id=p.id,
                product_name=p.name,
                qty=p.qty,
                min_qty=p.min_qty,  # type: ignore[arg-type]
            )
            for p in self._product_repo.list_all()
            if p.is_below_minimum
        ]

        return StatusSummaryDTO(
            orders_by_status=counts,
            open_queue_length=counts[ServiceOrderStatus.OPEN.value],
            stock_alerts=alerts,
        )
