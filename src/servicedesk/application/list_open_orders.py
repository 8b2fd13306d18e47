"""Application service: the open queue (query).

Recomputed from the repository on every call; nothing is cached between
calls, so repeated queries with no writes in between return the same list.
"""

from __future__ import annotations

from servicedesk.application.dto import ServiceOrderDTO, to_order_dto
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)
from servicedesk.domain.service.order_queue import OrderQueuePolicy


class ListOpenOrdersHandler:

    def __init__(self, order_repo: ServiceOrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> list[ServiceOrderDTO]:
        """Open orders, oldest entry date first."""
        orders = self._order_repo.list_all()
        return [to_order_dto(o) for o in OrderQueuePolicy.open_orders(orders)]

    def next(self) -> ServiceOrderDTO | None:
        """The recommended ticket to take next, if any."""
        head = OrderQueuePolicy.next_to_take(self._order_repo.list_all())
        return to_order_dto(head) if head is not None else None
