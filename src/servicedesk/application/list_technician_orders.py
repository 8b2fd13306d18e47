"""Application service: a technician's claimed orders (query)."""

from __future__ import annotations

from servicedesk.application.dto import ServiceOrderDTO, to_order_dto
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)
from servicedesk.domain.service.order_queue import OrderQueuePolicy


class ListTechnicianOrdersHandler:

    def __init__(self, order_repo: ServiceOrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, technician_id: str) -> list[ServiceOrderDTO]:
        orders = self._order_repo.list_all()
        return [
            to_order_dto(o)
            for o in OrderQueuePolicy.technician_orders(orders, technician_id)
        ]
