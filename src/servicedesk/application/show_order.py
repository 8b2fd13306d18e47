"""Application service: Show Service Order use case (query)."""

from __future__ import annotations

from servicedesk.application.dto import ServiceOrderDTO, to_order_dto
from servicedesk.domain.exceptions import EntityNotFoundError
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)


class ShowOrderHandler:

    def __init__(self, order_repo: ServiceOrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> ServiceOrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Service order #{order_id} not found")
        return to_order_dto(order)
