"""Application service: Assign (claim) a service order.

Two technicians may try to take the same queue head at once. The store
decides: the order save is conditional on the version read here, so
only one claim is written and the other surfaces as an invalid
transition.
"""

from __future__ import annotations

import logging

from servicedesk.application.dto import ServiceOrderDTO, to_order_dto
from servicedesk.domain.exceptions import (
    ConcurrentUpdateError,
    EntityNotFoundError,
    InvalidTransitionError,
)
from servicedesk.domain.repository.catalog_repository import TechnicianDirectory
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)

logger = logging.getLogger(__name__)


class AssignOrderHandler:

    def __init__(
        self,
        order_repo: ServiceOrderRepository,
        technician_directory: TechnicianDirectory,
    ) -> None:
        self._order_repo = order_repo
        self._technician_directory = technician_directory

    def handle(self, order_id: int, technician_id: str) -> ServiceOrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Service order #{order_id} not found")

        technician = self._technician_directory.get_by_id(technician_id)
        if technician is None:
            raise EntityNotFoundError(f"Technician '{technician_id}' not found")

        order.assign(technician)

        try:
            self._order_repo.save(order)
        except ConcurrentUpdateError as exc:
            logger.warning(
                "%s lost the claim on %s to a concurrent update",
                technician.name, order.order_number,
            )
            raise InvalidTransitionError(
                f"Order {order.order_number} was claimed or changed concurrently"
            ) from exc

        logger.info("Assigned %s to %s", order.order_number, technician.name)
        return to_order_dto(order)
