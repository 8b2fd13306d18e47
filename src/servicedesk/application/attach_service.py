"""Application service: Attach Service use case.

Bills a labour service to an order by snapshotting its current price.
No stock is involved.
"""

from __future__ import annotations

import logging

from servicedesk.application.dto import ServiceOrderDTO, to_order_dto
from servicedesk.domain.exceptions import ConcurrentUpdateError, EntityNotFoundError
from servicedesk.domain.model.service_order import ServiceOrderServiceCharge
from servicedesk.domain.repository.catalog_repository import ServiceCatalog
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)
from servicedesk.domain.service.inventory_ledger import SAVE_ATTEMPTS

logger = logging.getLogger(__name__)


class AttachServiceHandler:

    def __init__(
        self,
        order_repo: ServiceOrderRepository,
        service_catalog: ServiceCatalog,
    ) -> None:
        self._order_repo = order_repo
        self._service_catalog = service_catalog

    def handle(self, order_id: int, service_id: str) -> ServiceOrderDTO:
        """Bill *service_id* on the order.

        A concurrent write to the same order is absorbed by re-reading the
        order and billing once more. Losing twice raises
        ``ConcurrentUpdateError``.
        """
        for _ in range(SAVE_ATTEMPTS - 1):
            try:
                return self._bill(order_id, service_id)
            except ConcurrentUpdateError:
                logger.info(
                    "Service order #%s changed during billing; retrying", order_id
                )
        return self._bill(order_id, service_id)

    def _bill(self, order_id: int, service_id: str) -> ServiceOrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Service order #{order_id} not found")

        service = self._service_catalog.get_by_id(service_id)
        if service is None:
            raise EntityNotFoundError(f"Service '{service_id}' not found")

        order.add_service_charge(
            ServiceOrderServiceCharge(
                id=order.next_service_charge_id(),
                service_id=service.id,
                service_name=service.name,
                price=service.price,  # <-- price snapshot
            )
        )
        self._order_repo.save(order)

        logger.info("Billed %s on %s", service.name, order.order_number)
        return to_order_dto(order)
