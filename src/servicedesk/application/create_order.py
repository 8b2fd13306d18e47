"""Application service: Create Service Order use case (intake).

Orchestrates the client lookup, the order-number counter and the
ServiceOrder factory.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, timezone

from servicedesk.application.dto import PhotoSpec, ServiceOrderDTO, to_order_dto
from servicedesk.domain.exceptions import EntityNotFoundError
from servicedesk.domain.model.service_order import PhotoRef, ServiceOrder
from servicedesk.domain.repository.catalog_repository import ClientDirectory
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)
from servicedesk.domain.service.order_numbering import OrderNumberAssigner

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: ServiceOrderRepository,
        client_directory: ClientDirectory,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._order_repo = order_repo
        self._client_directory = client_directory
        self._clock = clock

    def handle(
        self,
        client_id: str,
        entry_date: date | None = None,
        diagnosis_initial: str | None = None,
        initial_photos: list[PhotoSpec] | None = None,
        warranty_days: int | None = None,
    ) -> ServiceOrderDTO:
        """Open a new service order.

        Steps:
        1. Resolve the client (fail if not found) for the name snapshot.
        2. Draw the next order number for the current year.
        3. Let the ServiceOrder factory validate and build the ticket.
        4. Persist and return a DTO.
        """
        client = self._client_directory.get_by_id(client_id)
        if client is None:
            raise EntityNotFoundError(f"Client '{client_id}' not found")

        now = self._clock()
        order = ServiceOrder.create(
            order_number=OrderNumberAssigner(self._order_repo).assign(now.year),
            client=client,
            entry_date=entry_date or now.date(),
            diagnosis_initial=diagnosis_initial,
            initial_photos=[PhotoRef(p.url, p.name) for p in initial_photos or []],
            warranty_days=warranty_days,
            created_at=now,
        )
        self._order_repo.save(order)

        logger.info("Created %s for client %s", order.order_number, client.name)
        return to_order_dto(order)
