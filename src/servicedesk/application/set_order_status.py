"""Application service: Set Service Order Status use case."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from servicedesk.application.dto import ServiceOrderDTO, to_order_dto
from servicedesk.domain.exceptions import EntityNotFoundError, ValidationError
from servicedesk.domain.model.service_order import ServiceOrderStatus
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)

logger = logging.getLogger(__name__)


def parse_status(raw: ServiceOrderStatus | str) -> ServiceOrderStatus:
    """Accept the enum or its value (``"Resolved"``) or name (``"RESOLVED"``)."""
    if isinstance(raw, ServiceOrderStatus):
        return raw
    if not isinstance(raw, str):
        raise ValidationError(
            f"Status must be a string, got {type(raw).__name__}"
        )
    try:
        return ServiceOrderStatus(raw)
    except ValueError:
        pass
    try:
        return ServiceOrderStatus[raw.upper()]
    except KeyError:
        valid = ", ".join(s.value for s in ServiceOrderStatus)
        raise ValidationError(
            f"Unknown status {raw!r}; expected one of {valid}"
        ) from None


class SetOrderStatusHandler:

    def __init__(
        self,
        order_repo: ServiceOrderRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._order_repo = order_repo
        self._clock = clock

    def handle(self, order_id: int, status: ServiceOrderStatus | str) -> ServiceOrderDTO:
        target = parse_status(status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Service order #{order_id} not found")

        previous = order.status
        order.change_status(target, today=self._clock().date())
        self._order_repo.save(order)

        logger.info(
            "%s moved from %s to %s",
            order.order_number, previous.value, target.value,
        )
        return to_order_dto(order)
