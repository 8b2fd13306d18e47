"""Domain service: human-readable order numbers.

Numbers look like ``OS-2026-007``: prefix, year, and a per-year sequence
zero-padded to three digits (it simply widens past 999).

The sequence comes from a counter the repository increments atomically,
so two orders created at the same moment can never share a number.
Numbers are stamped once at creation and never recomputed.
"""

from __future__ import annotations

from servicedesk.domain.exceptions import ValidationError
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)

ORDER_NUMBER_PREFIX = "OS"


def format_order_number(year: int, seq: int) -> str:
    if seq <= 0:
        raise ValidationError(f"Order sequence must be positive, got {seq}")
    return f"{ORDER_NUMBER_PREFIX}-{year}-{seq:03d}"


class OrderNumberAssigner:

    def __init__(self, order_repo: ServiceOrderRepository) -> None:
        self._order_repo = order_repo

    def assign(self, year: int) -> str:
        """Draw the next number for *year*."""
        return format_order_number(year, self._order_repo.next_sequence(year))
