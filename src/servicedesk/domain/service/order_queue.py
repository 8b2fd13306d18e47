"""Domain service: the open-ticket queue.

The queue is a view, not a structure. Every query recomputes it from the
current order set, because other desks create and claim orders at the same
time. It only recommends: the head is the ticket a technician should take
next, but claiming any other Open order is still allowed.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from servicedesk.domain.model.service_order import ServiceOrder


def _queue_key(order: ServiceOrder) -> tuple:
    # oldest entry first; id keeps ties deterministic
    return (order.entry_date, order.id or 0)


class OrderQueuePolicy:

    @staticmethod
    def open_orders(orders: Iterable[ServiceOrder]) -> Iterator[ServiceOrder]:
        """Yield unassigned orders, oldest entry date first."""
        return iter(sorted((o for o in orders if o.is_open), key=_queue_key))

    @staticmethod
    def next_to_take(orders: Iterable[ServiceOrder]) -> ServiceOrder | None:
        return next(OrderQueuePolicy.open_orders(orders), None)

    @staticmethod
    def technician_orders(
        orders: Iterable[ServiceOrder], technician_id: str
    ) -> Iterator[ServiceOrder]:
        """Yield the claimed orders bound to *technician_id*."""
        return iter(
            sorted(
                (
                    o
                    for o in orders
                    if not o.is_open and o.technician_id == technician_id
                ),
                key=_queue_key,
            )
        )
