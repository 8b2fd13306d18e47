"""Abstract repository for the ServiceOrder aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from servicedesk.domain.model.service_order import ServiceOrder


class ServiceOrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> ServiceOrder | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[ServiceOrder]:
        """Return every order in insertion order."""

    @abstractmethod
    def save(self, order: ServiceOrder) -> None:
        """Persist a new or updated order.

        New orders (``id is None``) get an ID assigned. Existing orders are
        written only if the stored ``version`` still equals ``order.version``;
        otherwise ``ConcurrentUpdateError`` is raised and nothing is written.
        On success ``order.version`` is incremented.
        """

    @abstractmethod
    def next_sequence(self, year: int) -> int:
        """Atomically increment and return the order-number counter for *year*."""
