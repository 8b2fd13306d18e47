"""Read-only catalog entities resolved by the order lifecycle.

Clients, technicians and billable services are owned by surrounding CRUD
screens. The lifecycle only reads them to copy display fields into orders
(snapshot semantics), so they are plain frozen records here.
"""

from __future__ import annotations

from dataclasses import dataclass

from servicedesk.domain.model.value_objects import Money


@dataclass(frozen=True)
class Client:
    id: str
    name: str


@dataclass(frozen=True)
class Technician:
    """A user who can claim service orders.

    ``role`` is carried for the UI's gating of "take ticket" controls;
    assignment itself does not look at it.
    """

    id: str
    name: str
    role: str = "technician"


@dataclass(frozen=True)
class Service:
    """A billable labour service."""

    id: str
    name: str
    price: Money
