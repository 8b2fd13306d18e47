"""ServiceOrder aggregate: the core of the domain.

A service order ("OS") is one repair ticket. It owns its consumed-part
lines and its labour charges, and every lifecycle rule is enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum

from servicedesk.domain.exceptions import InvalidTransitionError, ValidationError
from servicedesk.domain.model.catalog import Client, Technician
from servicedesk.domain.model.value_objects import Money, Quantity


class ServiceOrderStatus(Enum):
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    PENDING_PARTS = "PendingParts"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


# Targets accepted by a free-form status change. Open is reachable only at
# intake, and leaving it requires an assignment.
SETTABLE_STATUSES = frozenset(
    {
        ServiceOrderStatus.IN_PROGRESS,
        ServiceOrderStatus.PENDING_PARTS,
        ServiceOrderStatus.RESOLVED,
        ServiceOrderStatus.CLOSED,
    }
)


def ensure_status_change_allowed(
    current: ServiceOrderStatus, target: ServiceOrderStatus
) -> None:
    """Validate a free-form status change.

    The graph is flat: any in-flight order may move to any other in-flight
    status or straight to Closed. The only hard rules are that Open is
    never a target, an Open order must be assigned first, and Closed is
    terminal.
    """
    if target not in SETTABLE_STATUSES:
        raise InvalidTransitionError(
            f"Cannot set status to {target.value}; orders only start Open"
        )
    if current == ServiceOrderStatus.OPEN:
        raise InvalidTransitionError(
            "Order is still Open; assign a technician before changing its status"
        )
    if current == ServiceOrderStatus.CLOSED:
        raise InvalidTransitionError("Order is Closed; no further status changes")


@dataclass(frozen=True)
class PhotoRef:
    """A photo attached at intake."""

    url: str
    name: str


@dataclass(frozen=True)
class ServiceOrderLineItem:
    """Snapshot of a part consumed by an order.

    ``unit_cost`` is the product cost at attachment time and is never
    re-read from the catalog.
    """

    id: int
    product_id: str
    product_name: str
    product_reference: str
    quantity: Quantity
    unit_cost: Money

    @property
    def line_total(self) -> Money:
        return self.unit_cost * self.quantity.value


@dataclass(frozen=True)
class ServiceOrderServiceCharge:
    """Snapshot of a labour service billed to an order."""

    id: int
    service_id: str
    service_name: str
    price: Money


@dataclass
class ServiceOrder:
    """Aggregate root for repair tickets.

    Use ``ServiceOrder.create()`` for new orders. The ``__init__`` stays
    simple so repositories can reconstitute persisted orders without
    re-validating them.

    ``client_name`` and ``technician_name`` are snapshots taken when the
    order was created or claimed; renaming the client or technician later
    does not rewrite history.
    """

    id: int | None
    order_number: str
    client_id: str
    client_name: str
    entry_date: date
    status: ServiceOrderStatus = ServiceOrderStatus.OPEN
    diagnosis_initial: str | None = None
    initial_photos: tuple[PhotoRef, ...] = ()
    technician_id: str | None = None
    technician_name: str | None = None
    products: list[ServiceOrderLineItem] = field(default_factory=list)
    services: list[ServiceOrderServiceCharge] = field(default_factory=list)
    warranty_days: int | None = None
    delivery_date: date | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        client: Client,
        entry_date: date,
        diagnosis_initial: str | None = None,
        initial_photos: list[PhotoRef] | tuple[PhotoRef, ...] | None = None,
        warranty_days: int | None = None,
        created_at: datetime | None = None,
    ) -> ServiceOrder:
        """Open a new ticket at intake."""
        if not order_number:
            raise ValidationError("Order number is required")
        if warranty_days is not None and warranty_days < 0:
            raise ValidationError("Warranty days cannot be negative")

        diagnosis = diagnosis_initial.strip() if diagnosis_initial else None

        order = ServiceOrder(
            id=None,
            order_number=order_number,
            client_id=client.id,
            client_name=client.name,
            entry_date=entry_date,
            diagnosis_initial=diagnosis or None,
            initial_photos=tuple(initial_photos or ()),
            warranty_days=warranty_days,
        )
        if created_at is not None:
            order.created_at = created_at
        return order

    # --- State transitions ----------------------------------------------------

    def assign(self, technician: Technician) -> None:
        """Transition Open -> InProgress and bind the technician.

        This is the only way out of Open.
        """
        if self.status != ServiceOrderStatus.OPEN:
            raise InvalidTransitionError(
                f"Cannot assign order {self.order_number}: current status is "
                f"{self.status.value}, expected Open"
            )
        self.technician_id = technician.id
        self.technician_name = technician.name
        self.status = ServiceOrderStatus.IN_PROGRESS

    def change_status(self, target: ServiceOrderStatus, today: date) -> None:
        """Move a claimed order to another in-flight status or close it.

        Closing stamps ``delivery_date`` with *today*.
        """
        ensure_status_change_allowed(self.status, target)
        self.status = target
        if target == ServiceOrderStatus.CLOSED:
            self.delivery_date = today

    # --- Line items -----------------------------------------------------------

    def add_product_line(self, line: ServiceOrderLineItem) -> None:
        """Append a consumed-part snapshot.

        The inventory ledger pairs every append with a stock decrement.
        """
        if any(existing.id == line.id for existing in self.products):
            raise ValidationError(f"Duplicate product line id {line.id}")
        self.products.append(line)

    def add_service_charge(self, charge: ServiceOrderServiceCharge) -> None:
        if any(existing.id == charge.id for existing in self.services):
            raise ValidationError(f"Duplicate service charge id {charge.id}")
        self.services.append(charge)

    def next_product_line_id(self) -> int:
        return max((line.id for line in self.products), default=0) + 1

    def next_service_charge_id(self) -> int:
        return max((charge.id for charge in self.services), default=0) + 1

    # --- Computed properties --------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.status == ServiceOrderStatus.OPEN

    @property
    def parts_total(self) -> Money:
        result = Money.zero()
        for line in self.products:
            result = result + line.line_total
        return result

    @property
    def services_total(self) -> Money:
        result = Money.zero()
        for charge in self.services:
            result = result + charge.price
        return result

    @property
    def total(self) -> Money:
        return self.parts_total + self.services_total

    @property
    def warranty_expires_at(self) -> date | None:
        if self.delivery_date is None or self.warranty_days is None:
            return None
        return self.delivery_date + timedelta(days=self.warranty_days)
