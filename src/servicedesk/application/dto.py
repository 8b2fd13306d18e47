"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from servicedesk.domain.model.service_order import ServiceOrder


@dataclass(frozen=True)
class PhotoSpec:
    """Input: a photo taken at intake."""

    url: str
    name: str


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a consumed part as displayed to the user."""

    id: int
    product_id: str
    product_name: str
    product_reference: str
    quantity: int
    unit_cost: str  # formatted, e.g. "R$ 50.00"
    line_total: str


@dataclass(frozen=True)
class ServiceChargeDTO:
    id: int
    service_id: str
    service_name: str
    price: str


@dataclass(frozen=True)
class ServiceOrderDTO:
    """Output: a complete service order as displayed to the user."""

    id: int
    order_number: str
    client_id: str
    client_name: str
    status: str
    entry_date: str
    diagnosis_initial: str | None
    initial_photos: list[str]
    technician_id: str | None
    technician_name: str | None
    products: list[LineItemDTO]
    services: list[ServiceChargeDTO]
    parts_total: str
    services_total: str
    total: str
    delivery_date: str | None
    warranty_expires_at: str | None
    created_at: str


def to_order_dto(order: ServiceOrder) -> ServiceOrderDTO:
    expires = order.warranty_expires_at
    return ServiceOrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        client_id=order.client_id,
        client_name=order.client_name,
        status=order.status.value,
        entry_date=order.entry_date.isoformat(),
        diagnosis_initial=order.diagnosis_initial,
        initial_photos=[photo.url for photo in order.initial_photos],
        technician_id=order.technician_id,
        technician_name=order.technician_name,
        products=[
            LineItemDTO(
                id=line.id,
                product_id=line.product_id,
                product_name=line.product_name,
                product_reference=line.product_reference,
                quantity=line.quantity.value,
                unit_cost=str(line.unit_cost),
                line_total=str(line.line_total),
            )
            for line in order.products
        ],
        services=[
            ServiceChargeDTO(
                id=charge.id,
                service_id=charge.service_id,
                service_name=charge.service_name,
                price=str(charge.price),
            )
            for charge in order.services
        ],
        parts_total=str(order.parts_total),
        services_total=str(order.services_total),
        total=str(order.total),
        delivery_date=order.delivery_date.isoformat() if order.delivery_date else None,
        warranty_expires_at=expires.isoformat() if expires else None,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
