"""JSON-file-backed implementation of ServiceOrderRepository.

The file holds the orders plus the per-year order-number counters::

    {"sequences": {"2026": 3}, "orders": [...]}
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from servicedesk.domain.exceptions import ConcurrentUpdateError
from servicedesk.domain.model.service_order import (
    PhotoRef,
    ServiceOrder,
    ServiceOrderLineItem,
    ServiceOrderServiceCharge,
    ServiceOrderStatus,
)
from servicedesk.domain.model.value_objects import Money, Quantity
from servicedesk.domain.repository.service_order_repository import (
    ServiceOrderRepository,
)
from servicedesk.infrastructure.persistence.json_file import JsonFile


class JsonServiceOrderRepository(ServiceOrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty={"sequences": {}, "orders": []})

    # --- ServiceOrderRepository interface -------------------------------------

    def get_by_id(self, order_id: int) -> ServiceOrder | None:
        for raw in self._file.read()["orders"]:
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[ServiceOrder]:
        return [self._to_domain(raw) for raw in self._file.read()["orders"]]

    def save(self, order: ServiceOrder) -> None:
        with self._file.lock:
            data = self._file.read()
            orders = data["orders"]

            if order.id is None:
                order.id = max((o["id"] for o in orders), default=0) + 1

            new_version = order.version + 1
            raw_order = self._to_raw(order, new_version)

            # Upsert, conditional on the version the caller read
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    if raw["version"] != order.version:
                        raise ConcurrentUpdateError(
                            f"Order {order.order_number} changed since it was read "
                            f"(stored version {raw['version']}, "
                            f"expected {order.version})"
                        )
                    orders[i] = raw_order
                    break
            else:
                orders.append(raw_order)

            self._file.write(data)
            order.version = new_version

    def next_sequence(self, year: int) -> int:
        with self._file.lock:
            data = self._file.read()
            seq = data["sequences"].get(str(year), 0) + 1
            data["sequences"][str(year)] = seq
            self._file.write(data)
            return seq

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: ServiceOrder, version: int) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "client_id": order.client_id,
            "client_name": order.client_name,
            "status": order.status.value,
            "entry_date": order.entry_date.isoformat(),
            "diagnosis_initial": order.diagnosis_initial,
            "initial_photos": [
                {"url": p.url, "name": p.name} for p in order.initial_photos
            ],
            "technician_id": order.technician_id,
            "technician_name": order.technician_name,
            "products": [
                {
                    "id": line.id,
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "product_reference": line.product_reference,
                    "quantity": line.quantity.value,
                    "unit_cost": str(line.unit_cost.amount),
                    "currency": line.unit_cost.currency,
                }
                for line in order.products
            ],
            "services": [
                {
                    "id": charge.id,
                    "service_id": charge.service_id,
                    "service_name": charge.service_name,
                    "price": str(charge.price.amount),
                    "currency": charge.price.currency,
                }
                for charge in order.services
            ],
            "warranty_days": order.warranty_days,
            "delivery_date": (
                order.delivery_date.isoformat() if order.delivery_date else None
            ),
            "created_at": order.created_at.isoformat(),
            "version": version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> ServiceOrder:
        products = [
            ServiceOrderLineItem(
                id=i["id"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                product_reference=i["product_reference"],
                quantity=Quantity(i["quantity"]),
                unit_cost=Money(Decimal(i["unit_cost"]), i.get("currency", "BRL")),
            )
            for i in raw["products"]
        ]
        services = [
            ServiceOrderServiceCharge(
                id=s["id"],
                service_id=s["service_id"],
                service_name=s["service_name"],
                price=Money(Decimal(s["price"]), s.get("currency", "BRL")),
            )
            for s in raw["services"]
        ]
        delivery = raw.get("delivery_date")
        return ServiceOrder(
            id=raw["id"],
            order_number=raw["order_number"],
            client_id=raw["client_id"],
            client_name=raw["client_name"],
            entry_date=date.fromisoformat(raw["entry_date"]),
            status=ServiceOrderStatus(raw["status"]),
            diagnosis_initial=raw.get("diagnosis_initial"),
            initial_photos=tuple(
                PhotoRef(p["url"], p["name"]) for p in raw.get("initial_photos", [])
            ),
            technician_id=raw.get("technician_id"),
            technician_name=raw.get("technician_name"),
            products=products,
            services=services,
            warranty_days=raw.get("warranty_days"),
            delivery_date=date.fromisoformat(delivery) if delivery else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
            version=raw["version"],
        )
