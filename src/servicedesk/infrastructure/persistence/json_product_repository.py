"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from servicedesk.domain.exceptions import EntityNotFoundError
from servicedesk.domain.model.product import Product
from servicedesk.domain.model.value_objects import Money, Quantity
from servicedesk.domain.repository.product_repository import ProductRepository
from servicedesk.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._file.lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)

    def decrement_qty(self, product_id: str, quantity: int) -> bool:
        with self._file.lock:
            products = self._load()
            product = products.get(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            units = Quantity(quantity)
            if not product.has_stock_for(units):
                return False
            product.consume(units)
            self._persist(products)
            return True

    def restore_qty(self, product_id: str, quantity: int) -> None:
        with self._file.lock:
            products = self._load()
            product = products.get(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            product.restock(Quantity(quantity))
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                reference=item["reference"],
                qty=item["qty"],
                cost=Money(Decimal(item.get("cost", "0")), item.get("currency", "BRL")),
                min_qty=item.get("min_qty"),
            )
            for item in self._file.read()
        }

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "reference": p.reference,
                "qty": p.qty,
                "cost": str(p.cost.amount),
                "currency": p.cost.currency,
                "min_qty": p.min_qty,
            }
            for p in products.values()
        ]
        self._file.write(raw)
