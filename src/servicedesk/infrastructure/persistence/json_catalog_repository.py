"""JSON-file-backed directories for clients, technicians and services.

These collections are maintained by the surrounding CRUD screens; the
order lifecycle only reads them.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from servicedesk.domain.model.catalog import Client, Service, Technician
from servicedesk.domain.model.value_objects import Money
from servicedesk.domain.repository.catalog_repository import (
    ClientDirectory,
    ServiceCatalog,
    TechnicianDirectory,
)
from servicedesk.infrastructure.persistence.json_file import JsonFile


class JsonClientDirectory(ClientDirectory):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    def get_by_id(self, client_id: str) -> Client | None:
        return next((c for c in self.list_all() if c.id == client_id), None)

    def list_all(self) -> list[Client]:
        return [Client(id=raw["id"], name=raw["name"]) for raw in self._file.read()]


class JsonTechnicianDirectory(TechnicianDirectory):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    def get_by_id(self, technician_id: str) -> Technician | None:
        return next((t for t in self.list_all() if t.id == technician_id), None)

    def list_all(self) -> list[Technician]:
        return [
            Technician(
                id=raw["id"],
                name=raw["name"],
                role=raw.get("role", "technician"),
            )
            for raw in self._file.read()
        ]


class JsonServiceCatalog(ServiceCatalog):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    def get_by_id(self, service_id: str) -> Service | None:
        return next((s for s in self.list_all() if s.id == service_id), None)

    def list_all(self) -> list[Service]:
        return [
            Service(
                id=raw["id"],
                name=raw["name"],
                price=Money(Decimal(raw["price"]), raw.get("currency", "BRL")),
            )
            for raw in self._file.read()
        ]
