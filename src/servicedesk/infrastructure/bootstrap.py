"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Settings come from the environment, optionally seeded from a ``.env``
file in the working directory:

    SERVICEDESK_DATA_DIR   directory holding the JSON collections
    SERVICEDESK_LOG_LEVEL  log level for the CLI (default WARNING)
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from servicedesk.infrastructure.persistence.json_catalog_repository import (
    JsonClientDirectory,
    JsonServiceCatalog,
    JsonTechnicianDirectory,
)
from servicedesk.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from servicedesk.infrastructure.persistence.json_service_order_repository import (
    JsonServiceOrderRepository,
)

load_dotenv()

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    # read per call so the CLI can be pointed elsewhere at runtime
    return Path(os.getenv("SERVICEDESK_DATA_DIR", str(_DEFAULT_DATA_DIR)))


def log_level() -> str:
    return os.getenv("SERVICEDESK_LOG_LEVEL", "WARNING").upper()


def order_repository() -> JsonServiceOrderRepository:
    return JsonServiceOrderRepository(data_dir() / "service_orders.json")


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(data_dir() / "products.json")


def client_directory() -> JsonClientDirectory:
    return JsonClientDirectory(data_dir() / "clients.json")


def technician_directory() -> JsonTechnicianDirectory:
    return JsonTechnicianDirectory(data_dir() / "technicians.json")


def service_catalog() -> JsonServiceCatalog:
    return JsonServiceCatalog(data_dir() / "services.json")
