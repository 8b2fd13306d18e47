"""Integration tests for the CreateOrder (intake) use case.

Uses in-memory fake repositories; no file I/O.
"""

import re
from datetime import date, datetime, timezone

import pytest

from servicedesk.application.create_order import CreateOrderHandler
from servicedesk.application.dto import PhotoSpec
from servicedesk.domain.exceptions import EntityNotFoundError, ValidationError
from servicedesk.domain.model.catalog import Client
from servicedesk.domain.model.service_order import ServiceOrderStatus
from tests.fakes import FakeClientDirectory, FakeServiceOrderRepository

NOW = datetime(2026, 10, 18, 14, 0, tzinfo=timezone.utc)


def _setup() -> tuple[CreateOrderHandler, FakeServiceOrderRepository, FakeClientDirectory]:
    order_repo = FakeServiceOrderRepository()
    clients = FakeClientDirectory([
        Client(id="1", name="John Doe"),
        Client(id="2", name="Jane Smith"),
    ])
    handler = CreateOrderHandler(order_repo, clients, clock=lambda: NOW)
    return handler, order_repo, clients


class TestCreateOrderHappyPath:

    def test_new_order_is_open_and_empty(self):
        handler, _, _ = _setup()
        dto = handler.handle("1")
        assert dto.status == "Open"
        assert dto.products == []
        assert dto.services == []
        assert dto.technician_id is None
        assert dto.diagnosis_initial is None

    def test_order_number_format(self):
        handler, _, _ = _setup()
        dto = handler.handle("1")
        assert re.fullmatch(r"OS-2026-\d{3}", dto.order_number)
        assert dto.order_number == "OS-2026-001"

    def test_sequential_numbers_and_ids(self):
        handler, _, _ = _setup()
        dto1 = handler.handle("1")
        dto2 = handler.handle("2")
        assert (dto1.id, dto1.order_number) == (1, "OS-2026-001")
        assert (dto2.id, dto2.order_number) == (2, "OS-2026-002")

    def test_entry_date_defaults_to_today(self):
        handler, _, _ = _setup()
        assert handler.handle("1").entry_date == "2026-10-18"

    def test_entry_date_can_be_backdated(self):
        handler, _, _ = _setup()
        dto = handler.handle("1", entry_date=date(2026, 10, 1))
        assert dto.entry_date == "2026-10-01"

    def test_persists_client_snapshot(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle("2", diagnosis_initial="Does not boot")
        saved = order_repo.get_by_id(dto.id)
        assert saved.client_id == "2"
        assert saved.client_name == "Jane Smith"
        assert saved.diagnosis_initial == "Does not boot"
        assert saved.status == ServiceOrderStatus.OPEN

    def test_photos_recorded(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle(
            "1",
            initial_photos=[
                PhotoSpec("https://img/front.jpg", "front.jpg"),
                PhotoSpec("https://img/back.jpg", "back.jpg"),
            ],
        )
        assert dto.initial_photos == ["https://img/front.jpg", "https://img/back.jpg"]
        assert order_repo.get_by_id(dto.id).initial_photos[1].name == "back.jpg"

    def test_created_at_from_clock(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle("1")
        assert order_repo.get_by_id(dto.id).created_at == NOW
        assert dto.created_at == "2026-10-18 14:00 UTC"


class TestCreateOrderValidation:

    def test_unknown_client_rejected(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Client '99' not found"):
            handler.handle("99")
        assert order_repo.list_all() == []

    def test_negative_warranty_rejected(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(ValidationError, match="Warranty"):
            handler.handle("1", warranty_days=-5)
        assert order_repo.list_all() == []
