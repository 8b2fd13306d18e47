"""End-to-end walk through a repair ticket's life, using only the handlers."""

from datetime import datetime, timezone

import pytest

from servicedesk.application.assign_order import AssignOrderHandler
from servicedesk.application.attach_product import AttachProductHandler
from servicedesk.application.attach_service import AttachServiceHandler
from servicedesk.application.create_order import CreateOrderHandler
from servicedesk.application.set_order_status import SetOrderStatusHandler
from servicedesk.domain.exceptions import InsufficientStockError, InvalidTransitionError
from servicedesk.domain.model.catalog import Client, Service, Technician
from servicedesk.domain.model.product import Product
from servicedesk.domain.model.value_objects import Money
from tests.fakes import (
    FakeClientDirectory,
    FakeProductRepository,
    FakeServiceCatalog,
    FakeServiceOrderRepository,
    FakeTechnicianDirectory,
)

NOW = datetime(2026, 10, 18, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def desk():
    order_repo = FakeServiceOrderRepository()
    product_repo = FakeProductRepository([
        Product(id="P", name="SSD 512GB", reference="SSD-512-INT", qty=5, cost=Money.of("50.00")),
    ])
    return {
        "orders": order_repo,
        "products": product_repo,
        "create": CreateOrderHandler(
            order_repo, FakeClientDirectory([Client(id="C1", name="John Doe")]), clock=lambda: NOW
        ),
        "assign": AssignOrderHandler(
            order_repo,
            FakeTechnicianDirectory([
                Technician(id="T", name="Ana Souza"),
                Technician(id="T2", name="Carlos Lima"),
            ]),
        ),
        "status": SetOrderStatusHandler(order_repo, clock=lambda: NOW),
        "part": AttachProductHandler(order_repo, product_repo),
        "labour": AttachServiceHandler(
            order_repo,
            FakeServiceCatalog([Service(id="S", name="Diagnostico", price=Money.of("80.00"))]),
        ),
    }


def test_full_repair(desk):
    order = desk["create"].handle("C1", diagnosis_initial="No video")
    assert order.status == "Open"

    claimed = desk["assign"].handle(order.id, "T")
    assert claimed.status == "InProgress"
    assert claimed.technician_id == "T"

    with pytest.raises(InvalidTransitionError):
        desk["assign"].handle(order.id, "T2")

    after_part = desk["part"].handle(order.id, "P", 3)
    assert desk["products"].get_by_id("P").qty == 2
    assert after_part.products[0].quantity == 3

    with pytest.raises(InsufficientStockError):
        desk["part"].handle(order.id, "P", 3)
    assert desk["products"].get_by_id("P").qty == 2

    desk["labour"].handle(order.id, "S")
    desk["status"].handle(order.id, "PendingParts")
    desk["status"].handle(order.id, "Resolved")
    closed = desk["status"].handle(order.id, "Closed")

    assert closed.status == "Closed"
    assert closed.total == "R$ 230.00"
    assert closed.delivery_date == "2026-10-18"


def test_open_orders_never_have_a_technician(desk):
    for _ in range(3):
        desk["create"].handle("C1")
    desk["assign"].handle(2, "T")
    desk["status"].handle(2, "Resolved")

    for order in desk["orders"].list_all():
        assert (order.technician_id is None) == (order.status.value == "Open")
