"""Integration tests for the AttachProduct use case."""

from datetime import datetime, timezone

import pytest

from servicedesk.application.attach_product import AttachProductHandler
from servicedesk.application.create_order import CreateOrderHandler
from servicedesk.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from servicedesk.domain.model.catalog import Client
from servicedesk.domain.model.product import Product
from servicedesk.domain.model.value_objects import Money
from tests.fakes import (
    FakeClientDirectory,
    FakeProductRepository,
    FakeServiceOrderRepository,
)


def _setup():
    order_repo = FakeServiceOrderRepository()
    product_repo = FakeProductRepository([
        Product(id="1", name="SSD 512GB", reference="SSD-512-INT", qty=5, cost=Money.of("50.00")),
        Product(id="3", name="Memoria RAM 8GB DDR4", reference="RAM-8GB-DDR4", qty=10,
                cost=Money.of("35.00"), min_qty=2),
    ])
    create = CreateOrderHandler(
        order_repo,
        FakeClientDirectory([Client(id="1", name="John Doe")]),
        clock=lambda: datetime(2026, 10, 18, tzinfo=timezone.utc),
    )
    dto = create.handle("1")
    return AttachProductHandler(order_repo, product_repo), order_repo, product_repo, dto.id


class TestAttachProductHappyPath:

    def test_stock_and_order_move_together(self):
        handler, order_repo, product_repo, order_id = _setup()
        before = product_repo.get_by_id("1").qty

        dto = handler.handle(order_id, "1", 3)

        assert product_repo.get_by_id("1").qty == before - 3
        assert len(dto.products) == 1
        assert dto.products[0].quantity == 3
        assert dto.products[0].unit_cost == "R$ 50.00"
        assert dto.products[0].line_total == "R$ 150.00"
        assert dto.parts_total == "R$ 150.00"
        assert len(order_repo.get_by_id(order_id).products) == 1

    def test_several_products(self):
        handler, _, product_repo, order_id = _setup()
        handler.handle(order_id, "1", 1)
        dto = handler.handle(order_id, "3", 2)

        assert [p.product_name for p in dto.products] == ["SSD 512GB", "Memoria RAM 8GB DDR4"]
        assert [p.id for p in dto.products] == [1, 2]
        assert dto.parts_total == "R$ 120.00"
        assert product_repo.get_by_id("3").qty == 8

    def test_open_order_accepts_parts(self):
        # attaching does not depend on the lifecycle status
        handler, _, _, order_id = _setup()
        assert handler.handle(order_id, "1", 1).status == "Open"


class TestAttachProductValidation:

    def test_insufficient_stock_leaves_both_unchanged(self):
        handler, order_repo, product_repo, order_id = _setup()
        handler.handle(order_id, "1", 3)

        with pytest.raises(InsufficientStockError):
            handler.handle(order_id, "1", 3)

        assert product_repo.get_by_id("1").qty == 2
        assert len(order_repo.get_by_id(order_id).products) == 1

    def test_unknown_product(self):
        handler, _, _, order_id = _setup()
        with pytest.raises(EntityNotFoundError, match="Product '42'"):
            handler.handle(order_id, "42", 1)

    def test_unknown_order(self):
        handler, _, product_repo, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="#999"):
            handler.handle(999, "1", 1)
        assert product_repo.get_by_id("1").qty == 5

    def test_zero_quantity(self):
        handler, _, product_repo, order_id = _setup()
        with pytest.raises(ValidationError):
            handler.handle(order_id, "1", 0)
        assert product_repo.get_by_id("1").qty == 5
