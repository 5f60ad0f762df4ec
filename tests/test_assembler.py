"""
Tests for line-item construction and total computation.
"""

from decimal import Decimal

import pytest

from delivery_api.core.config import Settings
from delivery_api.core.exceptions import NotFoundError, ValidationError
from delivery_api.models import Customer, OrderItem, OrderStatus, Product, Restaurant
from delivery_api.services.assembler import MAX_ORDER_TOTAL, OrderAssembler, calculate_total
from delivery_api.services.commands import LineRequest
from tests.conftest import ADDRESS


class FakeCatalog:
    """In-memory product lookup that records every call."""

    def __init__(self, products):
        self.products = {p.id: p for p in products}
        self.calls = []

    async def resolve_product(self, product_id):
        self.calls.append(product_id)
        if product_id not in self.products:
            raise NotFoundError("Produto", product_id)
        return self.products[product_id]


CUSTOMER = Customer(id=1, name="Ana Souza", email="ana@example.com")
RESTAURANT = Restaurant(id=10, name="Pizzaria Bella")


def products():
    return [
        Product(id=100, restaurant_id=10, name="Pizza", price=Decimal("25.00"), available=True),
        Product(id=101, restaurant_id=10, name="Refrigerante", price=Decimal("10.50"), available=True),
        Product(id=102, restaurant_id=10, name="Pudim", price=Decimal("7.00"), available=False),
        Product(id=103, restaurant_id=10, name="Bala", price=Decimal("0.10"), available=True),
        Product(id=104, restaurant_id=10, name="Banquete", price=Decimal("99999999.99"), available=True),
        Product(id=200, restaurant_id=20, name="Temaki", price=Decimal("12.00"), available=True),
    ]


def make_assembler(catalog, **policy):
    return OrderAssembler(catalog, settings=Settings(**policy))


def lines(*pairs):
    return [LineRequest(product_id=p, quantity=q) for p, q in pairs]


class TestCalculateTotal:

    def test_empty_is_exact_zero(self):
        assert calculate_total([]) == Decimal("0")

    def test_sums_subtotals(self):
        items = [
            OrderItem(quantity=2, unit_price=Decimal("25.00")),
            OrderItem(quantity=1, unit_price=Decimal("10.50")),
        ]
        assert calculate_total(items) == Decimal("60.50")

    def test_no_float_rounding(self):
        items = [OrderItem(quantity=3, unit_price=Decimal("0.10"))]
        assert calculate_total(items) == Decimal("0.30")


class TestOrderAssembler:

    @pytest.mark.asyncio
    async def test_builds_line_items_and_total(self):
        catalog = FakeCatalog(products())
        order = await make_assembler(catalog).assemble(
            CUSTOMER, RESTAURANT, ADDRESS, lines((100, 2), (101, 1))
        )

        assert order.total == Decimal("60.50")
        assert [i.product_id for i in order.items] == [100, 101]
        assert [i.unit_price for i in order.items] == [Decimal("25.00"), Decimal("10.50")]
        assert [i.subtotal for i in order.items] == [Decimal("50.00"), Decimal("10.50")]
        assert [i.position for i in order.items] == [0, 1]
        assert order.customer_id == 1
        assert order.restaurant_id == 10
        assert order.delivery_city == "São Paulo"
        assert order.status == OrderStatus.CREATED

    @pytest.mark.asyncio
    async def test_duplicate_products_stay_separate_lines(self):
        catalog = FakeCatalog(products())
        order = await make_assembler(catalog).assemble(
            CUSTOMER, RESTAURANT, ADDRESS, lines((100, 1), (100, 2))
        )

        assert catalog.calls == [100, 100]
        assert [i.quantity for i in order.items] == [1, 2]
        assert order.total == Decimal("75.00")

    @pytest.mark.asyncio
    async def test_price_is_snapshot(self):
        catalog = FakeCatalog(products())
        order = await make_assembler(catalog).assemble(
            CUSTOMER, RESTAURANT, ADDRESS, lines((100, 1))
        )

        catalog.products[100].price = Decimal("99.00")

        assert order.items[0].unit_price == Decimal("25.00")
        assert order.total == Decimal("25.00")

    @pytest.mark.asyncio
    async def test_exact_decimal_total(self):
        catalog = FakeCatalog(products())
        order = await make_assembler(catalog).assemble(
            CUSTOMER, RESTAURANT, ADDRESS, lines((103, 3), (103, 7))
        )
        assert order.total == Decimal("1.00")

    @pytest.mark.asyncio
    async def test_missing_product_aborts(self):
        catalog = FakeCatalog(products())

        with pytest.raises(NotFoundError) as exc_info:
            await make_assembler(catalog).assemble(
                CUSTOMER, RESTAURANT, ADDRESS, lines((100, 1), (999, 1), (101, 1))
            )

        assert exc_info.value.entity_kind == "Produto"
        assert exc_info.value.entity_id == 999
        assert "Produto com ID 999" in exc_info.value.message
        # Resolution stops at the first miss
        assert catalog.calls == [100, 999]

    @pytest.mark.asyncio
    async def test_zero_quantity_rejected(self):
        catalog = FakeCatalog(products())

        with pytest.raises(ValidationError):
            await make_assembler(catalog).assemble(
                CUSTOMER, RESTAURANT, ADDRESS, lines((100, 0))
            )

    @pytest.mark.asyncio
    async def test_unavailable_product_accepted_by_default(self):
        catalog = FakeCatalog(products())
        order = await make_assembler(catalog).assemble(
            CUSTOMER, RESTAURANT, ADDRESS, lines((102, 1))
        )
        assert order.total == Decimal("7.00")

    @pytest.mark.asyncio
    async def test_unavailable_product_rejected_when_enforced(self):
        catalog = FakeCatalog(products())

        with pytest.raises(ValidationError) as exc_info:
            await make_assembler(catalog, enforce_product_availability=True).assemble(
                CUSTOMER, RESTAURANT, ADDRESS, lines((102, 1))
            )
        assert exc_info.value.details == {"product_id": "102"}

    @pytest.mark.asyncio
    async def test_foreign_product_rejected_when_enforced(self):
        catalog = FakeCatalog(products())
        assembler = make_assembler(catalog, enforce_restaurant_match=True)

        with pytest.raises(ValidationError):
            await assembler.assemble(CUSTOMER, RESTAURANT, ADDRESS, lines((200, 1)))

    @pytest.mark.asyncio
    async def test_foreign_product_accepted_by_default(self):
        catalog = FakeCatalog(products())
        order = await make_assembler(catalog).assemble(
            CUSTOMER, RESTAURANT, ADDRESS, lines((200, 2))
        )
        assert order.total == Decimal("24.00")

    @pytest.mark.asyncio
    async def test_total_above_column_limit_rejected(self):
        catalog = FakeCatalog(products())

        with pytest.raises(ValidationError) as exc_info:
            await make_assembler(catalog).assemble(
                CUSTOMER, RESTAURANT, ADDRESS, lines((104, 999), (104, 999))
            )

        assert Decimal(exc_info.value.details["total"]) > MAX_ORDER_TOTAL
