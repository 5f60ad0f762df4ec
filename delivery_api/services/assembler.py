"""
Order Assembler

Turns resolved collaborators and requested lines into an unsaved order
aggregate. Unit prices are read from the catalog exactly once, when
each line is built, and the total is the exact Decimal sum of the line
subtotals.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from delivery_api.core.config import Settings, get_settings
from delivery_api.core.exceptions import ValidationError
from delivery_api.models import Customer, Order, OrderItem, Product, Restaurant
from delivery_api.services.catalog import CatalogLookup
from delivery_api.services.commands import DeliveryAddress, LineRequest
from delivery_api.services.lifecycle import OrderLifecycle

logger = logging.getLogger(__name__)

# Largest value the orders.total column (Numeric(12, 2)) holds
MAX_ORDER_TOTAL = Decimal("9999999999.99")


def calculate_total(items: Iterable[OrderItem]) -> Decimal:
    """Sum of line subtotals, starting from an exact zero."""
    return sum((item.subtotal for item in items), Decimal("0"))


class OrderAssembler:
    """
    Builds order aggregates.

    Attributes:
        catalog: Lookup used to resolve each requested product
        lifecycle: Applies the initial status
        settings: Supplies the optional availability/restaurant checks
    """

    def __init__(
        self,
        catalog: CatalogLookup,
        lifecycle: Optional[OrderLifecycle] = None,
        settings: Optional[Settings] = None,
    ):
        self.catalog = catalog
        self.lifecycle = lifecycle or OrderLifecycle()
        self.settings = settings or get_settings()

    async def assemble(
        self,
        customer: Customer,
        restaurant: Restaurant,
        address: DeliveryAddress,
        lines: Iterable[LineRequest],
    ) -> Order:
        """
        Assemble an order.

        Any product that fails to resolve aborts the whole order; nothing
        has been written at that point.

        Raises:
            NotFoundError: A requested product does not exist
            ValidationError: A line violates an enabled ordering policy,
                or the total exceeds what an order can store
        """
        items = []
        for position, line in enumerate(lines):
            product = await self.catalog.resolve_product(line.product_id)
            self._check_policy(product, restaurant)
            items.append(self._build_item(position, product, line.quantity))

        order = Order(
            customer_id=customer.id,
            restaurant_id=restaurant.id,
            delivery_street=address.street,
            delivery_number=address.number,
            delivery_complement=address.complement,
            delivery_neighborhood=address.neighborhood,
            delivery_city=address.city,
            delivery_state=address.state,
            delivery_postal_code=address.postal_code,
            total=calculate_total(items),
            items=items,
        )
        if order.total > MAX_ORDER_TOTAL:
            raise ValidationError(
                f"Total do pedido excede o limite de {MAX_ORDER_TOTAL}",
                details={"total": str(order.total)},
            )
        self.lifecycle.start(order)

        logger.debug(
            f"Assembled order for customer #{customer.id} at restaurant "
            f"#{restaurant.id}: {len(items)} line(s), total {order.total}"
        )
        return order

    def _build_item(self, position: int, product: Product, quantity: int) -> OrderItem:
        if quantity < 1:
            raise ValidationError(
                "A quantidade deve ser pelo menos 1",
                details={f"items[{position}].quantity": str(quantity)},
            )

        logger.debug(f"Line {position}: product #{product.id} x{quantity} @ {product.price}")
        return OrderItem(
            position=position,
            product_id=product.id,
            product=product,
            quantity=quantity,
            unit_price=product.price,
        )

    def _check_policy(self, product: Product, restaurant: Restaurant) -> None:
        if not product.available:
            if self.settings.enforce_product_availability:
                raise ValidationError(
                    f"Produto com ID {product.id} indisponível",
                    details={"product_id": str(product.id)},
                )
            logger.warning(f"Product #{product.id} is unavailable but was ordered")

        if product.restaurant_id != restaurant.id:
            if self.settings.enforce_restaurant_match:
                raise ValidationError(
                    f"Produto com ID {product.id} não pertence ao restaurante {restaurant.id}",
                    details={"product_id": str(product.id)},
                )
            logger.warning(
                f"Product #{product.id} belongs to restaurant #{product.restaurant_id}, "
                f"ordered from restaurant #{restaurant.id}"
            )
