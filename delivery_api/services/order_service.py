"""
Order Placement Service

Runs the ordering workflow for one request:

    validate -> resolve customer & restaurant -> assemble -> persist

Every error aborts the attempt before anything is written, except
storage failures, which are rolled back by the store.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from delivery_api.core.config import Settings
from delivery_api.core.exceptions import ValidationError
from delivery_api.models import Order
from delivery_api.services.assembler import OrderAssembler
from delivery_api.services.catalog import CatalogLookup
from delivery_api.services.commands import PlaceOrderCommand
from delivery_api.services.lifecycle import OrderLifecycle
from delivery_api.services.order_store import OrderStore

logger = logging.getLogger(__name__)


class OrderService:
    """
    Facade over catalog, assembler and store.

    Example:
        >>> service = OrderService.for_session(db)
        >>> order = await service.place_order(command)
        >>> print(order.total)
    """

    def __init__(
        self,
        catalog: CatalogLookup,
        assembler: OrderAssembler,
        store: OrderStore,
    ):
        self.catalog = catalog
        self.assembler = assembler
        self.store = store

    @classmethod
    def for_session(
        cls,
        session: AsyncSession,
        settings: Optional[Settings] = None,
    ) -> "OrderService":
        """Wire the default collaborators around one database session."""
        catalog = CatalogLookup(session)
        return cls(
            catalog=catalog,
            assembler=OrderAssembler(catalog, OrderLifecycle(), settings),
            store=OrderStore(session),
        )

    async def place_order(self, command: PlaceOrderCommand) -> Order:
        """
        Create an order.

        Raises:
            ValidationError: If the request has no items
            NotFoundError: If the customer, restaurant or a product is missing
            PersistenceError: If the order could not be stored
        """
        if not command.items:
            raise ValidationError(
                "O pedido deve ter pelo menos 1 item",
                details={"items": "O pedido deve ter pelo menos 1 item"},
            )

        logger.info(
            f"Placing order: customer #{command.customer_id}, "
            f"restaurant #{command.restaurant_id}, {len(command.items)} line(s)"
        )

        customer = await self.catalog.resolve_customer(command.customer_id)
        restaurant = await self.catalog.resolve_restaurant(command.restaurant_id)

        order = await self.assembler.assemble(
            customer,
            restaurant,
            command.delivery_address,
            command.items,
        )
        return await self.store.create(order)

    async def get_order(self, order_id: int) -> Order:
        return await self.store.find_by_id(order_id)
