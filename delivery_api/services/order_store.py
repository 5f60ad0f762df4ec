"""
Order Store

Persists and loads the order aggregate (header, line items, status
history) as one unit.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from delivery_api.core.exceptions import NotFoundError, PersistenceError
from delivery_api.models import Order, OrderItem

logger = logging.getLogger(__name__)


class OrderStore:
    """
    Transactional storage for orders.

    `create` commits the header and every line item together or not at
    all. `find_by_id` returns what was stored; totals are never
    recomputed on read.
    """

    ENTITY_KIND = "Pedido"

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, order: Order) -> Order:
        """
        Persist a fully assembled order.

        Raises:
            PersistenceError: On any storage failure; the transaction is
                rolled back and no part of the order is visible
        """
        try:
            self.session.add(order)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Failed to persist order: {e}")
            raise PersistenceError("Não foi possível salvar o pedido") from e

        logger.info(f"Order #{order.id} persisted with {len(order.items)} line(s)")
        return await self.find_by_id(order.id)

    async def find_by_id(self, order_id: int) -> Order:
        """
        Load an order with its line items, their products and its status
        history.

        Raises:
            NotFoundError: If no order has this id
        """
        result = await self.session.execute(
            select(Order)
            .where(Order.id == order_id)
            .options(
                selectinload(Order.items).selectinload(OrderItem.product),
                selectinload(Order.status_history),
            )
            .execution_options(populate_existing=True)
        )
        order = result.scalar_one_or_none()

        if order is None:
            raise NotFoundError(self.ENTITY_KIND, order_id)

        return order
