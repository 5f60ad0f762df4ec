"""
Catalog Lookup

Read-only resolution of customers, restaurants and products by id.
Misses raise NotFoundError naming the entity kind the way clients
see it ("Cliente", "Restaurante", "Produto").
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from delivery_api.core.exceptions import NotFoundError
from delivery_api.models import Customer, Product, Restaurant

logger = logging.getLogger(__name__)


class CatalogLookup:
    """
    Resolves catalog entities for a single request.

    Every call issues its own query; a product requested twice is
    resolved twice.
    """

    CUSTOMER = "Cliente"
    RESTAURANT = "Restaurante"
    PRODUCT = "Produto"

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _resolve(self, model: Any, kind: str, entity_id: int) -> Any:
        result = await self.session.execute(select(model).where(model.id == entity_id))
        entity = result.scalar_one_or_none()

        if entity is None:
            logger.info(f"{kind} #{entity_id} not found")
            raise NotFoundError(kind, entity_id)

        return entity

    async def resolve_customer(self, customer_id: int) -> Customer:
        return await self._resolve(Customer, self.CUSTOMER, customer_id)

    async def resolve_restaurant(self, restaurant_id: int) -> Restaurant:
        return await self._resolve(Restaurant, self.RESTAURANT, restaurant_id)

    async def resolve_product(self, product_id: int) -> Product:
        return await self._resolve(Product, self.PRODUCT, product_id)

    async def list_products(self, restaurant_id: int) -> list[Product]:
        """
        List a restaurant's products ordered by id.

        Raises:
            NotFoundError: If the restaurant does not exist
        """
        await self.resolve_restaurant(restaurant_id)

        result = await self.session.execute(
            select(Product)
            .where(Product.restaurant_id == restaurant_id)
            .order_by(Product.id)
        )
        return list(result.scalars().all())
