"""
Immutable value objects passed into the ordering workflow.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DeliveryAddress:
    street: str
    number: str
    city: str
    state: str
    postal_code: str
    complement: Optional[str] = None
    neighborhood: Optional[str] = None


@dataclass(frozen=True)
class LineRequest:
    """One requested line: a product id and how many of it."""
    product_id: int
    quantity: int


@dataclass(frozen=True)
class PlaceOrderCommand:
    """
    Fully specified order request.

    Attributes:
        customer_id: Ordering customer
        restaurant_id: Restaurant the order is placed with
        delivery_address: Where the order goes
        items: Requested lines, in request order; duplicates are kept
    """
    customer_id: int
    restaurant_id: int
    delivery_address: DeliveryAddress
    items: tuple[LineRequest, ...]
