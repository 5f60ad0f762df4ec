"""
                        Services Module

Business logic of the ordering workflow.

Services:
    - catalog: Customer, restaurant and product lookup
    - assembler: Line items and total computation
    - lifecycle: Order status state machine
    - order_store: Atomic persistence of the order aggregate
    - order_service: End-to-end order placement
"""

from delivery_api.services.assembler import OrderAssembler, calculate_total
from delivery_api.services.catalog import CatalogLookup
from delivery_api.services.commands import DeliveryAddress, LineRequest, PlaceOrderCommand
from delivery_api.services.lifecycle import OrderLifecycle
from delivery_api.services.order_service import OrderService
from delivery_api.services.order_store import OrderStore

__all__ = [
    "CatalogLookup",
    "OrderAssembler",
    "calculate_total",
    "OrderLifecycle",
    "OrderStore",
    "OrderService",
    "DeliveryAddress",
    "LineRequest",
    "PlaceOrderCommand",
]
