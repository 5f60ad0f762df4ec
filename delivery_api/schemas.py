"""
Pydantic Schemas for Request/Response Validation

Request bodies are converted into the immutable service commands in
delivery_api.services.commands; responses are rendered from the
persisted order aggregate.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from delivery_api.models import Order, OrderItem
from delivery_api.services.commands import DeliveryAddress, LineRequest, PlaceOrderCommand

# Largest value an INTEGER id column holds
MAX_ID = 2_147_483_647
MAX_QUANTITY = 999


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class DeliveryAddressSchema(BaseModel):
    """Structured delivery address."""
    street: str = Field(..., min_length=1, max_length=255, examples=["Rua das Flores"])
    number: str = Field(..., min_length=1, max_length=20, examples=["123"])
    complement: Optional[str] = Field(None, max_length=100, examples=["Apto 42"])
    neighborhood: Optional[str] = Field(None, max_length=100, examples=["Centro"])
    city: str = Field(..., min_length=1, max_length=100, examples=["São Paulo"])
    state: str = Field(..., min_length=2, max_length=50, examples=["SP"])
    postal_code: str = Field(..., min_length=1, max_length=20, examples=["01001-000"])

    def to_value(self) -> DeliveryAddress:
        return DeliveryAddress(**self.model_dump())


class OrderItemCreate(BaseModel):
    """
    Single requested line. Any price sent by the client is ignored;
    the unit price always comes from the catalog.
    """
    product_id: int = Field(..., gt=0, le=MAX_ID, examples=[100])
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY, examples=[2])


class OrderCreate(BaseModel):
    """Request schema for creating a new order."""
    customer_id: int = Field(..., gt=0, le=MAX_ID, examples=[1])
    restaurant_id: int = Field(..., gt=0, le=MAX_ID, examples=[10])
    delivery_address: DeliveryAddressSchema
    items: List[OrderItemCreate] = Field(..., min_length=1)

    def to_command(self) -> PlaceOrderCommand:
        return PlaceOrderCommand(
            customer_id=self.customer_id,
            restaurant_id=self.restaurant_id,
            delivery_address=self.delivery_address.to_value(),
            items=tuple(
                LineRequest(product_id=item.product_id, quantity=item.quantity)
                for item in self.items
            ),
        )


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class OrderItemResponse(BaseModel):
    """Resolved line item."""
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

    @classmethod
    def from_item(cls, item: OrderItem) -> "OrderItemResponse":
        return cls(
            product_id=item.product_id,
            product_name=item.product.name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
        )


class OrderResponse(BaseModel):
    """Response schema for a single order aggregate."""
    id: int
    customer_id: int
    restaurant_id: int
    delivery_address: DeliveryAddressSchema
    total: Decimal
    status: str
    created_at: Optional[datetime]
    items: List[OrderItemResponse]

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            restaurant_id=order.restaurant_id,
            delivery_address=DeliveryAddressSchema(
                street=order.delivery_street,
                number=order.delivery_number,
                complement=order.delivery_complement,
                neighborhood=order.delivery_neighborhood,
                city=order.delivery_city,
                state=order.delivery_state,
                postal_code=order.delivery_postal_code,
            ),
            total=order.total,
            status=order.status.value,
            created_at=order.created_at,
            items=[OrderItemResponse.from_item(item) for item in order.items],
        )


class ProductResponse(BaseModel):
    """Catalog view of a product."""
    id: int
    name: str
    category: Optional[str]
    description: Optional[str]
    price: Decimal
    available: bool

    class Config:
        from_attributes = True


class ErrorResponse(BaseModel):
    """Standard error response."""
    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    details: Optional[dict[str, str]] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    service: str
    timestamp: datetime


class InfoResponse(BaseModel):
    """Application information."""
    application: str
    version: str
    developer: str
    environment: str
    framework: str
