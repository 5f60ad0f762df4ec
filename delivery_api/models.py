"""
SQLAlchemy Database Models

Catalog (customers, restaurants, products) and the order aggregate
(order header, line items, status history).

References between tables are plain foreign keys. Relationships are
one-directional and declared lazy="raise": aggregates are loaded by
explicit eager queries, never by implicit attribute traversal.
"""

import enum
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from delivery_api.database import Base


class OrderStatus(str, enum.Enum):
    """
    Order status workflow.

    Only the initial state exists for now; see
    delivery_api.services.lifecycle for the transition table.
    """
    CREATED = "CREATED"


# =============================================================================
# CATALOG
# =============================================================================

class Customer(Base):
    """Registered customer. Soft-disabled through `active`, never deleted."""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Customer #{self.id} - {self.email}>"


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    category = Column(String(50), nullable=True, index=True)
    phone = Column(String(20), nullable=True)
    delivery_fee = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    delivery_time_minutes = Column(Integer, nullable=True)
    active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Restaurant #{self.id} - {self.name}>"


class Product(Base):
    """
    A restaurant's product. `price` is the only source of truth for
    order pricing.
    """
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_products_price_positive"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id"),
        nullable=False,
        index=True,
    )
    name = Column(String(100), nullable=False)
    category = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    available = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Product #{self.id} - {self.name} - {self.price}>"


# =============================================================================
# ORDER AGGREGATE
# =============================================================================

class Order(Base):
    """
    Order header.

    `total` is computed by the assembler from the line items and is
    never accepted from the caller.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)

    # =========================================================================
    # DELIVERY ADDRESS
    # =========================================================================
    delivery_street = Column(String(255), nullable=False)
    delivery_number = Column(String(20), nullable=False)
    delivery_complement = Column(String(100), nullable=True)
    delivery_neighborhood = Column(String(100), nullable=True)
    delivery_city = Column(String(100), nullable=False)
    delivery_state = Column(String(50), nullable=False)
    delivery_postal_code = Column(String(20), nullable=False)

    # =========================================================================
    # PRICING & STATUS
    # =========================================================================
    total = Column(Numeric(12, 2), nullable=False)
    status = Column(
        Enum(OrderStatus),
        default=OrderStatus.CREATED,
        nullable=False,
        index=True
    )

    # =========================================================================
    # TIMESTAMPS
    # =========================================================================
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "OrderItem",
        order_by="OrderItem.position",
        cascade="all, delete-orphan",
        lazy="raise",
    )
    status_history = relationship(
        "OrderStatusChange",
        order_by="OrderStatusChange.id",
        cascade="all, delete-orphan",
        lazy="raise",
    )

    def __repr__(self):
        status = self.status.value if self.status else None
        return f"<Order #{self.id} - customer {self.customer_id} - {self.total} - {status}>"


class OrderItem(Base):
    """
    Line item. `unit_price` is the product price captured when the order
    was assembled; there is no update path.
    """
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    position = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)  # snapshot at order time

    product = relationship("Product", lazy="raise")

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    def __repr__(self):
        return f"<OrderItem product={self.product_id} x{self.quantity} @ {self.unit_price}>"


class OrderStatusChange(Base):
    """One applied lifecycle transition; `from_status` is NULL for the initial one."""
    __tablename__ = "order_status_changes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    from_status = Column(Enum(OrderStatus), nullable=True)
    to_status = Column(Enum(OrderStatus), nullable=False)
    changed_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        src = self.from_status.value if self.from_status else None
        return f"<OrderStatusChange {src} -> {self.to_status.value}>"
