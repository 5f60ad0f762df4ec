"""
Order Status Lifecycle

Holds the order state machine. CREATED is the only state so far and it
is terminal; new states are added by extending OrderStatus and the
TRANSITIONS table, without touching pricing.
"""

import logging
from typing import Mapping, Optional

from delivery_api.core.exceptions import InvalidStatusTransitionError
from delivery_api.models import Order, OrderStatus, OrderStatusChange

logger = logging.getLogger(__name__)


class OrderLifecycle:
    """
    Applies status transitions to an order and records each one in its
    status history.

    Example:
        >>> lifecycle = OrderLifecycle()
        >>> lifecycle.start(order)
        >>> order.status
        <OrderStatus.CREATED: 'CREATED'>
    """

    INITIAL_STATUS = OrderStatus.CREATED

    TRANSITIONS: Mapping[OrderStatus, frozenset[OrderStatus]] = {
        OrderStatus.CREATED: frozenset(),
    }

    def allowed_transitions(self, current: OrderStatus) -> frozenset[OrderStatus]:
        return self.TRANSITIONS.get(current, frozenset())

    def can_transition(self, current: OrderStatus, target: OrderStatus) -> bool:
        return target in self.allowed_transitions(current)

    def is_terminal(self, status: OrderStatus) -> bool:
        return not self.allowed_transitions(status)

    def start(self, order: Order) -> None:
        """Put a new order in its initial state."""
        if order.status is not None:
            raise InvalidStatusTransitionError(order.status, self.INITIAL_STATUS)

        self._apply(order, None, self.INITIAL_STATUS)

    def transition(self, order: Order, target: OrderStatus) -> None:
        """
        Move an order to `target`.

        Raises:
            InvalidStatusTransitionError: If the table does not allow it
        """
        current = order.status
        if not self.can_transition(current, target):
            logger.warning(
                f"Rejected transition for order #{order.id}: "
                f"{getattr(current, 'value', current)} -> {target.value}"
            )
            raise InvalidStatusTransitionError(current, target)

        self._apply(order, current, target)

    def _apply(
        self,
        order: Order,
        current: Optional[OrderStatus],
        target: OrderStatus,
    ) -> None:
        order.status = target
        order.status_history.append(
            OrderStatusChange(from_status=current, to_status=target)
        )
