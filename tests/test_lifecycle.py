"""
Tests for the order status state machine.
"""

import pytest

from delivery_api.core.exceptions import InvalidStatusTransitionError
from delivery_api.models import Order, OrderStatus
from delivery_api.services.lifecycle import OrderLifecycle


def test_start_applies_initial_status():
    order = Order()
    OrderLifecycle().start(order)

    assert order.status == OrderStatus.CREATED
    assert len(order.status_history) == 1
    assert order.status_history[0].from_status is None
    assert order.status_history[0].to_status == OrderStatus.CREATED


def test_start_twice_is_rejected():
    lifecycle = OrderLifecycle()
    order = Order()
    lifecycle.start(order)

    with pytest.raises(InvalidStatusTransitionError):
        lifecycle.start(order)
    assert len(order.status_history) == 1


def test_created_is_terminal():
    lifecycle = OrderLifecycle()
    assert lifecycle.is_terminal(OrderStatus.CREATED)
    assert not lifecycle.can_transition(OrderStatus.CREATED, OrderStatus.CREATED)


def test_transition_not_in_table_is_rejected():
    lifecycle = OrderLifecycle()
    order = Order()
    lifecycle.start(order)

    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        lifecycle.transition(order, OrderStatus.CREATED)

    assert exc_info.value.status_code == 409
    assert order.status == OrderStatus.CREATED
    assert len(order.status_history) == 1


def test_extended_table_allows_transition():
    class TwoStepLifecycle(OrderLifecycle):
        TRANSITIONS = {OrderStatus.CREATED: frozenset({OrderStatus.CREATED})}

    lifecycle = TwoStepLifecycle()
    order = Order()
    lifecycle.start(order)
    lifecycle.transition(order, OrderStatus.CREATED)

    assert [c.from_status for c in order.status_history] == [None, OrderStatus.CREATED]


def test_transition_before_start_is_rejected():
    order = Order()

    with pytest.raises(InvalidStatusTransitionError):
        OrderLifecycle().transition(order, OrderStatus.CREATED)

    assert order.status is None
    assert order.status_history == []
