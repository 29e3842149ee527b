"""Tests for the Order state machine: guarded transitions, unguarded completion and the admin override."""

from decimal import Decimal

import pytest
from storefront.domain.errors import InvalidOrderState
from storefront.domain.order import Order, OrderItem, OrderStatus


def _order(status=OrderStatus.PENDING):
    order = Order(
        id="ord-001",
        user_id="user-001",
        items=[OrderItem(id="oi-1", product_id="prod-a", quantity=2, price=Decimal("10.00"))],
        total=Decimal("20.00"),
    )
    order.status = status
    return order


ALL_STATUSES = list(OrderStatus)


def test_new_order_is_pending():
    assert _order().status == OrderStatus.PENDING


class TestMarkPaid:
    def test_from_pending(self):
        order = _order()
        order.mark_paid()
        assert order.status == OrderStatus.PAID

    def test_paying_twice_fails(self):
        order = _order()
        order.mark_paid()
        with pytest.raises(InvalidOrderState) as exc:
            order.mark_paid()
        assert exc.value.current == OrderStatus.PAID
        assert exc.value.target == OrderStatus.PAID

    @pytest.mark.parametrize("status", [s for s in ALL_STATUSES if s != OrderStatus.PENDING])
    def test_rejected_from_other_states(self, status):
        order = _order(status)
        with pytest.raises(InvalidOrderState):
            order.mark_paid()
        assert order.status == status


class TestMarkShipped:
    def test_from_paid(self):
        order = _order(OrderStatus.PAID)
        order.mark_shipped()
        assert order.status == OrderStatus.SHIPPED

    @pytest.mark.parametrize("status", [s for s in ALL_STATUSES if s != OrderStatus.PAID])
    def test_rejected_from_other_states(self, status):
        with pytest.raises(InvalidOrderState):
            _order(status).mark_shipped()


class TestMarkCompleted:
    @pytest.mark.parametrize("status", ALL_STATUSES)
    def test_has_no_predecessor_guard(self, status):
        order = _order(status)
        order.mark_completed()
        assert order.status == OrderStatus.COMPLETED


class TestCancel:
    @pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.PAID])
    def test_allowed(self, status):
        order = _order(status)
        assert order.can_be_cancelled()
        order.cancel()
        assert order.status == OrderStatus.CANCELLED

    @pytest.mark.parametrize(
        "status", [OrderStatus.SHIPPED, OrderStatus.COMPLETED, OrderStatus.CANCELLED]
    )
    def test_rejected(self, status):
        order = _order(status)
        assert not order.can_be_cancelled()
        with pytest.raises(InvalidOrderState):
            order.cancel()


class TestSetStatus:
    @pytest.mark.parametrize("current", ALL_STATUSES)
    @pytest.mark.parametrize("target", ALL_STATUSES)
    def test_moves_anywhere(self, current, target):
        order = _order(current)
        order.set_status(target)
        assert order.status == target

    def test_accepts_raw_value(self):
        order = _order(OrderStatus.CANCELLED)
        order.set_status("pending")
        assert order.status == OrderStatus.PENDING

    def test_rejects_unknown_status(self):
        with pytest.raises(ValueError):
            _order().set_status("lost")


def test_predicates_follow_the_guards():
    order = _order()
    assert order.can_be_paid()
    assert not order.can_be_shipped()
    order.mark_paid()
    assert not order.can_be_paid()
    assert order.can_be_shipped()


def test_item_count():
    assert _order().item_count() == 2
