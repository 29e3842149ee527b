# storefront/domain/order.py
"""
Zamówienie i jego maszyna stanów.

    pending -> paid -> shipped -> completed
    pending, paid -> cancelled

Przejścia strzeżone są opisane tabelą _ALLOWED_FROM (docelowy status ->
dozwolone statusy źródłowe). mark_completed nie ma strażnika, a set_status
to administracyjne obejście, które pozwala ustawić dowolny status.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List

from storefront.domain.errors import InvalidOrderState


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


_ALLOWED_FROM = {
    OrderStatus.PAID: {OrderStatus.PENDING},
    OrderStatus.SHIPPED: {OrderStatus.PAID},
    OrderStatus.CANCELLED: {OrderStatus.PENDING, OrderStatus.PAID},
}


@dataclass(frozen=True)
class OrderItem:
    id: str
    product_id: str
    quantity: int
    price: Decimal


@dataclass
class Order:
    id: str
    user_id: str
    items: List[OrderItem]
    total: Decimal
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def _can_move_to(self, target: OrderStatus) -> bool:
        return self.status in _ALLOWED_FROM[target]

    def _transition(self, target: OrderStatus) -> None:
        if not self._can_move_to(target):
            raise InvalidOrderState(self.status, target)
        self.status = target
        self.updated_at = _now()

    def can_be_paid(self) -> bool:
        return self._can_move_to(OrderStatus.PAID)

    def can_be_shipped(self) -> bool:
        return self._can_move_to(OrderStatus.SHIPPED)

    def can_be_cancelled(self) -> bool:
        return self._can_move_to(OrderStatus.CANCELLED)

    def mark_paid(self) -> None:
        self._transition(OrderStatus.PAID)

    def mark_shipped(self) -> None:
        self._transition(OrderStatus.SHIPPED)

    def mark_completed(self) -> None:
        # bez strażnika, działa z każdego statusu
        self.status = OrderStatus.COMPLETED
        self.updated_at = _now()

    def cancel(self) -> None:
        self._transition(OrderStatus.CANCELLED)

    def set_status(self, status: OrderStatus) -> None:
        """Nadpisanie administracyjne, omija strażników przejść."""
        self.status = OrderStatus(status)
        self.updated_at = _now()

    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)
