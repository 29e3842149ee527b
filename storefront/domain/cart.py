# storefront/domain/cart.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from storefront.domain.errors import CartItemNotFound


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartItem:
    id: str
    product_id: str
    quantity: int
    price: Decimal  # cena z chwili dodania, później nie jest odświeżana


@dataclass
class Cart:
    """
    Koszyk jednego użytkownika.
    -max jeden item na product_id (ponowne dodanie zwiększa ilość)
    -zapis zawsze podmienia całą listę itemów
    """

    id: str
    user_id: str
    items: List[CartItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def _find(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_item(self, item: CartItem) -> None:
        existing = self._find(item.product_id)
        if existing:
            # cena zostaje ta z pierwszego dodania
            existing.quantity += item.quantity
        else:
            self.items.append(item)
        self.updated_at = _now()

    def remove_item(self, product_id: str) -> None:
        existing = self._find(product_id)
        if not existing:
            raise CartItemNotFound(product_id)
        self.items.remove(existing)
        self.updated_at = _now()

    def update_quantity(self, product_id: str, quantity: int) -> None:
        existing = self._find(product_id)
        if not existing:
            raise CartItemNotFound(product_id)
        existing.quantity = quantity
        self.updated_at = _now()

    def clear(self) -> None:
        self.items = []
        self.updated_at = _now()

    def total(self) -> Decimal:
        return sum((i.price * i.quantity for i in self.items), Decimal("0.00"))

    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)

    def is_empty(self) -> bool:
        return not self.items
