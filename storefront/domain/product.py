# storefront/domain/product.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """Produkt z katalogu. Stan magazynowy nigdy nie schodzi poniżej zera."""

    id: str
    name: str
    price: Decimal
    stock: int
    description: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def set_stock(self, stock: int) -> None:
        if stock < 0:
            raise ValueError("Stock cannot be negative")
        self.stock = stock
        self.updated_at = _now()
