# storefront/repos/base.py
"""
Interfejsy magazynów per agregat.

Serwisy zależą tylko od tych protokołów, więc każdy silnik (SQLAlchemy,
pamięć w testach) może je zaimplementować. Zapis agregatu jest atomowy
dla wiersza rodzica i całej listy itemów; update podmienia całą listę
(ostatni zapis wygrywa, bez wersjonowania).
"""
from typing import List, Protocol, Sequence

from storefront.domain.cart import Cart
from storefront.domain.order import Order
from storefront.domain.product import Product
from storefront.domain.user import User


class CartStore(Protocol):
    def get_by_user_id(self, user_id: str) -> Cart | None: ...

    def create(self, cart: Cart) -> Cart: ...

    def update(self, cart: Cart) -> Cart: ...


class OrderStore(Protocol):
    def create(self, order: Order) -> Order: ...

    def get_by_id(self, order_id: str) -> Order | None: ...

    def get_by_user_id(self, user_id: str) -> List[Order]: ...

    def update(self, order: Order) -> Order: ...


class ProductStore(Protocol):
    def get_by_id(self, product_id: str) -> Product | None: ...

    def get_by_ids(self, product_ids: Sequence[str]) -> List[Product]: ...

    def list(self) -> List[Product]: ...

    def create(self, product: Product) -> Product: ...

    def update(self, product: Product) -> Product: ...

    def delete(self, product_id: str) -> None: ...

    def update_stock(self, product_id: str, stock: int) -> None: ...


class UserStore(Protocol):
    def get_by_id(self, user_id: str) -> User | None: ...

    def get_by_email(self, email: str) -> User | None: ...

    def list(self) -> List[User]: ...

    def create(self, user: User) -> User: ...
