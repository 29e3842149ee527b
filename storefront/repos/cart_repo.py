# storefront/repos/cart_repo.py
from datetime import datetime, timezone

from sqlalchemy import delete, insert, select, update
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.cart import Cart, CartItem
from storefront.domain.errors import CartNotFound
from storefront.repos.transaction import atomic, reading


def _to_entity(row: CartModel) -> Cart:
    return Cart(
        id=row.id,
        user_id=row.user_id,
        items=[
            CartItem(id=i.id, product_id=i.product_id, quantity=i.quantity, price=i.price)
            for i in row.items
        ],
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _item_rows(cart: Cart) -> list[dict]:
    now = datetime.now(timezone.utc)
    return [
        {
            "id": item.id,
            "cart_id": cart.id,
            "product_id": item.product_id,
            "quantity": item.quantity,
            "price": item.price,
            "position": pos,
            "created_at": now,
        }
        for pos, item in enumerate(cart.items)
    ]


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user_id(self, user_id: str) -> Cart | None:
        with reading("get cart"):
            row = self.db.execute(
                select(CartModel)
                .where(CartModel.user_id == user_id)
                .options(selectinload(CartModel.items))
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()
            return _to_entity(row) if row else None

    def create(self, cart: Cart) -> Cart:
        with atomic(self.db, "create cart"):
            self.db.execute(
                insert(CartModel).values(
                    id=cart.id,
                    user_id=cart.user_id,
                    created_at=cart.created_at,
                    updated_at=cart.updated_at,
                )
            )
            rows = _item_rows(cart)
            if rows:
                self.db.execute(insert(CartItemModel), rows)
        return cart

    def update(self, cart: Cart) -> Cart:
        """
        Podmienia cały koszyk: wiersz rodzica + wszystkie itemy w jednej transakcji.
        Bez wersji, równoległy zapis może nadpisać itemy innego writera.
        """
        cart.updated_at = datetime.now(timezone.utc)

        with atomic(self.db, "update cart"):
            result = self.db.execute(
                update(CartModel)
                .where(CartModel.id == cart.id)
                .values(updated_at=cart.updated_at)
            )
            if result.rowcount == 0:
                raise CartNotFound(cart.id)

            #najpierw delete, potem insert całej listy
            self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart.id))
            rows = _item_rows(cart)
            if rows:
                self.db.execute(insert(CartItemModel), rows)
        return cart
