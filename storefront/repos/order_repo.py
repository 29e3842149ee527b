# storefront/repos/order_repo.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import OrderNotFound
from storefront.domain.order import Order, OrderItem, OrderStatus
from storefront.repos.transaction import atomic, reading


def _to_entity(row: OrderModel) -> Order:
    return Order(
        id=row.id,
        user_id=row.user_id,
        items=[
            OrderItem(id=i.id, product_id=i.product_id, quantity=i.quantity, price=i.price)
            for i in row.items
        ],
        total=row.total,
        status=OrderStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _item_rows(order: Order) -> list[dict]:
    now = datetime.now(timezone.utc)
    return [
        {
            "id": item.id,
            "order_id": order.id,
            "product_id": item.product_id,
            "quantity": item.quantity,
            "price": item.price,
            "position": pos,
            "created_at": now,
        }
        for pos, item in enumerate(order.items)
    ]


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def _select(self):
        return (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .execution_options(populate_existing=True)
        )

    def create(self, order: Order) -> Order:
        #zamówienie i wszystkie itemy albo nic
        with atomic(self.db, "create order"):
            self.db.execute(
                insert(OrderModel).values(
                    id=order.id,
                    user_id=order.user_id,
                    total=order.total,
                    status=order.status.value,
                    created_at=order.created_at,
                    updated_at=order.updated_at,
                )
            )
            rows = _item_rows(order)
            if rows:
                self.db.execute(insert(OrderItemModel), rows)
        return order

    def get_by_id(self, order_id: str) -> Order | None:
        with reading("get order"):
            row = self.db.execute(
                self._select().where(OrderModel.id == order_id)
            ).scalar_one_or_none()
            return _to_entity(row) if row else None

    def get_by_user_id(self, user_id: str) -> List[Order]:
        with reading("get user orders"):
            rows = self.db.execute(
                self._select()
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars().all()
            return [_to_entity(r) for r in rows]

    def update(self, order: Order) -> Order:
        order.updated_at = datetime.now(timezone.utc)

        with atomic(self.db, "update order"):
            result = self.db.execute(
                update(OrderModel)
                .where(OrderModel.id == order.id)
                .values(total=order.total, status=order.status.value, updated_at=order.updated_at)
            )
            if result.rowcount == 0:
                raise OrderNotFound(order.id)

            self.db.execute(delete(OrderItemModel).where(OrderItemModel.order_id == order.id))
            rows = _item_rows(order)
            if rows:
                self.db.execute(insert(OrderItemModel), rows)
        return order
