"""Integration tests for the SQLAlchemy repositories on SQLite."""

import uuid
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.seed import seed
from storefront.domain.cart import Cart, CartItem
from storefront.domain.errors import (
    CartNotFound,
    InfrastructureError,
    OrderNotFound,
    ProductNotFound,
    UserAlreadyExists,
)
from storefront.domain.order import Order, OrderItem, OrderStatus
from storefront.domain.product import Product
from storefront.domain.user import User
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo


def _uid():
    return str(uuid.uuid4())


@pytest.fixture()
def products(db):
    repo = ProductRepo(db)
    created = [
        repo.create(Product(id=_uid(), name=name, price=Decimal(price), stock=10))
        for name, price in [("A", "10.00"), ("B", "5.00"), ("C", "1.25")]
    ]
    return created


def _cart_item(product, quantity, price=None):
    return CartItem(id=_uid(), product_id=product.id, quantity=quantity, price=price or product.price)


class TestProductRepo:
    def test_get_by_ids_skips_missing(self, db, products):
        found = ProductRepo(db).get_by_ids([products[0].id, "missing", products[0].id])
        assert [p.id for p in found] == [products[0].id]

    def test_get_by_ids_empty(self, db):
        assert ProductRepo(db).get_by_ids([]) == []

    def test_update_stock(self, db, products):
        repo = ProductRepo(db)
        repo.update_stock(products[1].id, 0)
        assert repo.get_by_id(products[1].id).stock == 0

    def test_missing_rows(self, db):
        repo = ProductRepo(db)
        assert repo.get_by_id("missing") is None
        with pytest.raises(ProductNotFound):
            repo.update_stock("missing", 1)
        with pytest.raises(ProductNotFound):
            repo.delete("missing")

    def test_price_round_trip_is_decimal(self, db, products):
        assert ProductRepo(db).get_by_id(products[2].id).price == Decimal("1.25")


class TestCartRepo:
    def test_create_and_load_keeps_item_order(self, db, products):
        a, b, c = products
        cart = Cart(id=_uid(), user_id="user-1")
        for product in (c, a, b):
            cart.add_item(_cart_item(product, 1))
        CartRepo(db).create(cart)

        loaded = CartRepo(db).get_by_user_id("user-1")
        assert [i.product_id for i in loaded.items] == [c.id, a.id, b.id]

    def test_update_replaces_item_set(self, db, products):
        a, b, c = products
        repo = CartRepo(db)
        cart = Cart(id=_uid(), user_id="user-1")
        cart.add_item(_cart_item(a, 1))
        cart.add_item(_cart_item(b, 1))
        repo.create(cart)

        cart = repo.get_by_user_id("user-1")
        cart.remove_item(a.id)
        cart.update_quantity(b.id, 4)
        cart.add_item(_cart_item(c, 2))
        repo.update(cart)

        loaded = repo.get_by_user_id("user-1")
        assert [(i.product_id, i.quantity) for i in loaded.items] == [(b.id, 4), (c.id, 2)]
        assert db.execute(select(func.count()).select_from(CartItemModel)).scalar_one() == 2

    def test_last_writer_wins(self, session_factory, products):
        a, b, _ = products
        setup = session_factory()
        CartRepo(setup).create(Cart(id=_uid(), user_id="user-1"))
        setup.close()

        first_db, second_db = session_factory(), session_factory()
        first = CartRepo(first_db).get_by_user_id("user-1")
        second = CartRepo(second_db).get_by_user_id("user-1")
        first.add_item(_cart_item(a, 1))
        second.add_item(_cart_item(b, 1))
        CartRepo(first_db).update(first)
        CartRepo(second_db).update(second)

        loaded = CartRepo(session_factory()).get_by_user_id("user-1")
        assert [i.product_id for i in loaded.items] == [b.id]

    def test_clear_keeps_cart_row(self, db, products):
        repo = CartRepo(db)
        cart = Cart(id=_uid(), user_id="user-1")
        cart.add_item(_cart_item(products[0], 1))
        repo.create(cart)

        cart.clear()
        repo.update(cart)

        loaded = repo.get_by_user_id("user-1")
        assert loaded is not None
        assert loaded.items == []

    def test_update_unknown_cart(self, db):
        with pytest.raises(CartNotFound):
            CartRepo(db).update(Cart(id="missing", user_id="user-x"))

    def test_one_cart_per_user(self, db):
        repo = CartRepo(db)
        repo.create(Cart(id=_uid(), user_id="user-1"))
        with pytest.raises(InfrastructureError):
            repo.create(Cart(id=_uid(), user_id="user-1"))


def _order(products, user_id="user-1"):
    a, b, _ = products
    items = [
        OrderItem(id=_uid(), product_id=a.id, quantity=2, price=Decimal("10.00")),
        OrderItem(id=_uid(), product_id=b.id, quantity=1, price=Decimal("5.00")),
    ]
    return Order(id=_uid(), user_id=user_id, items=items, total=Decimal("25.00"))


class TestOrderRepo:
    def test_create_and_load(self, db, products):
        order = OrderRepo(db).create(_order(products))

        loaded = OrderRepo(db).get_by_id(order.id)
        assert loaded.status == OrderStatus.PENDING
        assert loaded.total == Decimal("25.00")
        assert [(i.id, i.quantity, i.price) for i in loaded.items] == [
            (i.id, i.quantity, i.price) for i in order.items
        ]

    def test_create_is_atomic(self, db, products):
        order = _order(products)
        duplicate_id = order.items[0].id
        order.items[1] = OrderItem(
            id=duplicate_id, product_id=products[1].id, quantity=1, price=Decimal("5.00")
        )

        with pytest.raises(InfrastructureError):
            OrderRepo(db).create(order)

        assert db.execute(select(func.count()).select_from(OrderModel)).scalar_one() == 0
        assert db.execute(select(func.count()).select_from(OrderItemModel)).scalar_one() == 0

    def test_update_persists_status(self, db, products):
        repo = OrderRepo(db)
        order = repo.create(_order(products))
        order.mark_paid()
        repo.update(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.status == OrderStatus.PAID
        assert len(loaded.items) == 2

    def test_update_unknown_order(self, db, products):
        with pytest.raises(OrderNotFound):
            OrderRepo(db).update(_order(products))

    def test_get_by_user_id(self, db, products):
        repo = OrderRepo(db)
        mine = repo.create(_order(products, "user-1"))
        repo.create(_order(products, "user-2"))

        assert [o.id for o in repo.get_by_user_id("user-1")] == [mine.id]
        assert repo.get_by_user_id("nobody") == []


class TestSeed:
    def test_seeds_only_empty_catalog(self, db):
        assert seed(db) == 3
        assert seed(db) == 0
        assert {p.name for p in ProductRepo(db).list()} == {"Keyboard", "Mouse", "Monitor"}


def _user(email="ann@example.com"):
    return User(id=_uid(), name="Ann", email=email, password_hash="$2b$04$hash")


class TestUserRepo:
    def test_create_and_lookup(self, db):
        repo = UserRepo(db)
        user = repo.create(_user())

        assert repo.get_by_id(user.id).email == "ann@example.com"
        assert repo.get_by_email("ann@example.com").id == user.id
        assert repo.get_by_email("nobody@example.com") is None
        assert repo.get_by_id("missing") is None

    def test_unique_email(self, db):
        repo = UserRepo(db)
        repo.create(_user())

        with pytest.raises(UserAlreadyExists):
            repo.create(_user())
        assert len(repo.list()) == 1
