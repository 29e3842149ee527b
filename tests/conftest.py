import copy
import os
import threading
import uuid
from decimal import Decimal
from pathlib import Path

import pytest

# przed importem storefront.data.database (engine tworzony przy imporcie)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.data.database import Base
from storefront.domain.cart import Cart, CartItem
from storefront.domain.errors import (
    CartNotFound,
    InfrastructureError,
    OrderNotFound,
    ProductNotFound,
    UserAlreadyExists,
)
from storefront.domain.product import Product


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))
        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)


# ---------------------------------------------------------------------------
# In-memory stores
# ---------------------------------------------------------------------------
class InMemoryProductStore:
    def __init__(self):
        self.rows = {}
        self.lock = threading.Lock()

    def get_by_id(self, product_id):
        row = self.rows.get(product_id)
        return copy.deepcopy(row) if row else None

    def get_by_ids(self, product_ids):
        return [copy.deepcopy(self.rows[i]) for i in dict.fromkeys(product_ids) if i in self.rows]

    def list(self):
        return [copy.deepcopy(p) for p in self.rows.values()]

    def create(self, product):
        self.rows[product.id] = copy.deepcopy(product)
        return product

    def update(self, product):
        if product.id not in self.rows:
            raise ProductNotFound(product.id)
        self.rows[product.id] = copy.deepcopy(product)
        return product

    def delete(self, product_id):
        if self.rows.pop(product_id, None) is None:
            raise ProductNotFound(product_id)

    def update_stock(self, product_id, stock):
        if product_id not in self.rows:
            raise ProductNotFound(product_id)
        self.rows[product_id].stock = stock


class InMemoryCartStore:
    def __init__(self):
        self.by_user = {}
        self.updates = 0
        self.fail_updates = False
        self.lock = threading.Lock()

    def get_by_user_id(self, user_id):
        cart = self.by_user.get(user_id)
        return copy.deepcopy(cart) if cart else None

    def create(self, cart):
        self.by_user[cart.user_id] = copy.deepcopy(cart)
        return cart

    def update(self, cart):
        if self.fail_updates:
            raise InfrastructureError("failed to update cart")
        if cart.user_id not in self.by_user:
            raise CartNotFound(cart.id)
        with self.lock:
            self.by_user[cart.user_id] = copy.deepcopy(cart)
            self.updates += 1
        return cart


class InMemoryOrderStore:
    def __init__(self):
        self.rows = {}
        self.fail_creates = False
        self.lock = threading.Lock()

    def create(self, order):
        if self.fail_creates:
            raise InfrastructureError("failed to create order")
        with self.lock:
            self.rows[order.id] = copy.deepcopy(order)
        return order

    def get_by_id(self, order_id):
        order = self.rows.get(order_id)
        return copy.deepcopy(order) if order else None

    def get_by_user_id(self, user_id):
        orders = [copy.deepcopy(o) for o in self.rows.values() if o.user_id == user_id]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def update(self, order):
        if order.id not in self.rows:
            raise OrderNotFound(order.id)
        self.rows[order.id] = copy.deepcopy(order)
        return order


class InMemoryUserStore:
    def __init__(self):
        self.rows = {}

    def get_by_id(self, user_id):
        row = self.rows.get(user_id)
        return copy.deepcopy(row) if row else None

    def get_by_email(self, email):
        for row in self.rows.values():
            if row.email == email:
                return copy.deepcopy(row)
        return None

    def list(self):
        return [copy.deepcopy(u) for u in self.rows.values()]

    def create(self, user):
        if self.get_by_email(user.email):
            raise UserAlreadyExists(user.email)
        self.rows[user.id] = copy.deepcopy(user)
        return user


class RecordingPublisher:
    def __init__(self, error=None):
        self.published = []
        self.error = error

    def publish_order_created(self, order):
        if self.error:
            raise self.error
        self.published.append(copy.deepcopy(order))


@pytest.fixture()
def user_store():
    return InMemoryUserStore()


@pytest.fixture()
def product_store():
    return InMemoryProductStore()


@pytest.fixture()
def cart_store():
    return InMemoryCartStore()


@pytest.fixture()
def order_store():
    return InMemoryOrderStore()


@pytest.fixture()
def publisher():
    return RecordingPublisher()


@pytest.fixture()
def make_product(product_store):
    def _make(name="Widget", price="10.00", stock=10):
        product = Product(id=str(uuid.uuid4()), name=name, price=Decimal(price), stock=stock)
        product_store.create(product)
        return product

    return _make


@pytest.fixture()
def fill_cart(cart_store):
    """Wkłada koszyk bezpośrednio do magazynu: [(product, qty, price), ...]."""

    def _fill(user_id, lines):
        cart = Cart(id=str(uuid.uuid4()), user_id=user_id)
        for product, quantity, price in lines:
            cart.add_item(
                CartItem(
                    id=str(uuid.uuid4()),
                    product_id=product.id,
                    quantity=quantity,
                    price=Decimal(price),
                )
            )
        cart_store.create(cart)
        return cart

    return _fill


# ---------------------------------------------------------------------------
# SQLite
# ---------------------------------------------------------------------------
@pytest.fixture()
def engine():
    import storefront.data.models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()
