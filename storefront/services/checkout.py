# storefront/services/checkout.py
import uuid
from decimal import Decimal
from typing import List

from storefront.domain.errors import (
    EmptyCart,
    OrderNotFound,
    ProductNotFound,
    StorefrontError,
)
from storefront.domain.order import Order, OrderItem, OrderStatus
from storefront.repos.base import CartStore, OrderStore, ProductStore
from storefront.services.event_publisher import EventPublisher
from storefront.services.stock_guard import StockGuard
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutOrchestrator:
    """
    Zamiana koszyka w zamówienie oraz dalsze zmiany statusu zamówienia.

    create_order:
        1. koszyk użytkownika (pusty albo brak -> EmptyCart)
        2. produkty pobrane jednym zapytaniem
        3. walidacja: produkt istnieje, stan >= ilość (tylko sprawdzenie, stan nie jest zmniejszany)
        4. itemy zamówienia = kopia itemów koszyka z ceną z koszyka
        5. zapis zamówienia z itemami w jednej transakcji
        6. best-effort: zdarzenie order.created
        7. best-effort: czyszczenie koszyka
    Po udanym kroku 5 zawsze zwracamy zamówienie, błędy z 6 i 7 są tylko logowane.

    Checkout jako całość nie jest atomowy: zamówienie i koszyk to osobne
    transakcje. Jeśli czyszczenie koszyka się nie uda, ponowny checkout
    złoży te same pozycje jeszcze raz.
    """

    def __init__(
        self,
        carts: CartStore,
        products: ProductStore,
        orders: OrderStore,
        publisher: EventPublisher | None = None,
        stock_guard: StockGuard | None = None,
    ):
        self.carts = carts
        self.products = products
        self.orders = orders
        self.publisher = publisher
        self.stock_guard = stock_guard or StockGuard()

    #commands
    def create_order(self, user_id: str) -> Order:
        cart = self.carts.get_by_user_id(user_id)
        if cart is None or cart.is_empty():
            raise EmptyCart(user_id)

        product_ids = [item.product_id for item in cart.items]
        product_map = {p.id: p for p in self.products.get_by_ids(product_ids)}

        order_items: List[OrderItem] = []
        total = Decimal("0.00")

        for cart_item in cart.items:
            product = product_map.get(cart_item.product_id)
            if product is None:
                raise ProductNotFound(cart_item.product_id)

            self.stock_guard.ensure(product, cart_item.quantity)

            #cena z koszyka, nie aktualna cena produktu
            order_items.append(
                OrderItem(
                    id=str(uuid.uuid4()),
                    product_id=cart_item.product_id,
                    quantity=cart_item.quantity,
                    price=cart_item.price,
                )
            )
            total += cart_item.price * cart_item.quantity

        order = Order(
            id=str(uuid.uuid4()),
            user_id=user_id,
            items=order_items,
            total=total,
        )

        # błąd zapisu przerywa checkout i idzie do wywołującego
        created = self.orders.create(order)
        logger.info(
            f"Order {created.id} created for user {user_id}: "
            f"{len(created.items)} items, total {created.total}"
        )

        self._publish_created(created)
        self._clear_cart(cart)

        return created

    def pay_order(self, order_id: str) -> Order:
        order = self.get_order(order_id)
        order.mark_paid()
        return self._save(order)

    def ship_order(self, order_id: str) -> Order:
        order = self.get_order(order_id)
        order.mark_shipped()
        return self._save(order)

    def complete_order(self, order_id: str) -> Order:
        order = self.get_order(order_id)
        order.mark_completed()
        return self._save(order)

    def cancel_order(self, order_id: str) -> Order:
        order = self.get_order(order_id)
        order.cancel()
        return self._save(order)

    def update_order_status(self, order_id: str, status: OrderStatus | str) -> Order:
        """Administracyjna zmiana statusu, bez sprawdzania przejść."""
        status = OrderStatus(status)
        order = self.get_order(order_id)
        previous = order.status
        order.set_status(status)
        saved = self._save(order)
        logger.warning(f"Order {order_id} status overridden: {previous.value} -> {status.value}")
        return saved

    #query
    def get_order(self, order_id: str) -> Order:
        order = self.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def get_user_orders(self, user_id: str) -> List[Order]:
        return self.orders.get_by_user_id(user_id)

    def _save(self, order: Order) -> Order:
        saved = self.orders.update(order)
        logger.info(f"Order {order.id} saved with status {order.status.value}")
        return saved

    def _publish_created(self, order: Order) -> None:
        if self.publisher is None:
            return
        try:
            self.publisher.publish_order_created(order)
        except StorefrontError as e:
            logger.error(f"Failed to publish order event for {order.id}: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error publishing order event for {order.id}: {e}")

    def _clear_cart(self, cart) -> None:
        cart.clear()
        try:
            self.carts.update(cart)
        except StorefrontError as e:
            logger.error(f"Failed to clear cart {cart.id} after checkout: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error clearing cart {cart.id}: {e}")
