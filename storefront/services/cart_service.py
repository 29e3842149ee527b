import uuid

from storefront.domain.cart import Cart, CartItem
from storefront.domain.errors import CartNotFound, ProductNotFound
from storefront.repos.base import CartStore, ProductStore
from storefront.services.stock_guard import StockGuard
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case dla domeny cart
    commands (add, remove, update, clear) modyfikują stan
    query (get) tylko odczyt
    Każda komenda zapisuje cały koszyk od nowa.
    """

    def __init__(self, carts: CartStore, products: ProductStore, stock_guard: StockGuard | None = None):
        self.carts = carts
        self.products = products
        self.stock_guard = stock_guard or StockGuard()

    #query - odczyt
    def get_cart(self, user_id: str) -> Cart | None:
        return self.carts.get_by_user_id(user_id)

    def get_or_create_cart(self, user_id: str) -> Cart:
        cart = self.carts.get_by_user_id(user_id)
        if cart:
            return cart

        #koszyk tworzony dopiero przy pierwszym dodaniu
        cart = Cart(id=str(uuid.uuid4()), user_id=user_id)
        created = self.carts.create(cart)
        logger.info(f"Utworzono nowy koszyk {created.id} dla użytkownika {user_id}")
        return created

    #commands
    def add_item(self, user_id: str, product_id: str, quantity: int) -> Cart:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        cart = self.get_or_create_cart(user_id)

        product = self.products.get_by_id(product_id)
        if not product:
            raise ProductNotFound(product_id)

        self.stock_guard.ensure(product, quantity)

        # cena zapisana w chwili dodania
        cart.add_item(
            CartItem(
                id=str(uuid.uuid4()),
                product_id=product_id,
                quantity=quantity,
                price=product.price,
            )
        )
        self.carts.update(cart)

        logger.info(f"Produkt {product_id} (x{quantity}) dodany do koszyka {cart.id}")
        return cart

    def remove_item(self, user_id: str, product_id: str) -> Cart:
        cart = self._require_cart(user_id)
        cart.remove_item(product_id)
        self.carts.update(cart)

        logger.info(f"Produkt {product_id} usunięty z koszyka {cart.id}")
        return cart

    def update_item_quantity(self, user_id: str, product_id: str, quantity: int) -> Cart:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        cart = self._require_cart(user_id)

        product = self.products.get_by_id(product_id)
        if not product:
            raise ProductNotFound(product_id)

        self.stock_guard.ensure(product, quantity)

        cart.update_quantity(product_id, quantity)
        self.carts.update(cart)
        return cart

    def clear_cart(self, user_id: str) -> Cart:
        cart = self._require_cart(user_id)
        cart.clear()
        self.carts.update(cart)

        logger.info(f"Koszyk {cart.id} wyczyszczony")
        return cart

    def _require_cart(self, user_id: str) -> Cart:
        cart = self.carts.get_by_user_id(user_id)
        if not cart:
            raise CartNotFound()
        return cart
