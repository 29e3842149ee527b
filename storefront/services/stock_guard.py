# storefront/services/stock_guard.py
from storefront.domain.errors import InsufficientStock
from storefront.domain.product import Product


class StockGuard:
    """
    Sprawdzenie czy produkt ma wystarczający stan.
    Tylko odczyt: nic nie rezerwuje i nic nie zmniejsza.
    """

    @staticmethod
    def ensure(product: Product, quantity: int) -> None:
        if not product.has_stock(quantity):
            raise InsufficientStock(
                product_id=product.id,
                product_name=product.name,
                requested=quantity,
                available=product.stock,
            )
