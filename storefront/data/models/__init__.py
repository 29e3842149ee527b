#import wszystkich modeli żeby SQLAlchemy je zarejestrował w base metadata

from storefront.data.models.product import ProductModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.user import UserModel

__all__ = ["UserModel", "ProductModel", "CartModel", "CartItemModel", "OrderModel", "OrderItemModel"]
