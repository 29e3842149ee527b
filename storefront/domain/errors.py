# storefront/domain/errors.py
"""
Błędy domenowe sklepu.

Każdy błąd jest osobną klasą i każde wystąpienie to nowa instancja z
kontekstem (id, nazwa produktu, statusy), żadnych współdzielonych singletonów.

StorefrontError
    NotFound            -> 404
    AlreadyExists       -> 409
    ValidationFailed    -> 400  (kind: empty_cart, insufficient_stock, ...)
    InfrastructureError -> 503  (baza albo broker)
"""


class StorefrontError(Exception):
    pass


# NotFound
class NotFound(StorefrontError):
    entity = "resource"

    def __init__(self, entity_id: str | None = None):
        self.entity_id = entity_id
        if entity_id is None:
            super().__init__(f"{self.entity} not found")
        else:
            super().__init__(f"{self.entity} not found: {entity_id}")


class UserNotFound(NotFound):
    entity = "user"


class ProductNotFound(NotFound):
    entity = "product"


class CartNotFound(NotFound):
    entity = "cart"


class OrderNotFound(NotFound):
    entity = "order"


class AlreadyExists(StorefrontError):
    pass


class UserAlreadyExists(AlreadyExists):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"user already exists: {email}")


# Validation
class ValidationFailed(StorefrontError):
    kind = "validation"


class EmptyCart(ValidationFailed):
    kind = "empty_cart"

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("cart is empty")


class InsufficientStock(ValidationFailed):
    kind = "insufficient_stock"

    def __init__(self, product_id: str, product_name: str, requested: int, available: int):
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(f"insufficient stock for product: {product_name}")


class InvalidOrderState(ValidationFailed):
    kind = "invalid_order_state"

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"cannot move order from {current.value} to {target.value}")


class CartItemNotFound(ValidationFailed):
    kind = "cart_item_not_found"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"cart item not found: {product_id}")


class InfrastructureError(StorefrontError):
    """Awaria bazy albo brokera. Oryginalny wyjątek jest w __cause__."""
