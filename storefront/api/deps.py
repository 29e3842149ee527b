# storefront/api/deps.py
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import (
    AlreadyExists,
    InfrastructureError,
    NotFound,
    StorefrontError,
    ValidationFailed,
)
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.cart_service import CartService
from storefront.services.checkout import CheckoutOrchestrator
from storefront.services.event_publisher import EventPublisher, RedisStreamPublisher
from storefront.services.product_service import ProductService
from storefront.services.user_service import UserService
from storefront.utils.security import PasswordHasher

_publisher: EventPublisher | None = None
_hasher: PasswordHasher | None = None


def get_current_user_id(x_user_id: str = Header(..., min_length=1)) -> str:
    """Użytkownik jest już rozpoznany przez warstwę auth przed aplikacją."""
    return x_user_id


def get_publisher() -> EventPublisher:
    # jeden klient redis na proces (pula połączeń)
    global _publisher
    if _publisher is None:
        _publisher = RedisStreamPublisher()
    return _publisher


def get_password_hasher() -> PasswordHasher:
    global _hasher
    if _hasher is None:
        _hasher = PasswordHasher()
    return _hasher


def get_user_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(UserRepo(db), hasher)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(ProductRepo(db))


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(carts=CartRepo(db), products=ProductRepo(db))


def get_checkout(
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_publisher),
) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(
        carts=CartRepo(db),
        products=ProductRepo(db),
        orders=OrderRepo(db),
        publisher=publisher,
    )


def to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, AlreadyExists):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, ValidationFailed):
        return HTTPException(status_code=400, detail={"error": str(e), "kind": e.kind})
    if isinstance(e, InfrastructureError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, (StorefrontError, ValueError)):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=500, detail="Internal server error")
