#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_cart_service, get_current_user_id, to_http_error
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CartOut, ItemIn, QuantityIn
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        cart = svc.get_cart(user_id)
    except StorefrontError as e:
        raise to_http_error(e)
    if not cart:
        raise HTTPException(status_code=404, detail="cart not found")
    return CartOut.from_cart(cart)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        cart = svc.add_item(user_id, payload.product_id, payload.quantity)
    except (StorefrontError, ValueError) as e:
        raise to_http_error(e)
    return CartOut.from_cart(cart)


@router.put("/items/{product_id}", response_model=CartOut)
def update_item_quantity(
    product_id: str,
    payload: QuantityIn,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        cart = svc.update_item_quantity(user_id, product_id, payload.quantity)
    except (StorefrontError, ValueError) as e:
        raise to_http_error(e)
    return CartOut.from_cart(cart)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        cart = svc.remove_item(user_id, product_id)
    except StorefrontError as e:
        raise to_http_error(e)
    return CartOut.from_cart(cart)


@router.post("/clear", response_model=CartOut)
def clear_cart(
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        cart = svc.clear_cart(user_id)
    except StorefrontError as e:
        raise to_http_error(e)
    return CartOut.from_cart(cart)
