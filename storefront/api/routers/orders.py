# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Query

from storefront.api.deps import get_checkout, get_current_user_id, to_http_error
from storefront.domain.errors import StorefrontError
from storefront.domain.order import OrderStatus
from storefront.domain.schemas import OrderOut
from storefront.services.checkout import CheckoutOrchestrator

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    user_id: str = Depends(get_current_user_id),
    svc: CheckoutOrchestrator = Depends(get_checkout),
):
    """
    Tworzy zamówienie z koszyka użytkownika.
    Zdarzenie i czyszczenie koszyka są best-effort, nie zmieniają odpowiedzi.
    """
    try:
        return svc.create_order(user_id)
    except StorefrontError as e:
        raise to_http_error(e)


@router.get("", response_model=List[OrderOut])
def get_user_orders(
    user_id: str = Depends(get_current_user_id),
    svc: CheckoutOrchestrator = Depends(get_checkout),
):
    try:
        return svc.get_user_orders(user_id)
    except StorefrontError as e:
        raise to_http_error(e)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, svc: CheckoutOrchestrator = Depends(get_checkout)):
    try:
        return svc.get_order(order_id)
    except StorefrontError as e:
        raise to_http_error(e)


@router.post("/{order_id}/pay", response_model=OrderOut)
def pay_order(order_id: str, svc: CheckoutOrchestrator = Depends(get_checkout)):
    try:
        return svc.pay_order(order_id)
    except StorefrontError as e:
        raise to_http_error(e)


@router.post("/{order_id}/ship", response_model=OrderOut)
def ship_order(order_id: str, svc: CheckoutOrchestrator = Depends(get_checkout)):
    try:
        return svc.ship_order(order_id)
    except StorefrontError as e:
        raise to_http_error(e)


@router.post("/{order_id}/complete", response_model=OrderOut)
def complete_order(order_id: str, svc: CheckoutOrchestrator = Depends(get_checkout)):
    try:
        return svc.complete_order(order_id)
    except StorefrontError as e:
        raise to_http_error(e)


@router.post("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(order_id: str, svc: CheckoutOrchestrator = Depends(get_checkout)):
    try:
        return svc.cancel_order(order_id)
    except StorefrontError as e:
        raise to_http_error(e)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: str,
    status: OrderStatus = Query(...),
    svc: CheckoutOrchestrator = Depends(get_checkout),
):
    """Administracyjne ustawienie statusu (bez sprawdzania przejść)."""
    try:
        return svc.update_order_status(order_id, status)
    except StorefrontError as e:
        raise to_http_error(e)
