# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime

from storefront.domain.order import OrderStatus


class ProductIn(BaseModel):
    """Schema dla tworzenia produktu."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    stock: int = Field(..., ge=0, description="Stan magazynowy (>= 0)")


class ProductUpdate(BaseModel):
    """Schema dla częściowej aktualizacji produktu, pola None są pomijane."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    stock: int | None = Field(None, ge=0)


class StockIn(BaseModel):
    stock: int = Field(..., ge=0)


class ProductOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Decimal
    stock: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Schema dla rejestracji użytkownika."""

    name: str = Field(..., min_length=1, max_length=255, description="Imię użytkownika")
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    # bcrypt bierze pod uwagę tylko 72 bajty
    password: str = Field(..., min_length=8, max_length=72)


class UserOut(BaseModel):
    """Schema dla użytkownika (response), bez hasha hasła."""

    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1, description="ID produktu")
    quantity: int = Field(..., gt=0, description="Ilość produktu (musi być > 0)")


class QuantityIn(BaseModel):
    quantity: int = Field(..., gt=0, description="Nowa ilość (musi być > 0)")


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    id: str
    product_id: str
    quantity: int
    price: Decimal


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: str
    user_id: str
    items: List[CartItemOut]
    total: Decimal
    item_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_cart(cls, cart) -> "CartOut":
        return cls(
            id=cart.id,
            user_id=cart.user_id,
            items=[
                CartItemOut(id=i.id, product_id=i.product_id, quantity=i.quantity, price=i.price)
                for i in cart.items
            ],
            total=cart.total(),
            item_count=cart.item_count(),
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )


class OrderItemOut(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamówienia (response)."""

    id: str
    user_id: str
    items: List[OrderItemOut]
    total: Decimal
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderEventItem(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: float


class OrderCreatedEvent(BaseModel):
    """
    Payload zdarzenia order.created.
    Kwoty jako liczby JSON (float), tak jak czytają je konsumenci.
    """

    id: str
    user_id: str
    total: float
    status: OrderStatus
    items: List[OrderEventItem]

    @classmethod
    def from_order(cls, order) -> "OrderCreatedEvent":
        return cls(
            id=order.id,
            user_id=order.user_id,
            total=float(order.total),
            status=order.status,
            items=[
                OrderEventItem(
                    id=i.id,
                    product_id=i.product_id,
                    quantity=i.quantity,
                    price=float(i.price),
                )
                for i in order.items
            ],
        )
