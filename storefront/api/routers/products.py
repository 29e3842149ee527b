# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, Response

from storefront.api.deps import get_product_service, to_http_error
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import ProductIn, ProductOut, ProductUpdate, StockIn
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(svc: ProductService = Depends(get_product_service)):
    try:
        return svc.list_products()
    except StorefrontError as e:
        raise to_http_error(e)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(payload: ProductIn, svc: ProductService = Depends(get_product_service)):
    try:
        return svc.create_product(payload)
    except StorefrontError as e:
        raise to_http_error(e)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    try:
        return svc.get_product(product_id)
    except StorefrontError as e:
        raise to_http_error(e)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.update_product(product_id, payload)
    except (StorefrontError, ValueError) as e:
        raise to_http_error(e)


@router.put("/{product_id}/stock", response_model=ProductOut)
def update_stock(
    product_id: str,
    payload: StockIn,
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.update_stock(product_id, payload.stock)
    except (StorefrontError, ValueError) as e:
        raise to_http_error(e)


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    try:
        svc.delete_product(product_id)
    except StorefrontError as e:
        raise to_http_error(e)
    return Response(status_code=204)
