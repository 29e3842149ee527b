import uuid
from typing import List

from storefront.domain.errors import ProductNotFound
from storefront.domain.product import Product
from storefront.domain.schemas import ProductIn, ProductUpdate
from storefront.repos.base import ProductStore
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, products: ProductStore):
        self.products = products

    def create_product(self, payload: ProductIn) -> Product:
        product = Product(
            id=str(uuid.uuid4()),
            name=payload.name,
            description=payload.description,
            price=payload.price,
            stock=payload.stock,
        )
        created = self.products.create(product)
        logger.info(f"Product {created.id} created ({created.name})")
        return created

    def get_product(self, product_id: str) -> Product:
        product = self.products.get_by_id(product_id)
        if not product:
            raise ProductNotFound(product_id)
        return product

    def list_products(self) -> List[Product]:
        return self.products.list()

    def update_product(self, product_id: str, payload: ProductUpdate) -> Product:
        product = self.get_product(product_id)

        # tylko pola przesłane w requescie
        changes = payload.model_dump(exclude_unset=True)
        if changes.get("name") is not None:
            product.name = changes["name"]
        if "description" in changes:
            product.description = changes["description"]
        if changes.get("price") is not None:
            product.price = changes["price"]
        if changes.get("stock") is not None:
            product.set_stock(changes["stock"])

        return self.products.update(product)

    def delete_product(self, product_id: str) -> None:
        self.products.delete(product_id)
        logger.info(f"Product {product_id} deleted")

    def update_stock(self, product_id: str, stock: int) -> Product:
        product = self.get_product(product_id)
        product.set_stock(stock)
        self.products.update_stock(product_id, stock)
        logger.info(f"Stock of product {product_id} set to {stock}")
        return product
