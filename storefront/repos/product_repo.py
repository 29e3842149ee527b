# storefront/repos/product_repo.py
from datetime import datetime, timezone
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import ProductNotFound
from storefront.domain.product import Product
from storefront.repos.transaction import atomic, reading


def _to_entity(row: ProductModel) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        description=row.description,
        price=row.price,
        stock=row.stock,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, product_id: str) -> Product | None:
        with reading("get product"):
            row = self.db.get(ProductModel, product_id, populate_existing=True)
            return _to_entity(row) if row else None

    def get_by_ids(self, product_ids: Sequence[str]) -> List[Product]:
        #brakujące id po prostu nie wracają, decyduje wywołujący
        if not product_ids:
            return []
        with reading("get products"):
            rows = self.db.execute(
                select(ProductModel)
                .where(ProductModel.id.in_(set(product_ids)))
                .execution_options(populate_existing=True)
            ).scalars().all()
            return [_to_entity(r) for r in rows]

    def list(self) -> List[Product]:
        with reading("list products"):
            rows = self.db.execute(
                select(ProductModel).order_by(ProductModel.created_at.desc())
            ).scalars().all()
            return [_to_entity(r) for r in rows]

    def create(self, product: Product) -> Product:
        with atomic(self.db, "create product"):
            self.db.add(
                ProductModel(
                    id=product.id,
                    name=product.name,
                    description=product.description,
                    price=product.price,
                    stock=product.stock,
                    created_at=product.created_at,
                    updated_at=product.updated_at,
                )
            )
        return product

    def update(self, product: Product) -> Product:
        product.updated_at = datetime.now(timezone.utc)
        with atomic(self.db, "update product"):
            row = self.db.get(ProductModel, product.id)
            if not row:
                raise ProductNotFound(product.id)
            row.name = product.name
            row.description = product.description
            row.price = product.price
            row.stock = product.stock
            row.updated_at = product.updated_at
        return product

    def delete(self, product_id: str) -> None:
        with atomic(self.db, "delete product"):
            row = self.db.get(ProductModel, product_id)
            if not row:
                raise ProductNotFound(product_id)
            self.db.delete(row)

    def update_stock(self, product_id: str, stock: int) -> None:
        with atomic(self.db, "update stock"):
            row = self.db.get(ProductModel, product_id)
            if not row:
                raise ProductNotFound(product_id)
            row.stock = stock
            row.updated_at = datetime.now(timezone.utc)
