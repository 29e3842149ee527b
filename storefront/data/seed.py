# storefront/data/seed.py
import uuid
from decimal import Decimal

from sqlalchemy import select

from storefront.data.database import SessionLocal, init_db
from storefront.data.models.product import ProductModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"name": "Keyboard", "price": Decimal("199.99"), "stock": 25},
    {"name": "Mouse", "price": Decimal("49.50"), "stock": 100},
    {"name": "Monitor", "price": Decimal("899.00"), "stock": 5},
]


def seed(db=None) -> int:
    """Dodaje przykładowe produkty, tylko gdy katalog jest pusty."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        if db.execute(select(ProductModel.id).limit(1)).first():
            return 0
        for p in PRODUCTS:
            db.add(ProductModel(id=str(uuid.uuid4()), **p))
        db.commit()
        logger.info(f"Seeded {len(PRODUCTS)} products")
        return len(PRODUCTS)
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    init_db()
    seed()
