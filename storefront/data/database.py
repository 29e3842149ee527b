# storefront/data/database.py
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.utils.retry import db_startup_retry
from storefront.utils.settings import DATABASE_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#sqlite tylko lokalnie i w testach
if DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}
else:
    connect_args = {}

engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@db_startup_retry()
def init_db(bind=None):
    """Tworzy tabele. Ponawiane dopóki baza nie odpowiada (start kontenera)."""
    bind = bind or engine

    # import modeli rejestruje tabele w Base.metadata
    import storefront.data.models  # noqa: F401

    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))

    Base.metadata.create_all(bind=bind)
    logger.info(f"Database ready, tables: {sorted(Base.metadata.tables.keys())}")
