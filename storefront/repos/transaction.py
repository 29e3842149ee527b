# storefront/repos/transaction.py
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import InfrastructureError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def atomic(db: Session, action: str):
    """
    Jedna transakcja na zapis agregatu.
    Commit na końcu bloku, rollback przy każdym błędzie.
    Błędy SQLAlchemy wychodzą jako InfrastructureError.
    """
    try:
        yield
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Rollback ({action}): {e}")
        raise InfrastructureError(f"failed to {action}") from e
    except Exception:
        db.rollback()
        raise


@contextmanager
def reading(action: str):
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Read failed ({action}): {e}")
        raise InfrastructureError(f"failed to {action}") from e
