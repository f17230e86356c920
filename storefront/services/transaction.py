# storefront/services/transaction.py
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domain.errors import PersistenceError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


async def safe_rollback(db: AsyncSession):
    #blad rollbacku tylko logujemy, oryginalny wyjatek leci dalej
    try:
        await db.rollback()
    except SQLAlchemyError as e:
        logger.error(f"Rollback failed: {e}")


@asynccontextmanager
async def atomic(db: AsyncSession, failure_message: str):
    """
    Jedna transakcja: commit na koncu bloku, rollback przy kazdym bledzie.
    SQLAlchemyError -> PersistenceError(failure_message, szczegoly).
    """
    try:
        yield
        await db.commit()
    except SQLAlchemyError as e:
        await safe_rollback(db)
        logger.error(f"{failure_message} {e}")
        raise PersistenceError(failure_message, str(e)) from e
    except Exception:
        await safe_rollback(db)
        raise
