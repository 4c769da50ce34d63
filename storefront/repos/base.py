# storefront/repos/base.py
import functools

from sqlalchemy.exc import SQLAlchemyError, OperationalError, TimeoutError as PoolTimeoutError

from storefront.domain.errors import ShopError, StoreError, StoreTimeoutError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_TIMEOUT_MARKERS = ("timeout", "timed out", "database is locked")


def _is_timeout(exc: Exception) -> bool:
    if isinstance(exc, PoolTimeoutError):
        return True
    if isinstance(exc, OperationalError):
        text = str(exc.orig).lower()
        return any(marker in text for marker in _TIMEOUT_MARKERS)
    return False


def store_call(fn):
    """
    Tlumaczy wyjatki SQLAlchemy na bledy domenowe.
    Wyjatki oczekiwane (np. IntegrityError) metoda obsluguje sama.
    """

    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            return fn(self, *args, **kwargs)
        except ShopError:
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            if _is_timeout(e):
                logger.error(f"{type(self).__name__}.{fn.__name__} timed out: {e}")
                raise StoreTimeoutError("Store call timed out") from e
            logger.error(f"{type(self).__name__}.{fn.__name__} failed: {e}")
            raise StoreError("Store unavailable") from e

    return wrapper
