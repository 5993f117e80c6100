import logging
import time
from typing import Callable, TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from common.config.settings import TRANSACTION_RETRIES, TRANSACTION_RETRY_BACKOFF
from .exceptions import TransactionConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_in_transaction(
    db: Session,
    operation: Callable[[], T],
    retries: int = TRANSACTION_RETRIES,
    backoff: float = TRANSACTION_RETRY_BACKOFF,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Виконує operation() як одну атомарну одиницю: commit при успіху,
    rollback при будь-якій помилці.

    OperationalError (deadlock, "database is locked", serialization failure)
    повторюється до `retries` разів з лінійною затримкою. Після rollback
    жоден частковий запис не лишається, тому operation() можна викликати знову.
    """
    attempt = 0
    while True:
        try:
            result = operation()
            db.commit()
            return result
        except OperationalError as exc:
            db.rollback()
            if attempt >= retries:
                logger.error("Transaction failed after %s attempt(s): %s", attempt + 1, exc.orig)
                raise TransactionConflictError(
                    "The operation conflicted with a concurrent update, please retry"
                ) from exc
            attempt += 1
            logger.warning("Transaction conflict (%s), retry %s of %s", exc.orig, attempt, retries)
            sleep(backoff * attempt)
        except Exception:
            db.rollback()
            raise
