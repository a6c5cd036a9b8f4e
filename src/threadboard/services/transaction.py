"""Transaction boundary shared by the mutating services."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from threadboard.core.errors import StorageError, ThreadboardError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """Run a check-then-write sequence as one transaction.

    Commits on success. On any failure the transaction is rolled back and the
    error propagates: domain errors and ``IntegrityError`` unchanged (callers
    classify constraint violations), other store errors as ``StorageError``.
    """
    try:
        yield session
        session.commit()
    except (ThreadboardError, IntegrityError):
        session.rollback()
        raise
    except SQLAlchemyError as err:
        session.rollback()
        logger.exception("Storage failure, transaction rolled back")
        raise StorageError() from err
