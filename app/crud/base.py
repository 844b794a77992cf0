from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.crud.errors import InternalError, ReferentialError, StoreError
from app.models import CURRENT_ROW_ID, Current

logger = logging.getLogger(__name__)

# Serializes every read-modify-write of the current row together with the
# block/pause rows it points at.
current_lock = threading.RLock()


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Run one store operation as a single transaction.

    Commits on success; rolls back and translates storage failures into
    store errors otherwise.
    """
    try:
        yield db
        db.commit()
    except StoreError:
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        raise ReferentialError("referenced row does not exist") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storage failure")
        raise InternalError("storage failure") from exc


def load_current(db: Session) -> Current:
    current = db.get(Current, CURRENT_ROW_ID, populate_existing=True)
    if current is None:
        raise InternalError("current row missing; database not initialized")
    return current


__all__ = ["current_lock", "unit_of_work", "load_current"]
