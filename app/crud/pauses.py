from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from app import models, schemas
from app.crud.base import current_lock, load_current, unit_of_work
from app.crud.errors import NotFoundError, ReferentialError

logger = logging.getLogger(__name__)


def pause_to_schema(row: models.Pause) -> schemas.Pause:
    # model_construct: rows written before validation existed must still load
    return schemas.Pause.model_construct(
        id=row.id, start=row.start, end=row.end, block_id=row.block_id
    )


def insert_pause(
    db: Session, start: Optional[str], end: Optional[str], block_id: int
) -> models.Pause:
    if db.get(models.Block, block_id) is None:
        raise ReferentialError(f"block {block_id} does not exist")
    row = models.Pause(start=start, end=end, block_id=block_id)
    db.add(row)
    db.flush()
    return row


def add_pause(db: Session, pause: schemas.PauseCreate) -> schemas.Pause:
    with unit_of_work(db):
        created = pause_to_schema(insert_pause(db, pause.start, pause.end, pause.block_id))
    return created


def get_pause_by_id(db: Session, pause_id: int) -> schemas.Pause:
    with unit_of_work(db):
        row = db.get(models.Pause, pause_id)
        if row is None:
            raise NotFoundError(f"pause {pause_id} not found")
        found = pause_to_schema(row)
    return found


def get_pauses_by_block_id(db: Session, block_id: int) -> List[schemas.Pause]:
    """Pauses of a block in creation order; unknown blocks are NotFound."""
    with unit_of_work(db):
        if db.get(models.Block, block_id) is None:
            raise NotFoundError(f"block {block_id} not found")
        stmt = (
            select(models.Pause)
            .where(models.Pause.block_id == block_id)
            .order_by(models.Pause.id)
        )
        pauses = [pause_to_schema(row) for row in db.scalars(stmt)]
    return pauses


def _update_pause(db: Session, pause_id: int, **values) -> int:
    with unit_of_work(db):
        result = db.execute(
            update(models.Pause).where(models.Pause.id == pause_id).values(**values)
        )
        affected = result.rowcount
    return affected


def update_pause(db: Session, pause: schemas.Pause) -> int:
    return _update_pause(db, pause.id, start=pause.start, end=pause.end)


def update_pause_start(db: Session, pause_id: int, start: str) -> int:
    return _update_pause(db, pause_id, start=start)


def update_pause_end(db: Session, pause_id: int, end: str) -> int:
    return _update_pause(db, pause_id, end=end)


def delete_pause(db: Session, pause_id: int) -> int:
    with current_lock, unit_of_work(db):
        current = load_current(db)
        if current.current_pause_id == pause_id:
            current.current_pause_id = models.NONE_ID
            logger.info("Deleted pause %s was current; pause cleared", pause_id)
        result = db.execute(delete(models.Pause).where(models.Pause.id == pause_id))
        affected = result.rowcount
    return affected


__all__ = [
    "add_pause",
    "delete_pause",
    "get_pause_by_id",
    "get_pauses_by_block_id",
    "insert_pause",
    "pause_to_schema",
    "update_pause",
    "update_pause_end",
    "update_pause_start",
]
