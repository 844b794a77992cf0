"""Start/end transitions of the current block and pause.

States: idle (no current block), block active, pause active. Each
transition reads and writes the current row under ``current_lock`` inside a
single transaction, so concurrent callers observe them one at a time.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app import models, schemas
from app.core.timezone import now_iso
from app.crud.base import current_lock, load_current, unit_of_work
from app.crud.blocks import block_to_schema, insert_block
from app.crud.errors import ConflictError, NotFoundError
from app.crud.pauses import insert_pause, pause_to_schema

logger = logging.getLogger(__name__)


def _reject(message: str) -> ConflictError:
    logger.warning("Rejected transition: %s", message)
    return ConflictError(message)


def get_current(db: Session) -> schemas.CurrentState:
    with current_lock, unit_of_work(db):
        current = load_current(db)
        state = schemas.CurrentState(
            block_id=current.current_block_id, pause_id=current.current_pause_id
        )
    return state


def start_block(db: Session, homeoffice: bool) -> schemas.Block:
    with current_lock, unit_of_work(db):
        current = load_current(db)
        if current.current_block_id != models.NONE_ID:
            raise _reject("block already active")
        row = insert_block(db, now_iso(), None, homeoffice)
        current.current_block_id = row.id
        started = block_to_schema(row)
    logger.info("Started block %s (homeoffice=%s)", started.id, homeoffice)
    return started


def end_block(db: Session) -> schemas.Block:
    with current_lock, unit_of_work(db):
        current = load_current(db)
        if current.current_block_id == models.NONE_ID:
            raise _reject("no block active")
        if current.current_pause_id != models.NONE_ID:
            raise _reject("pause not ended")
        row = db.get(models.Block, current.current_block_id)
        if row is None:
            raise NotFoundError(f"current block {current.current_block_id} not found")
        row.end = now_iso()
        current.current_block_id = models.NONE_ID
        db.flush()
        ended = block_to_schema(row)
    logger.info("Ended block %s", ended.id)
    return ended


def start_pause(db: Session) -> schemas.Pause:
    with current_lock, unit_of_work(db):
        current = load_current(db)
        if current.current_block_id == models.NONE_ID:
            raise _reject("no block active")
        if current.current_pause_id != models.NONE_ID:
            raise _reject("pause already active")
        row = insert_pause(db, now_iso(), None, current.current_block_id)
        current.current_pause_id = row.id
        started = pause_to_schema(row)
    logger.info("Started pause %s in block %s", started.id, started.block_id)
    return started


def end_pause(db: Session) -> schemas.Pause:
    with current_lock, unit_of_work(db):
        current = load_current(db)
        if current.current_pause_id == models.NONE_ID:
            raise _reject("no pause active")
        row = db.get(models.Pause, current.current_pause_id)
        if row is None:
            raise NotFoundError(f"current pause {current.current_pause_id} not found")
        row.end = now_iso()
        current.current_pause_id = models.NONE_ID
        db.flush()
        ended = pause_to_schema(row)
    logger.info("Ended pause %s", ended.id)
    return ended


def get_current_block(db: Session) -> schemas.Block:
    with current_lock, unit_of_work(db):
        current = load_current(db)
        if current.current_block_id == models.NONE_ID:
            raise NotFoundError("no block active")
        row = db.get(models.Block, current.current_block_id)
        if row is None:
            raise NotFoundError(f"current block {current.current_block_id} not found")
        found = block_to_schema(row)
    return found


__all__ = [
    "end_block",
    "end_pause",
    "get_current",
    "get_current_block",
    "start_block",
    "start_pause",
]
