from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, selectinload

from app import models, schemas
from app.crud.base import current_lock, load_current, unit_of_work
from app.crud.errors import NotFoundError, PartialBlockError, StoreError
from app.crud.pauses import insert_pause, pause_to_schema

logger = logging.getLogger(__name__)


def block_to_schema(row: models.Block) -> schemas.Block:
    return schemas.Block.model_construct(
        id=row.id,
        start=row.start,
        end=row.end,
        homeoffice=bool(row.homeoffice),
        pauses=[pause_to_schema(p) for p in row.pauses],
    )


def insert_block(
    db: Session, start: Optional[str], end: Optional[str], homeoffice: bool
) -> models.Block:
    row = models.Block(start=start, end=end, homeoffice=homeoffice)
    db.add(row)
    db.flush()
    return row


def add_block(db: Session, block: schemas.BlockCreate) -> schemas.Block:
    """Create a block, then each of its pauses in the order given.

    Every pause is its own transaction. When one fails the block and the
    pauses before it stay persisted and PartialBlockError names them.
    """
    with unit_of_work(db):
        block_id = insert_block(db, block.start, block.end, block.homeoffice).id

    created_pause_ids: List[int] = []
    for pause in block.pauses:
        try:
            with unit_of_work(db):
                created_pause_ids.append(insert_pause(db, pause.start, pause.end, block_id).id)
        except StoreError as exc:
            logger.error("Adding pause to new block %s failed: %s", block_id, exc.message)
            raise PartialBlockError(exc, block_id, created_pause_ids) from exc

    return get_block_by_id(db, block_id)


def _load_block(db: Session, block_id: int) -> models.Block:
    row = db.get(
        models.Block, block_id, options=[selectinload(models.Block.pauses)]
    )
    if row is None:
        raise NotFoundError(f"block {block_id} not found")
    return row


def get_block_by_id(db: Session, block_id: int) -> schemas.Block:
    with unit_of_work(db):
        found = block_to_schema(_load_block(db, block_id))
    return found


def _select_blocks(db: Session, *criteria) -> List[schemas.Block]:
    stmt = (
        select(models.Block)
        .options(selectinload(models.Block.pauses))
        .where(*criteria)
        .order_by(models.Block.id)
    )
    with unit_of_work(db):
        blocks = [block_to_schema(row) for row in db.scalars(stmt)]
    return blocks


def get_all_blocks(db: Session) -> List[schemas.Block]:
    return _select_blocks(db)


# Range filters compare the stored text against SQLite's date() of the
# argument, e.g. start > '2023-05-09'; blocks on that day therefore match.
def get_blocks_after_start(db: Session, start: str) -> List[schemas.Block]:
    return _select_blocks(db, models.Block.start > func.date(start))


def get_blocks_before_end(db: Session, end: str) -> List[schemas.Block]:
    return _select_blocks(db, models.Block.end < func.date(end))


def get_blocks_within_range(db: Session, start: str, end: str) -> List[schemas.Block]:
    return _select_blocks(
        db,
        models.Block.start > func.date(start),
        models.Block.end < func.date(end),
    )


def _update_block(db: Session, block_id: int, **values) -> int:
    with unit_of_work(db):
        result = db.execute(
            update(models.Block).where(models.Block.id == block_id).values(**values)
        )
        affected = result.rowcount
    return affected


def update_block(db: Session, block: schemas.BlockUpdate) -> int:
    return _update_block(
        db, block.id, start=block.start, end=block.end, homeoffice=block.homeoffice
    )


def update_block_start(db: Session, block_id: int, start: str) -> int:
    return _update_block(db, block_id, start=start)


def update_block_end(db: Session, block_id: int, end: str) -> int:
    return _update_block(db, block_id, end=end)


def update_block_homeoffice(db: Session, block_id: int, homeoffice: bool) -> int:
    return _update_block(db, block_id, homeoffice=homeoffice)


def delete_block(db: Session, block_id: int) -> int:
    """Delete a block with its pauses, clearing the current pointers it owns."""
    with current_lock, unit_of_work(db):
        current = load_current(db)
        if current.current_block_id == block_id:
            current.current_block_id = models.NONE_ID
            current.current_pause_id = models.NONE_ID
            logger.info("Deleted block %s was current; current cleared", block_id)
        elif current.current_pause_id != models.NONE_ID:
            pause = db.get(models.Pause, current.current_pause_id)
            if pause is not None and pause.block_id == block_id:
                current.current_pause_id = models.NONE_ID

        db.execute(delete(models.Pause).where(models.Pause.block_id == block_id))
        result = db.execute(delete(models.Block).where(models.Block.id == block_id))
        affected = result.rowcount
    return affected


__all__ = [
    "add_block",
    "block_to_schema",
    "delete_block",
    "get_all_blocks",
    "get_block_by_id",
    "get_blocks_after_start",
    "get_blocks_before_end",
    "get_blocks_within_range",
    "insert_block",
    "update_block",
    "update_block_end",
    "update_block_homeoffice",
    "update_block_start",
]
