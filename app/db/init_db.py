import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.db.base import Base
from app.models import CURRENT_ROW_ID, NONE_ID, Current

logger = logging.getLogger(__name__)


def _migrate_schema(bind: Engine) -> None:
    """Bring databases created before the home-office flag up to date."""
    cols = {col["name"] for col in inspect(bind).get_columns("block")}
    if "homeoffice" not in cols:
        logger.info("Adding missing column block.homeoffice")
        with bind.begin() as conn:
            conn.exec_driver_sql(
                "ALTER TABLE block ADD COLUMN homeoffice BOOLEAN NOT NULL DEFAULT 0"
            )


def init_db(bind: Engine) -> None:
    """Create missing tables and seed the current row; safe on every start."""
    Base.metadata.create_all(bind)
    _migrate_schema(bind)
    with Session(bind) as db:
        if db.get(Current, CURRENT_ROW_ID) is None:
            db.add(
                Current(
                    id=CURRENT_ROW_ID,
                    current_block_id=NONE_ID,
                    current_pause_id=NONE_ID,
                )
            )
            db.commit()
            logger.info("Seeded current row")


__all__ = ["init_db"]
