from sqlalchemy import Column, Integer

from app.db.base import Base

CURRENT_ROW_ID = 1
NONE_ID = -1


class Current(Base):
    """Singleton row pointing at the open block and pause, ``-1`` for none."""

    __tablename__ = "current"

    id = Column(Integer, primary_key=True)
    current_block_id = Column(Integer, nullable=False, default=NONE_ID)
    current_pause_id = Column(Integer, nullable=False, default=NONE_ID)


__all__ = ["Current", "CURRENT_ROW_ID", "NONE_ID"]
