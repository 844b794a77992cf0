from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class Pause(Base):
    __tablename__ = "pause"

    id = Column(Integer, primary_key=True, autoincrement=True)
    start = Column(Text, nullable=True)
    end = Column(Text, nullable=True)
    block_id = Column(
        Integer, ForeignKey("block.id", ondelete="CASCADE"), nullable=False, index=True
    )

    block = relationship("Block", back_populates="pauses")


__all__ = ["Pause"]
