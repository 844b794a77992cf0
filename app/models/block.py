from sqlalchemy import Boolean, Column, Integer, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class Block(Base):
    __tablename__ = "block"

    id = Column(Integer, primary_key=True, autoincrement=True)
    start = Column(Text, nullable=True)
    end = Column(Text, nullable=True)  # NULL while the block is open
    homeoffice = Column(Boolean, nullable=False, default=False)

    pauses = relationship(
        "Pause",
        back_populates="block",
        order_by="Pause.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["Block"]
