from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Ensure models are imported for Alembic's autogeneration.
import app.models.block  # noqa: E402,F401
import app.models.current  # noqa: E402,F401
import app.models.pause  # noqa: E402,F401

__all__ = ["Base"]
