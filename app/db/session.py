from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import get_settings


BASE_DIR = Path(__file__).resolve().parent.parent.parent
_settings = get_settings()


def _normalise_database_url(raw_url: str) -> str:
    url = make_url(raw_url)
    drivername = url.drivername
    if drivername.startswith("sqlite+"):
        url = url.set(drivername="sqlite")
    db_path = url.database
    if url.drivername == "sqlite" and db_path and db_path != ":memory:":
        path = Path(db_path)
        if not path.is_absolute():
            # relative SQLite paths are anchored at the project root, not the cwd
            url = url.set(database=str((BASE_DIR / path).resolve()))
    return url.render_as_string(hide_password=False)


def _sqlite_connect_args(url: str) -> Dict[str, Any]:
    if not url.startswith("sqlite"):
        return {}
    connect_args: Dict[str, Any] = {"check_same_thread": False}
    db_path = make_url(url).database
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return connect_args


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, **kwargs: Any) -> Engine:
    """Build an engine; SQLite connections get foreign key enforcement."""
    url = _normalise_database_url(url)
    connect_args = kwargs.pop("connect_args", None) or _sqlite_connect_args(url)
    new_engine = create_engine(url, connect_args=connect_args, **kwargs)
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


engine: Engine = create_db_engine(_settings.db_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = ["engine", "SessionLocal", "create_db_engine", "get_db"]
