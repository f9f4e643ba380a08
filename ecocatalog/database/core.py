from typing import Annotated
from fastapi import Depends
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.dialects import postgresql, sqlite

from ..core.config import settings
from ..logging import logger

DATABASE_URL = settings.DATABASE_URL

logger.info("Using database: PostgreSQL" if DATABASE_URL.startswith("postgresql") else "Using database: SQLite")


def build_engine(url: str, **kwargs) -> Engine:
    """Create an engine with the right settings for PostgreSQL vs SQLite."""
    if url.startswith("postgresql"):
        return create_engine(
            url,
            pool_pre_ping=True,
            pool_recycle=300,
            echo=settings.SQL_ECHO,
            **kwargs
        )

    # SQLite configuration
    connect_args = kwargs.pop("connect_args", {})
    connect_args.setdefault("check_same_thread", False)
    sqlite_engine = create_engine(url, connect_args=connect_args, echo=settings.SQL_ECHO, **kwargs)

    # SQLite only honours ON DELETE CASCADE and foreign key checks when asked to
    @event.listens_for(sqlite_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sqlite_engine


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    try:
        db = SessionLocal()
        yield db
    finally:
        db.close()


DbSession = Annotated[Session, Depends(get_db)]


def upsert_insert(db: Session, entity):
    """Return the dialect-specific INSERT construct for ``entity``.

    Both PostgreSQL and SQLite expose ``on_conflict_do_update`` and
    ``on_conflict_do_nothing`` on their own ``insert()``, which is what the
    activity ledger uses for single-statement upserts.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(entity)
    if dialect == "sqlite":
        return sqlite.insert(entity)
    raise NotImplementedError(f"Upserts are not supported on the '{dialect}' dialect")
