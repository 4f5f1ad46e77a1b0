"""Engine and session wiring for the MediaRoom datastore."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from mediaroom.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Model modules register their tables on Base.metadata.
import mediaroom.models  # noqa: E402,F401


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, *, echo: bool = False, **engine_kwargs: Any) -> Engine:
    """Create an engine for ``url`` with MediaRoom's connection rules.

    SQLite connections may be used from the request threadpool, and SQLite
    only enforces the comment/notification cascades once foreign keys are
    switched on for every new connection.
    """
    connect_args: dict[str, Any] = dict(engine_kwargs.pop("connect_args", {}))
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        connect_args.setdefault("check_same_thread", False)

    built = create_engine(
        url,
        connect_args=connect_args,
        pool_pre_ping=True,
        echo=echo,
        **engine_kwargs,
    )
    if is_sqlite:
        event.listen(built, "connect", _enable_sqlite_foreign_keys)
    return built


engine = build_engine(settings.effective_database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine | None = None) -> None:
    """Create every MediaRoom table that does not exist yet."""
    Base.metadata.create_all(bind=bind or engine)
