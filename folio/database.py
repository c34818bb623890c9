"""SQLAlchemy engine, session helpers and object-id generation."""

from __future__ import annotations

import re
import secrets
import time
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from folio.config import settings

_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


class Base(DeclarativeBase):
    """Declarative base class for ORM models."""


def utcnow() -> datetime:
    return datetime.now(UTC)


def generate_object_id() -> str:
    """Return a new 24-hex-character identifier.

    The first 4 bytes are the creation time in seconds, the remaining 8 are
    random, so ids sort roughly by creation order.
    """
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


def is_object_id(value: str | None) -> bool:
    return bool(value) and _OBJECT_ID_RE.match(value) is not None


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def _register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite's lower() only folds ASCII; expose a Unicode-aware casefold()."""
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    url = make_url(database_url)
    engine_kwargs: dict[str, object] = {"echo": echo, "pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(database_url, **engine_kwargs)
    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _register_sqlite_functions)
    return engine


engine: Engine = build_engine(settings.database_url, echo=settings.db_echo)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Iterator[Session]:
    """Yield a scoped session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
