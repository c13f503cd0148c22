"""Async SQLAlchemy engine, session factory, and declarative base."""

import math
import uuid
from collections.abc import AsyncIterator, Callable
from datetime import datetime

from sqlalchemy import event, func
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from stayhub.config import settings


def _engine_options(url: str) -> dict:
    # SQLite pools do not take sizing arguments.
    if url.startswith("sqlite"):
        return {"echo": settings.debug}
    return {
        "echo": settings.debug,
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
    }


def _null_safe(fn: Callable[[float], float]) -> Callable[[float | None], float | None]:
    return lambda value: None if value is None else fn(value)


def register_sqlite_functions(dbapi_connection, connection_record) -> None:
    """Give SQLite the trigonometry radius search needs (Postgres has it built in)."""
    dbapi_connection.create_function("sin", 1, _null_safe(math.sin))
    dbapi_connection.create_function("cos", 1, _null_safe(math.cos))


engine = create_async_engine(
    settings.async_database_url,
    **_engine_options(settings.async_database_url),
)

if settings.async_database_url.startswith("sqlite"):
    event.listen(engine.sync_engine, "connect", register_sqlite_functions)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    ``eager_defaults`` fetches server-generated timestamps in the INSERT /
    UPDATE round trip, so async code never triggers a lazy refresh.
    """

    __mapper_args__ = {"eager_defaults": True}


class TimestampMixin:
    """Mixin that adds created_at and updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )


class UUIDPrimaryKeyMixin:
    """Mixin that adds a UUID primary key column."""

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield an async database session for FastAPI dependency injection.

    The session commits when the request handler returns and rolls back on
    any exception, so one request is one transaction::

        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
