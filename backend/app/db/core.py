from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from ..settings import settings


def _engine_options(url: str) -> dict[str, object]:
    # aiosqlite connections are bound to the loop that opened them; sessions may be
    # driven from several loops (app, scripts, tests), so SQLite does not pool.
    if url.startswith("sqlite"):
        return {"poolclass": NullPool}
    return {"pool_pre_ping": True}


engine = create_async_engine(
    settings.async_database_url,
    echo=False,
    **_engine_options(settings.async_database_url),
)

IS_SQLITE = engine.dialect.name == "sqlite"


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


if IS_SQLITE:
    # SQLite's lower() only folds ASCII letters
    @event.listens_for(engine.sync_engine, "connect")
    def _register_sqlite_functions(dbapi_connection, _connection_record) -> None:
        dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)

SessionLocal = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    async with SessionLocal() as session:
        yield session


async def init_db() -> None:
    from . import models  # noqa: F401 - ensure models registered

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db() -> None:
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _bootstrap() -> None:
    await init_db()
    await engine.dispose()


def ensure_db_initialized() -> None:
    """Initialize database tables; safe to call from sync or async contexts."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(_bootstrap())
    else:
        loop.create_task(init_db())
