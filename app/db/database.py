"""Database engine, session factory and the request unit of work."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs import file_logger, settings

logger = file_logger(getLogger(__name__))

STATEMENT_TIMEOUT_MS = 30000


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for debugging."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def engine_kwargs(database_url: str) -> dict[str, Any]:
    """
    Build `create_async_engine` keyword arguments for a database URL.

    SQLite (used by the test-suite) takes no pool sizing or server settings.
    """
    if database_url.startswith("sqlite"):
        return {"echo": settings.DATABASE_ECHO}
    return {
        "echo": settings.DATABASE_ECHO,
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
        "connect_args": {
            "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
            "server_settings": {
                "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                "lock_timeout": str(STATEMENT_TIMEOUT_MS),
            },
        },
    }


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    **engine_kwargs(settings.DATABASE_URL),
)

if settings.DEBUG:
    _configure_engine_events(engine)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


AFTER_COMMIT = "after_commit"
AFTER_ROLLBACK = "after_rollback"

type SessionHook = Callable[[], Awaitable[object]]


def after_commit(session: AsyncSession, hook: SessionHook) -> None:
    """Run `hook` once the session's transaction has committed."""
    session.info.setdefault(AFTER_COMMIT, []).append(hook)


def after_rollback(session: AsyncSession, hook: SessionHook) -> None:
    """Run `hook` if the session's transaction is rolled back instead."""
    session.info.setdefault(AFTER_ROLLBACK, []).append(hook)


async def _run_hooks(session: AsyncSession, name: str) -> None:
    for hook in session.info.pop(name, []):
        try:
            await hook()
        except Exception:
            logger.exception(f"{name} hook {hook!r} failed")


async def commit(session: AsyncSession) -> None:
    """
    Commit the session, then run its after-commit hooks.

    Hooks only touch systems outside the database (the object store), so a
    failing hook is logged and never undoes the committed work.
    """
    await session.commit()
    session.info.pop(AFTER_ROLLBACK, None)
    await _run_hooks(session, AFTER_COMMIT)


async def rollback(session: AsyncSession) -> None:
    """Roll the session back, then run its after-rollback hooks."""
    await session.rollback()
    session.info.pop(AFTER_COMMIT, None)
    await _run_hooks(session, AFTER_ROLLBACK)


@asynccontextmanager
async def transaction(
    session_maker: async_sessionmaker[SQLModelAsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession]:
    """
    Run a block of work in one transaction.

    Every write made inside the block, the owner record and all of its
    back-reference updates alike, commits together on a clean exit and is
    rolled back together when anything raises, the commit itself included.
    Object store side effects registered with `after_commit` and
    `after_rollback` follow the outcome.

    Args:
        session_maker: Session factory, the application's by default

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction() as session:
            session.add(TagDB(name="python"))
        ```
    """
    async with (session_maker or async_session_maker)() as session:
        try:
            yield session
            await commit(session)
        except Exception:
            await rollback(session)
            logger.exception("Transaction rolled back")
            raise
        finally:
            await session.close()


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting an async database session.

    One session, and one transaction, spans the whole request.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


async def init_db() -> None:
    """
    Create all tables defined in SQLModel models.

    Called on application startup.
    """
    async with engine.begin() as conn:
        # Import all models to ensure they are registered
        import app.models  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized successfully!")


async def close_db() -> None:
    """Dispose of pooled database connections on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
