"""Database engine and session management."""

from app.db.database import (
    after_commit,
    after_rollback,
    async_session_maker,
    close_db,
    commit,
    engine,
    engine_kwargs,
    get_session,
    init_db,
    rollback,
    transaction,
)

__all__ = [
    "after_commit",
    "after_rollback",
    "async_session_maker",
    "close_db",
    "commit",
    "engine",
    "engine_kwargs",
    "get_session",
    "init_db",
    "rollback",
    "transaction",
]
