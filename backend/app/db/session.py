"""
Database session management.
Handles SQLite connection and session lifecycle with async support.
"""
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event, Engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine
from sqlalchemy.pool import NullPool

from backend.app.config import get_settings

settings = get_settings()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Enable foreign key constraints for SQLite.
    This is required for proper referential integrity.

    Note: This event listener applies to ALL sync engines (including the one backing async).
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_async_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create and configure the async database engine.

    Args:
        database_url: Override for settings.DATABASE_URL (plain sqlite:/// form)

    Returns:
        AsyncEngine: SQLAlchemy async engine configured for SQLite with aiosqlite
    """
    db_url = database_url or settings.DATABASE_URL

    # Ensure database directory exists
    if db_url.startswith("sqlite:///"):
        db_path = db_url.replace("sqlite:///", "")
        if not db_path.startswith("/"):  # relative path
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    # Convert sqlite:/// to sqlite+aiosqlite:/// for async
    async_db_url = db_url.replace("sqlite:///", "sqlite+aiosqlite:///")

    engine = create_async_engine(
        async_db_url,
        echo=False,
        # NullPool for SQLite - each connection is independent
        poolclass=NullPool,
        )
    return engine


async_engine = get_async_engine()


async def get_session_generator() -> AsyncGenerator[AsyncSession, None]:
    """
    Get an async database session for dependency injection.

    Usage in FastAPI:
        @router.get("/")
        async def endpoint(session: AsyncSession = Depends(get_session_generator)):
            result = await session.execute(select(Model))
            ...

    Yields:
        AsyncSession: SQLAlchemy async session (expire_on_commit disabled)
    """
    async with AsyncSession(async_engine, expire_on_commit=False) as session:
        yield session
