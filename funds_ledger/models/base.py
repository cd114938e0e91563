"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Engines and session factories
are built here and passed around explicitly; nothing in the
package holds a process-wide connection.
"""

from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from funds_ledger.config import Settings, get_settings


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# --- Base Model Class ---
# Every database model (User, Account, Entry, Transfer) inherits
# from this class. SQLAlchemy uses it to track all models and
# generate the correct SQL for table creation.
class Base(DeclarativeBase):
    pass


# --- Engine ---
def create_store_engine(
    url: str | None = None,
    settings: Settings | None = None,
    **kwargs,
) -> AsyncEngine:
    """
    Create the async engine that owns the connection pool.

    pool_pre_ping=True tests connections before using them,
    which handles cases where the database restarted or a
    connection went stale.

    SQLite needs two extras: foreign keys are off by default,
    and concurrent writers must wait for the file lock instead
    of failing straight away.
    """
    settings = settings or get_settings()
    url = url or settings.DATABASE_URL

    options = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": settings.DB_POOL_PRE_PING,
    }
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        options["connect_args"] = {"timeout": settings.SQLITE_BUSY_TIMEOUT}
    options.update(kwargs)

    engine = create_async_engine(url, **options)

    if is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# --- Session Factory ---
# autoflush=False means SQLAlchemy won't send SQL to the
# database until we explicitly flush or commit.
# expire_on_commit=False keeps returned rows readable after
# the transaction that produced them has committed.
def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create every table known to Base.metadata."""
    # Models must be imported so they register on Base.metadata
    import funds_ledger.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
