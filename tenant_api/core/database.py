"""Database engine, declarative base and session dependency."""
from typing import AsyncGenerator

from sqlalchemy import MetaData, event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from tenant_api.core.config import settings


# Driver rewrites so any common Postgres URL runs on psycopg 3
_POSTGRES_SCHEMES = (
    ("postgresql+asyncpg://", "postgresql+psycopg://"),
    ("postgres://", "postgresql+psycopg://"),
    ("postgresql://", "postgresql+psycopg://"),
)


def normalize_database_url(database_url: str) -> str:
    """Map Postgres URLs onto the psycopg driver; other URLs pass through."""
    for scheme, replacement in _POSTGRES_SCHEMES:
        if database_url.startswith(scheme):
            return replacement + database_url[len(scheme):]
    return database_url


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """SQLite leaves FK checks off unless asked, per connection."""
    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Build an async engine; pool sizing only applies to server databases."""
    database_url = normalize_database_url(database_url)

    if database_url.startswith("sqlite"):
        sqlite_engine = create_async_engine(database_url, **kwargs)
        enable_sqlite_foreign_keys(sqlite_engine)
        return sqlite_engine

    return create_async_engine(
        database_url,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_recycle=1800,
        pool_pre_ping=True,
        **kwargs,
    )


metadata = MetaData(naming_convention={
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
})


class Base(DeclarativeBase):
    metadata = metadata


engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG)

async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request."""
    async with async_session_maker() as session:
        yield session
