"""Alembic migration environment."""

from logging.config import fileConfig
import re

from sqlalchemy import engine_from_config, pool
from alembic import context

from tenant_api.core.database import Base, normalize_database_url
from tenant_api.models import Tenant  # noqa: F401
from tenant_api.core.config import settings

config = context.config

# Logging config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = settings.DATABASE_URL
if not database_url:
    raise RuntimeError("DATABASE_URL is not set in environment or .env")

print(f"Using database URL (redacted): {re.sub(r':([^/@]+)@', ':****@', database_url)}")

# Migrations run on sync drivers: psycopg 3 for Postgres, pysqlite for SQLite
sync_database_url = normalize_database_url(database_url).replace("sqlite+aiosqlite://", "sqlite://", 1)

config.set_main_option("sqlalchemy.url", sync_database_url)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
