"""Alembic environment for the vehicle catalog.

Runs against PostgreSQL (asyncpg) in deployments and SQLite (aiosqlite) for
local work. The target URL comes from DATABASE_URL unless overridden with
``alembic -x url=...``.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from src.core.config import settings

# Import all models to register them with Base.metadata
from src.models import Base, Vehicle  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_database_url() -> str:
    return context.get_x_argument(as_dictionary=True).get("url", settings.database_url)


def _configure(sqlite: bool, **options) -> None:
    # SQLite cannot ALTER most constraints in place; batch mode rebuilds tables
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=sqlite,
        **options,
    )


def do_run_migrations(connection: Connection) -> None:
    _configure(connection.dialect.name == "sqlite", connection=connection)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Apply migrations over an async engine built from alembic.ini."""
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting to the database."""
    url = get_database_url()
    _configure(
        url.startswith("sqlite"),
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
