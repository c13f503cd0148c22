"""Alembic environment: migrations run over the application's async driver."""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

import stayhub.models  # noqa: F401  (registers every table on Base.metadata)
from stayhub.config import settings
from stayhub.database import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

if not config.get_main_option("sqlalchemy.url"):
    # configparser treats % as interpolation
    config.set_main_option("sqlalchemy.url", settings.async_database_url.replace("%", "%%"))

target_metadata = Base.metadata


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    # The baseline revision builds tables from live metadata and needs a connection
    raise SystemExit("Offline (--sql) migrations are not supported; run against a database.")

asyncio.run(run_async_migrations())
