"""Alembic environment — migrates the CRM schema with the application's own settings.

Design Decisions:
    - DATABASE_URL (through config.Settings, which adds the asyncpg driver) wins over
      sqlalchemy.url in alembic.ini; the ini value serves local docker-compose runs
    - render_as_batch on SQLite so ALTER-style migrations work on dev databases
    - Every model is imported through artist_crm.models before autogenerate compares
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

import artist_crm.models  # noqa: F401
from artist_crm.config import get_settings
from artist_crm.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def database_url() -> str:
    if os.environ.get("DATABASE_URL"):
        return get_settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _configure(**kwargs) -> None:
    url = kwargs.get("url") or database_url()
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=url.startswith("sqlite"),
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of touching a database."""
    _configure(
        url=database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_with_connection(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = database_url()
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_run_with_connection)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
