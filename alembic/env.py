"""Alembic environment script.

Only model metadata and a database URL are needed; the runtime engine module
is not imported. The URL is resolved with the following precedence:

1. DB_URL
2. DATABASE_URL
3. ``sqlalchemy.url`` from alembic.ini, if set
4. Built-in default (local Postgres)

Async and bare Postgres URLs are converted to their synchronous psycopg
counterpart, and sqlite+aiosqlite:// to sqlite://, for Alembic operations.
"""
import os
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from membership_billing.config.urls import sync_database_url
from membership_billing.models.database import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

raw_url = os.getenv('DB_URL') or os.getenv('DATABASE_URL') or config.get_main_option('sqlalchemy.url')
if not raw_url:
    user = os.getenv('DB_USER', 'postgres')
    password = os.getenv('DB_PASSWORD', 'postgres')
    host = os.getenv('DB_HOST', 'localhost')
    port = os.getenv('DB_PORT', '5432')
    name = os.getenv('DB_NAME', 'membership')
    raw_url = f'postgresql://{user}:{password}@{host}:{port}/{name}'

config.set_main_option("sqlalchemy.url", sync_database_url(raw_url))


def run_migrations_offline():
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix='sqlalchemy.',
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
