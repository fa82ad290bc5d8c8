import os
import sys
from logging.config import fileConfig
from pathlib import Path
from urllib.parse import quote_plus

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection

from alembic import context

# Project root on sys.path so shipping_backend imports work from the shipping_backend/ dir
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))


# Sync URL (psycopg2) for migrations; the app itself uses asyncpg
def _get_sync_db_url():
    user = os.environ.get("DB_USER", "postgres")
    password = quote_plus(os.environ.get("DB_PASSWORD", ""))
    host = os.environ.get("DB_HOST", "localhost")
    port = os.environ.get("DB_PORT", "5432")
    name = os.environ.get("DB_NAME", "postgres")
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}"


SYNC_DB_URL = _get_sync_db_url()

from shipping_backend.app.core.base import Base

# Register models with Base.metadata for autogenerate
from shipping_backend.app.models import location, shipping  # noqa: F401

config = context.config

# ConfigParser treats % as interpolation
config.set_main_option("sqlalchemy.url", SYNC_DB_URL.replace("%", "%%"))

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Configures the context with just a URL so no DBAPI is needed;
    context.execute() emits SQL to the script output.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode using sync engine (psycopg2)."""
    connectable = create_engine(SYNC_DB_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        do_run_migrations(connection)
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
