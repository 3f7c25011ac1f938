import asyncio
import ssl
import sys
import pathlib
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from app.core.config import settings, ModeEnum
from app.models import *  # noqa: F401, F403 (registers all models with SQLModel.metadata)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata

db_url = str(settings.ASYNC_DATABASE_URI)


def run_migrations_offline() -> None:
    """Emit SQL without a live connection."""
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


def _connect_args() -> dict:
    # Hosted Postgres requires SSL; local development and SQLite do not
    if settings.MODE == ModeEnum.development or make_url(db_url).get_backend_name() != "postgresql":
        return {}
    ssl_context = ssl.create_default_context()
    ssl_context.check_hostname = False
    ssl_context.verify_mode = ssl.CERT_NONE
    return {"ssl": ssl_context}


async def run_migrations_online():
    """Run migrations against the configured database."""
    connectable = create_async_engine(db_url, poolclass=NullPool, connect_args=_connect_args())

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
