# jobboard/migrations/env.py
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

# jobboard.config loads jobboard/.env and resolves relative sqlite paths
from jobboard.config import DATABASE_URL
from jobboard.database import Base

# IMPORTANT: Import models so jobs/job_skills register on Base.metadata
import jobboard.models  # noqa: F401

config = context.config

# ALEMBIC_DATABASE_URL wins (e.g. a migration role); else the app's own URL
db_url = os.getenv("ALEMBIC_DATABASE_URL") or DATABASE_URL
config.set_main_option("sqlalchemy.url", db_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

VERSION_TABLE = os.getenv("ALEMBIC_VERSION_TABLE", "alembic_version")

# SQLite can't ALTER most things; batch mode copies tables instead
is_sqlite = db_url.startswith("sqlite")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        version_table=VERSION_TABLE,
        render_as_batch=is_sqlite,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL without a DB connection."""
    _configure(url=db_url, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section) or {},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
