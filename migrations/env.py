"""Alembic environment for the Study SNS schema.

``src`` is put on ``sys.path`` by ``prepend_sys_path`` in alembic.ini. The
database URL comes from ``ALEMBIC_URL`` when set, then from an explicit
``sqlalchemy.url`` option, then from the application settings.
"""
from __future__ import annotations

import os
from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import engine_from_config, pool

from study_sns.core.settings import settings
from study_sns.db.session import Base

config = context.config

if config.config_file_name is not None:
    # Keep loggers created by the application (and by tests) enabled.
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def database_url() -> str:
    return (
        os.getenv("ALEMBIC_URL")
        or config.get_main_option("sqlalchemy.url")
        or settings.database_url_sync
    )


def _context_options(is_sqlite: bool) -> dict[str, Any]:
    # SQLite cannot ALTER most constraints in place, so batch mode rebuilds tables.
    return {
        "target_metadata": target_metadata,
        "render_as_batch": is_sqlite,
        "compare_type": True,
    }


def run_migrations_offline() -> None:
    """Emit SQL for the configured URL without connecting."""
    url = database_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_context_options(url.startswith("sqlite")),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a live connection."""
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = database_url()
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            **_context_options(connection.dialect.name == "sqlite"),
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
