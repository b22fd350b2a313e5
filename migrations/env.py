### Description ###
# Warehouse API - Clean J Shipping Backend
# - Alembic Environment -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Alembic environment for the warehouse database (users, api_keys, access_logs).

Migrations run against DATABASE_URL from warehouse_api.database, not the
url in alembic.ini, so the CLI and the app always touch the same file.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from warehouse_api.database import DATABASE_URL, Base
from warehouse_api.models import AccessLog, APIKey, User  # noqa: F401 - registers tables on Base

config = context.config
config.set_main_option("sqlalchemy.url", DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# SQLite cannot ALTER most constraints in place; batch mode recreates the table
CONTEXT_OPTIONS = {"target_metadata": target_metadata, "render_as_batch": True}


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **CONTEXT_OPTIONS,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, compare_type=True, **CONTEXT_OPTIONS)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
