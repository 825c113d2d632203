"""Alembic environment for the listing schema.

The URL always comes from DATABASE_URL so migrations and the API can never
point at different databases.
"""

from __future__ import annotations

from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from motor_market.infra.db.config import database_url
from motor_market.infra.db.models.base import Base

# Registers car_listings and saved_listings on Base.metadata
from motor_market.infra.db.models.listing import ListingRow, SavedListingRow  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

COMPARE_OPTIONS: dict[str, Any] = {
    "target_metadata": Base.metadata,
    "compare_type": True,
    "compare_server_default": True,
}


def run_offline(url: str) -> None:
    """Emit SQL to stdout (alembic upgrade --sql)."""
    context.configure(
        url=url, literal_binds=True, dialect_opts={"paramstyle": "named"}, **COMPARE_OPTIONS
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online(url: str) -> None:
    engine = create_engine(url, poolclass=NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **COMPARE_OPTIONS)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline(database_url())
else:
    run_online(database_url())
