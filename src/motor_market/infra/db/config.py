from __future__ import annotations

import os
from typing import Any


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def engine_options() -> dict[str, Any]:
    """
    Connection pool settings for the listing datastore.

    Total max connections = DB_POOL_SIZE + DB_MAX_OVERFLOW.
    """
    return {
        "pool_size": _int_env("DB_POOL_SIZE", 10),
        "max_overflow": _int_env("DB_MAX_OVERFLOW", 20),
        "pool_pre_ping": True,  # Verify connection health before checkout
        "pool_recycle": _int_env("DB_POOL_RECYCLE_SECONDS", 3600),
    }
