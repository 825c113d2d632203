from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from motor_market.infra.db.config import database_url, engine_options

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Process-wide engine, created on first use so imports never need DATABASE_URL."""
    options = engine_options()
    engine = create_engine(database_url(), **options)
    logger.info(
        "Database engine created",
        extra={"pool_size": options["pool_size"], "max_overflow": options["max_overflow"]},
    )
    return engine


@lru_cache(maxsize=1)
def get_session_local() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), class_=Session, expire_on_commit=False)


@contextmanager
def get_session() -> Iterator[Session]:
    """
    One unit of work: commit on success, rollback on any exception.

    A listing delete and the removal of its saved references share this
    transaction, so they land together or not at all.
    """
    session = get_session_local()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
