"""
Database - engine and session setup for review-store persistence

Engine configuration comes from DATABASE_URL (see study_core.config).
Repositories take a session factory so tests can bind them to an
in-memory engine instead.
"""

from __future__ import annotations
from functools import lru_cache
from typing import Optional

from loguru import logger
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from study_core import config
from study_core.persistence.models import Base, ReviewStoreDocument


@lru_cache(maxsize=None)
def get_engine(db_url: Optional[str] = None) -> Engine:
    """
    Get SQLAlchemy engine for database connection.

    Server databases use connection pooling; SQLite keeps SQLAlchemy's
    default pool.

    Args:
        db_url: Connection string; defaults to config.get_database_url()

    Returns:
        SQLAlchemy Engine instance
    """
    db_url = db_url or config.get_database_url()
    if db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False)
    return create_engine(
        db_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


def get_session_factory(engine: Optional[Engine] = None) -> sessionmaker:
    """Session factory bound to `engine` (the configured engine by default)."""
    return sessionmaker(bind=engine or get_engine(), expire_on_commit=False)


def init_db(engine: Optional[Engine] = None):
    """
    Initialize database schema if tables don't exist.

    Safe to call multiple times.
    """
    engine = engine or get_engine()
    existing_tables = inspect(engine).get_table_names()
    if ReviewStoreDocument.__tablename__ not in existing_tables:
        Base.metadata.create_all(engine)
        logger.info(f"Created table {ReviewStoreDocument.__tablename__}")


def reset_db(engine: Optional[Engine] = None):
    """
    DANGEROUS: Delete all review data and recreate tables.

    All progress for every user will be lost!
    """
    engine = engine or get_engine()
    Base.metadata.drop_all(engine)
    logger.warning("All review-store tables dropped")
    init_db(engine)
