"""Review-store persistence (SQLAlchemy)."""

from study_core.persistence.database import (
    get_engine,
    get_session_factory,
    init_db,
    reset_db,
)
from study_core.persistence.repository import ReviewStoreRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "init_db",
    "reset_db",
    "ReviewStoreRepository",
]
