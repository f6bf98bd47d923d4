"""
Review store repository - load, save and clear persisted review stores

Loading fails open: a missing, unreadable or corrupt document yields a
fresh store so studying can continue. Saving does not: a failed write is
logged and raised as PersistenceError so the caller can roll back.
Every load applies the daily rollover before returning.
"""

from __future__ import annotations
from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from study_core import config
from study_core.clock import Clock, SystemClock
from study_core.errors import PersistenceError
from study_core.persistence import database
from study_core.persistence.models import ReviewStoreDocument
from study_core.review_store import ReviewStore, default_store, rollover, study_date
from study_core.schemas import ReviewStoreDoc, StoreScope


class ReviewStoreRepository:
    """
    SQLAlchemy-backed storage for one review store per user and scope.
    """

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        clock: Optional[Clock] = None,
        tz: Optional[str] = None,
    ):
        self.session_factory = session_factory or database.get_session_factory()
        self.clock = clock or SystemClock()
        self.tz = tz or config.get_study_timezone()

    def today(self) -> str:
        """Current study date in the repository's timezone."""
        return study_date(self.clock.now(), self.tz)

    def load(self, user_id: str, scope: StoreScope) -> ReviewStore:
        """
        Load and roll over the store for a user and scope.

        Args:
            user_id: User identifier
            scope: Study scope

        Returns:
            The persisted store rolled over to today, or a fresh store when
            nothing usable is saved
        """
        today = self.today()
        session = self.session_factory()
        try:
            row = session.get(ReviewStoreDocument, (user_id, scope.domain, scope.direction))
            if row is None:
                logger.debug(f"No saved review store for {user_id} {scope}; starting fresh")
                return default_store(today)
            store = ReviewStoreDoc.model_validate(row.document).to_store()
        except (ValueError, TypeError) as e:
            logger.warning(f"Corrupt review store for {user_id} {scope}, starting fresh: {e}")
            return default_store(today)
        except SQLAlchemyError:
            logger.exception(f"Failed to load review store for {user_id} {scope}")
            return default_store(today)
        finally:
            session.close()

        return rollover(store, today)

    def save(self, user_id: str, scope: StoreScope, store: ReviewStore) -> None:
        """
        Save (insert or replace) the store for a user and scope.

        Raises:
            PersistenceError: If the write fails
        """
        document = ReviewStoreDoc.from_store(store).to_json_dict()
        session = self.session_factory()
        try:
            row = session.get(ReviewStoreDocument, (user_id, scope.domain, scope.direction))
            if row is None:
                row = ReviewStoreDocument(
                    user_id=user_id,
                    domain=scope.domain,
                    direction=scope.direction,
                )
                session.add(row)
            row.document = document
            row.last_rollover_date = store.last_rollover_date
            row.updated_at = self.clock.now()
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to save review store for {user_id} {scope}: {e}")
            raise PersistenceError(f"Could not save review store for {user_id} {scope}") from e
        finally:
            session.close()

        logger.info(f"Saved review store for {user_id} {scope} ({len(store.records)} records)")

    def clear(self, user_id: str, scope: StoreScope) -> ReviewStore:
        """
        Delete all progress for a user and scope.

        Returns:
            A fresh default store

        Raises:
            PersistenceError: If the delete fails
        """
        session = self.session_factory()
        try:
            deleted = session.query(ReviewStoreDocument).filter(
                ReviewStoreDocument.user_id == user_id,
                ReviewStoreDocument.domain == scope.domain,
                ReviewStoreDocument.direction == scope.direction,
            ).delete()
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to clear review store for {user_id} {scope}: {e}")
            raise PersistenceError(f"Could not clear review store for {user_id} {scope}") from e
        finally:
            session.close()

        logger.info(f"Cleared review store for {user_id} {scope} ({deleted} rows)")
        return default_store(self.today())
