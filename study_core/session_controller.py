"""
Study session lifecycle for one user and scope.

StudySession is the stateful layer around the pure core: it owns the current
store snapshot and cursor, applies each rating optimistically, persists the
new store, and restores the previous snapshot if the save fails.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from loguru import logger

from study_core.clock import Clock
from study_core.errors import PersistenceError, SessionFinishedError
from study_core.memory.constants import EXTRA_NEW_COUNT, PRACTICE_AHEAD_COUNT, Grade
from study_core.memory.scheduler import MemoryModel
from study_core.persistence.repository import ReviewStoreRepository
from study_core.progress import ProgressStats, progress_by_level, progress_stats
from study_core.rating import next_intervals, record_answer
from study_core.review_store import ItemId, ReviewRecord, item_key, rollover, study_date
from study_core.schemas import CEFRLevel, StoreScope, StudySettings
from study_core.session_builders import (
    build_session,
    get_extra_new,
    get_practice_ahead,
    match_all,
)
from study_core.session_builders.filters import Matcher
from study_core.session_builders.pool_types import CatalogItem, SessionCard
from study_core.session_cursor import SessionCursor


class StudySession:
    """
    One learner studying one scope.
    """

    def __init__(
        self,
        user_id: str,
        scope: StoreScope,
        catalog: Sequence[CatalogItem],
        repository: ReviewStoreRepository,
        settings: Optional[StudySettings] = None,
        filters: Any = None,
        matches: Matcher = match_all,
        clock: Optional[Clock] = None,
        model: Optional[MemoryModel] = None,
    ):
        self.user_id = user_id
        self.scope = scope
        self.catalog = list(catalog)
        self.repository = repository
        self.settings = settings or StudySettings()
        self.filters = filters
        self.matches = matches
        self.clock = clock or repository.clock
        self.model = model

        self.store = repository.load(user_id, scope)
        self.cursor = SessionCursor.start(())

    # ---- Session Creation ----

    def _roll_over(self):
        today = study_date(self.clock.now(), self.repository.tz)
        self.store = rollover(self.store, today)

    def start(self, seed: Optional[Union[int, str]] = None) -> SessionCursor:
        """
        Build today's session (due reviews, then new items) and present it.
        """
        self._roll_over()
        pools = build_session(
            self.catalog,
            self.store,
            self.filters,
            self.settings,
            self.clock.now(),
            matches=self.matches,
            seed=seed,
        )
        self.cursor = SessionCursor.start(pools.queue)
        logger.info(
            f"Started {self.scope} session for {self.user_id}: "
            f"{len(pools.review_cards)} reviews, {len(pools.new_cards)} new"
        )
        return self.cursor

    def start_practice_ahead(self, count: int = PRACTICE_AHEAD_COUNT) -> SessionCursor:
        """Present items that are not due yet (or already reviewed today)."""
        self._roll_over()
        cards = get_practice_ahead(
            self.catalog, self.store, self.filters, count, self.clock.now(), matches=self.matches
        )
        self.cursor = SessionCursor.start(cards)
        return self.cursor

    def start_extra_new(self, count: int = EXTRA_NEW_COUNT, seed: Optional[Union[int, str]] = None) -> SessionCursor:
        """Present more new items beyond today's quota."""
        self._roll_over()
        cards = get_extra_new(
            self.catalog, self.store, self.filters, count, self.clock.now(),
            matches=self.matches, seed=seed,
        )
        self.cursor = SessionCursor.start(cards)
        return self.cursor

    # ---- Answering ----

    @property
    def current(self) -> Optional[SessionCard]:
        return self.cursor.current

    @property
    def is_finished(self) -> bool:
        return self.cursor.is_finished

    def answer(self, grade: Grade) -> ReviewRecord:
        """
        Rate the current card, advance, and save.

        Returns:
            The card's updated record

        Raises:
            SessionFinishedError: If there is no card to answer
            PersistenceError: If saving failed; the store and cursor are
                restored to their state before the answer
        """
        card = self.cursor.current
        if card is None:
            raise SessionFinishedError("Session is finished; no card to answer")

        outcome = record_answer(self.store, card, grade, self.clock.now(), self.model)

        previous_store, previous_cursor = self.store, self.cursor
        self.store = outcome.store
        self.cursor = self.cursor.answer(grade, outcome.record)
        try:
            self.repository.save(self.user_id, self.scope, self.store)
        except PersistenceError:
            logger.warning(f"Rolling back answer for {card.item_id} after failed save")
            self.store, self.cursor = previous_store, previous_cursor
            raise
        return outcome.record

    def intervals(self) -> dict[Grade, str]:
        """Interval labels for the current card's grade buttons."""
        card = self.cursor.current
        if card is None:
            return {}
        record = self.store.get(card.item_id) or card.record
        return next_intervals(record.memory_state, self.clock.now(), self.model)

    # ---- Catalog Changes ----

    def remove_item(self, item_id: ItemId):
        """Forget a deleted catalog item for the rest of the session."""
        key = item_key(item_id)
        self.catalog = [item for item in self.catalog if item_key(item.id) != key]
        self.cursor = self.cursor.remove_item(item_id)

    def update_item(self, item: Any):
        """Swap in an edited catalog item."""
        key = item_key(item.id)
        self.catalog = [item if item_key(existing.id) == key else existing for existing in self.catalog]
        self.cursor = self.cursor.update_item(item)

    # ---- Progress ----

    def progress(self) -> ProgressStats:
        self._roll_over()
        return progress_stats(self.catalog, self.store, self.settings, self.clock.now())

    def progress_by_level(self) -> dict[CEFRLevel, ProgressStats]:
        """Per-level progress of a sentence catalog."""
        self._roll_over()
        return progress_by_level(self.catalog, self.store, self.settings, self.clock.now())

    def reset_progress(self):
        """Delete all saved progress for this scope and end the current session."""
        self.store = self.repository.clear(self.user_id, self.scope)
        self.cursor = SessionCursor.start(())
