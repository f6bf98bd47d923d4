"""
Practice-ahead builder.

Voluntary extra review of items that are already in the review cycle but
are not due yet, or were already reviewed today.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Iterable

from loguru import logger

from study_core.review_store import ReviewStore, get_or_create
from study_core.session_builders.filters import Matcher, match_all
from study_core.session_builders.pool_types import CatalogItem, SessionCard
from study_core.session_builders.pool_utils import sort_by_due, take
from study_core.session_builders.session_builder import unique_items


def get_practice_ahead(
    catalog: Iterable[CatalogItem],
    store: ReviewStore,
    filters: Any,
    count: int,
    now: datetime,
    matches: Matcher = match_all,
) -> list[SessionCard]:
    """
    Pick up to `count` non-new items to practice ahead of schedule.

    Args:
        catalog: Ordered catalog items
        store: Review store
        filters: Domain filters
        count: Maximum number of cards
        now: Current time
        matches: Filter predicate

    Returns:
        Cards sorted earliest-due first; never contains new items
    """
    candidates = []
    for item in unique_items(catalog):
        record = get_or_create(item.id, store, now)
        state = record.memory_state
        if state.is_new:
            continue
        if not matches(item, filters):
            continue
        if state.due > now or store.was_reviewed_today(item.id):
            candidates.append(SessionCard(item=item, record=record, is_new=False))

    cards = take(sort_by_due(candidates), count)
    logger.debug(f"Practice ahead: {len(cards)} of {len(candidates)} candidates")
    return cards
