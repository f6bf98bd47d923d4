"""
Extra-new builder.

Lets a learner pull more new items after the daily quota is used up.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from loguru import logger

from study_core.review_store import ReviewStore, get_or_create
from study_core.session_builders.filters import Matcher, match_all
from study_core.session_builders.pool_types import CatalogItem, SessionCard
from study_core.session_builders.pool_utils import custom_first_shuffle, session_rng, take
from study_core.session_builders.session_builder import unique_items


def get_extra_new(
    catalog: Iterable[CatalogItem],
    store: ReviewStore,
    filters: Any,
    count: int,
    now: datetime,
    matches: Matcher = match_all,
    seed: Optional[Union[int, str]] = None,
) -> list[SessionCard]:
    """
    Pick up to `count` new items, ignoring the daily quota.

    Items already introduced today are skipped. Custom items come first;
    the result is never padded.
    """
    candidates = []
    for item in unique_items(catalog):
        record = get_or_create(item.id, store, now)
        if not record.memory_state.is_new:
            continue
        if store.was_new_today(item.id) or not matches(item, filters):
            continue
        candidates.append(SessionCard(item=item, record=record, is_new=True))

    cards = take(custom_first_shuffle(candidates, session_rng(store, seed)), count)
    logger.debug(f"Extra new: {len(cards)} of {len(candidates)} candidates")
    return cards
