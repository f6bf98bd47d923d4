"""
Session builder - review + new session creation

Builds one study session for any domain from two pools:
1. Review pool: learning/relearning items not yet reviewed today, plus
   review-stage items that are due
2. New pool: never-rated items matching the filters, capped by what is left
   of today's new-item quota

Session Logic:
- Reviews ordered earliest-due first
- New items shuffled with custom items first, then cut to the quota
- Reviews are presented before new items
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from loguru import logger

from study_core.memory.constants import LEARNING_STAGES, LearningStage
from study_core.review_store import ReviewStore, get_or_create, item_key
from study_core.schemas import StudySettings
from study_core.session_builders.filters import Matcher, match_all
from study_core.session_builders.pool_types import CatalogItem, SessionCard, SessionPools
from study_core.session_builders.pool_utils import (
    custom_first_shuffle,
    session_rng,
    sort_by_due,
    take,
)


def remaining_new_quota(store: ReviewStore, settings: StudySettings) -> int:
    """New items that may still be introduced today."""
    return max(0, settings.new_items_per_day - len(store.new_items_today))


def unique_items(catalog: Iterable[CatalogItem]) -> list[CatalogItem]:
    """Catalog items with duplicate ids dropped (first occurrence wins)."""
    seen: set[str] = set()
    items = []
    for item in catalog:
        key = item_key(item.id)
        if key in seen:
            continue
        seen.add(key)
        items.append(item)
    return items


def is_review_candidate(store: ReviewStore, card: SessionCard, now: datetime) -> bool:
    """
    Whether a rated item belongs in today's review pool.

    Learning and relearning items ignore their due date; review-stage items
    must be due. Either way an item reviewed today is skipped.
    """
    state = card.record.memory_state
    if store.was_reviewed_today(card.item_id):
        return False
    if state.stage in LEARNING_STAGES:
        return True
    return state.stage == LearningStage.REVIEW and state.due <= now


def build_session(
    catalog: Iterable[CatalogItem],
    store: ReviewStore,
    filters: Any,
    settings: StudySettings,
    now: datetime,
    matches: Matcher = match_all,
    seed: Optional[Union[int, str]] = None,
    filter_reviews: bool = False,
) -> SessionPools:
    """
    Build the day's session for one scope.

    Args:
        catalog: Ordered catalog items (anything with an `id`)
        store: Review store, already rolled over to today
        filters: Domain filters, passed through to `matches`
        settings: Study settings (daily new-item quota)
        now: Current time
        matches: Filter predicate `(item, filters) -> bool`
        seed: Shuffle seed; defaults to the store's rollover date
        filter_reviews: Also apply filters to the review pool

    Returns:
        SessionPools with due reviews and the capped batch of new items
    """
    quota = remaining_new_quota(store, settings)

    review_candidates: list[SessionCard] = []
    new_candidates: list[SessionCard] = []

    for item in unique_items(catalog):
        record = get_or_create(item.id, store, now)
        if record.memory_state.is_new:
            if store.was_new_today(item.id) or not matches(item, filters):
                continue
            new_candidates.append(SessionCard(item=item, record=record, is_new=True))
            continue

        card = SessionCard(item=item, record=record, is_new=False)
        if not is_review_candidate(store, card, now):
            continue
        if filter_reviews and not matches(item, filters):
            continue
        review_candidates.append(card)

    review_cards = sort_by_due(review_candidates)
    new_cards = take(custom_first_shuffle(new_candidates, session_rng(store, seed)), quota)

    logger.debug(
        f"Built session: {len(review_cards)} reviews, {len(new_cards)} new "
        f"(quota {quota}, {len(new_candidates)} new candidates)"
    )
    return SessionPools(review_cards=tuple(review_cards), new_cards=tuple(new_cards))
