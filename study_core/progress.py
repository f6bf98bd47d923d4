"""
Progress statistics per scope.

Counts ignore filters: they describe the whole catalog of a scope.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Hashable, Iterable, Iterator

from study_core.memory.constants import LearningStage
from study_core.review_store import ReviewStore, get_or_create
from study_core.schemas import ALL_LEVELS, CEFRLevel, StudySettings
from study_core.session_builders.pool_types import CatalogItem, SessionCard
from study_core.session_builders.session_builder import (
    is_review_candidate,
    remaining_new_quota,
    unique_items,
)


@dataclass(frozen=True)
class ProgressStats:
    total: int = 0
    learned: int = 0    # Rated at least once (stage != NEW)
    mastered: int = 0   # In the REVIEW stage
    due: int = 0        # Items a session built now would present


def _item_counts(
    catalog: Iterable[CatalogItem],
    store: ReviewStore,
    settings: StudySettings,
    now: datetime,
) -> Iterator[tuple[CatalogItem, ProgressStats]]:
    """Each item with its own 0/1 contribution to the counts."""
    new_allowance = remaining_new_quota(store, settings)
    new_counted = 0

    for item in unique_items(catalog):
        record = get_or_create(item.id, store, now)
        state = record.memory_state

        if state.is_new:
            due = not store.was_new_today(item.id) and new_counted < new_allowance
            if due:
                new_counted += 1
            yield item, ProgressStats(total=1, due=int(due))
            continue

        card = SessionCard(item=item, record=record, is_new=False)
        yield item, ProgressStats(
            total=1,
            learned=1,
            mastered=int(state.stage == LearningStage.REVIEW),
            due=int(is_review_candidate(store, card, now)),
        )


def _add(a: ProgressStats, b: ProgressStats) -> ProgressStats:
    return ProgressStats(
        total=a.total + b.total,
        learned=a.learned + b.learned,
        mastered=a.mastered + b.mastered,
        due=a.due + b.due,
    )


def progress_stats(
    catalog: Iterable[CatalogItem],
    store: ReviewStore,
    settings: StudySettings,
    now: datetime,
) -> ProgressStats:
    """
    Count total, learned, mastered and due items for one scope.

    `due` is the review-count badge: new items still available within the
    remaining quota, plus learning and due review items not reviewed today.
    """
    stats = ProgressStats()
    for _, counts in _item_counts(catalog, store, settings, now):
        stats = _add(stats, counts)
    return stats


def progress_by_group(
    catalog: Iterable[CatalogItem],
    store: ReviewStore,
    settings: StudySettings,
    now: datetime,
    group_of: Callable[[CatalogItem], Hashable],
) -> dict[Hashable, ProgressStats]:
    """
    Per-group breakdown of progress_stats; the groups sum to the scope totals.

    The new-item allowance is spent in catalog order across all groups.
    """
    groups: dict[Hashable, ProgressStats] = {}
    for item, counts in _item_counts(catalog, store, settings, now):
        key = group_of(item)
        groups[key] = _add(groups.get(key, ProgressStats()), counts)
    return groups


def progress_by_level(
    sentences: Iterable[CatalogItem],
    store: ReviewStore,
    settings: StudySettings,
    now: datetime,
) -> dict[CEFRLevel, ProgressStats]:
    """Sentence progress per CEFR level; every level is present, even when empty."""
    groups = progress_by_group(
        sentences, store, settings, now, group_of=lambda sentence: CEFRLevel(sentence.level)
    )
    return {level: groups.get(level, ProgressStats()) for level in ALL_LEVELS}
