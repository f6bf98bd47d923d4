"""
Rating - apply a grade to one item and update the day's bookkeeping

`rate` is the pure memory update. `record_answer` wraps it with the store
side effects a session needs: the record is always stored, but an AGAIN
answer never marks the item as reviewed (it will come back in the relearn
queue and in the next session built today).
"""

from __future__ import annotations
import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from study_core.memory.constants import ALL_GRADES, Grade
from study_core.memory.memory_state import MemoryState, ensure_utc
from study_core.memory.scheduler import MemoryModel, get_default_model
from study_core.review_store import (
    ReviewRecord,
    ReviewStore,
    mark_new_seen,
    mark_reviewed,
    with_record,
)
from study_core.session_builders.pool_types import SessionCard


@dataclass(frozen=True)
class RatingOutcome:
    """Updated record and the store snapshot that contains it."""
    record: ReviewRecord
    store: ReviewStore


def rate(
    record: ReviewRecord,
    grade: Grade,
    now: datetime,
    model: Optional[MemoryModel] = None,
) -> ReviewRecord:
    """
    Apply one grade to a review record.

    Args:
        record: Record to update (left untouched)
        grade: User feedback
        now: Review time
        model: Memory model; the configured FSRS model when omitted

    Returns:
        New record with the next memory state and its review log
    """
    model = model or get_default_model()
    projection = model.repeat(record.memory_state, now)[Grade(grade)]
    return replace(record, memory_state=projection.state, log=projection.log)


def record_answer(
    store: ReviewStore,
    card: SessionCard,
    grade: Grade,
    now: datetime,
    model: Optional[MemoryModel] = None,
) -> RatingOutcome:
    """
    Rate a presented card and fold the result into a new store.

    Any grade but AGAIN adds the item to reviewed_today, and a new card
    also counts against today's new-item quota.

    Args:
        store: Current store snapshot (left untouched)
        card: The card that was answered
        grade: User feedback
        now: Review time
        model: Memory model override

    Returns:
        RatingOutcome with the updated record and store
    """
    grade = Grade(grade)
    current = store.get(card.item_id) or card.record
    record = rate(current, grade, now, model)

    new_store = with_record(store, record)
    if grade != Grade.AGAIN:
        new_store = mark_reviewed(new_store, card.item_id)
        if card.is_new:
            new_store = mark_new_seen(new_store, card.item_id)
    return RatingOutcome(record=record, store=new_store)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_interval(due: datetime, now: datetime) -> str:
    """
    Short label for the time until `due`: "<1m", "Nm", "Nh" or "Nd".
    """
    seconds = (ensure_utc(due) - ensure_utc(now)).total_seconds()
    minutes = _round_half_up(seconds / 60)
    hours = _round_half_up(seconds / 3600)
    days = _round_half_up(seconds / 86400)

    if minutes < 1:
        return "<1m"
    if minutes < 60:
        return f"{minutes}m"
    if hours < 24:
        return f"{hours}h"
    return f"{days}d"


def next_intervals(
    memory_state: MemoryState,
    now: datetime,
    model: Optional[MemoryModel] = None,
) -> dict[Grade, str]:
    """
    Interval labels shown on the grade buttons. Does not change any state.
    """
    model = model or get_default_model()
    projections = model.repeat(memory_state, now)
    return {grade: format_interval(projections[grade].state.due, now) for grade in ALL_GRADES}
