"""
Memory State - per-item scheduling state

Defines the algorithm-owned state of an item and the log of the review that
produced it. Scheduling code only reads `stage` and `due`; the numeric
parameters (stability, difficulty, step) belong to the memory model.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from study_core.memory.constants import Grade, LearningStage


@dataclass(frozen=True)
class MemoryState:
    """
    Memory state for a single item.
    """
    stage: LearningStage
    due: datetime

    # Opaque model parameters (None until the first review)
    stability: Optional[float] = None
    difficulty: Optional[float] = None
    step: Optional[int] = None

    # Review tracking
    reps: int = 0
    lapses: int = 0
    last_review: Optional[datetime] = None

    @property
    def is_new(self) -> bool:
        return self.stage == LearningStage.NEW


@dataclass(frozen=True)
class ReviewLog:
    """
    Log entry for the review that produced a memory state.

    Captures the state before the review plus the resulting interval.
    """
    grade: Grade
    stage: LearningStage          # Stage before the review
    due: datetime                 # Due date before the review
    stability: Optional[float]    # Stability before the review
    difficulty: Optional[float]   # Difficulty before the review
    reviewed_at: datetime
    elapsed_days: float           # Days since the previous review (0 for first review)
    scheduled_days: float         # Days until the new due date


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to timezone-aware UTC.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def new_memory_state(now: datetime) -> MemoryState:
    """
    Initialize state for an item that has never been reviewed.

    Args:
        now: Creation time; a new item is due immediately

    Returns:
        MemoryState in the NEW stage
    """
    return MemoryState(stage=LearningStage.NEW, due=ensure_utc(now))


def is_due(state: MemoryState, now: datetime) -> bool:
    """
    True when a reviewed item's due date has passed.

    New items are never "due"; they are governed by the daily quota instead.
    """
    if state.is_new:
        return False
    return ensure_utc(state.due) <= ensure_utc(now)
