"""
study_core - spaced-repetition study scheduler

Quick start:
    from study_core import build_session, record_answer, SessionCursor

    pools = build_session(catalog, store, filters, settings, now, matches=matches_vocabulary)
    cursor = SessionCursor.start(pools.queue)
    outcome = record_answer(store, cursor.current, Grade.GOOD, now)
    cursor = cursor.answer(Grade.GOOD, outcome.record)
"""

from study_core.clock import FixedClock, SystemClock
from study_core.errors import PersistenceError, SessionFinishedError, StudyCoreError
from study_core.memory import FsrsMemoryModel, Grade, LearningStage, MemoryState, ReviewLog
from study_core.progress import ProgressStats, progress_by_level, progress_stats
from study_core.rating import RatingOutcome, format_interval, next_intervals, rate, record_answer
from study_core.review_store import (
    ReviewRecord,
    ReviewStore,
    default_store,
    get_or_create,
    rollover,
    study_date,
)
from study_core.schemas import StoreScope, StudySettings
from study_core.session_builders import (
    DOMAIN_MATCHERS,
    SessionCard,
    SessionPools,
    build_session,
    get_extra_new,
    get_practice_ahead,
    match_all,
)
from study_core.session_cursor import CursorState, SessionCursor

__all__ = [
    # Clock
    "SystemClock",
    "FixedClock",

    # Errors
    "StudyCoreError",
    "PersistenceError",
    "SessionFinishedError",

    # Memory
    "Grade",
    "LearningStage",
    "MemoryState",
    "ReviewLog",
    "FsrsMemoryModel",

    # Review store
    "ReviewRecord",
    "ReviewStore",
    "default_store",
    "get_or_create",
    "rollover",
    "study_date",

    # Sessions
    "StudySettings",
    "StoreScope",
    "SessionCard",
    "SessionPools",
    "build_session",
    "get_practice_ahead",
    "get_extra_new",
    "match_all",
    "DOMAIN_MATCHERS",
    "SessionCursor",
    "CursorState",

    # Rating
    "rate",
    "record_answer",
    "RatingOutcome",
    "next_intervals",
    "format_interval",

    # Progress
    "ProgressStats",
    "progress_stats",
    "progress_by_level",
]
