"""
Shared fixtures for study_core tests.

Scheduling tests use StubMemoryModel so due dates are easy to predict;
tests of the FSRS adapter itself use the real library.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from study_core.clock import FixedClock
from study_core.memory.constants import ALL_GRADES, Grade, LearningStage
from study_core.memory.memory_state import MemoryState, ReviewLog
from study_core.memory.scheduler import Projection
from study_core.persistence.database import get_session_factory, init_db
from study_core.review_store import ReviewRecord, ReviewStore
from study_core.schemas import DeclensionCard, StudySettings

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
TODAY = "2026-03-10"


class StubMemoryModel:
    """
    Predictable memory model.

    AGAIN -> (re)learning in 1 minute, HARD -> learning in 10 minutes,
    GOOD -> review in 1 day, EASY -> review in 4 days.
    """

    OFFSETS = {
        Grade.AGAIN: timedelta(minutes=1),
        Grade.HARD: timedelta(minutes=10),
        Grade.GOOD: timedelta(days=1),
        Grade.EASY: timedelta(days=4),
    }

    def __init__(self):
        self.calls = 0

    def _next_stage(self, state, grade):
        if grade == Grade.AGAIN:
            if state.stage == LearningStage.REVIEW:
                return LearningStage.RELEARNING
            return LearningStage.LEARNING
        if grade == Grade.HARD:
            return LearningStage.LEARNING
        return LearningStage.REVIEW

    def repeat(self, state, now):
        self.calls += 1
        projections = {}
        for grade in ALL_GRADES:
            due = now + self.OFFSETS[grade]
            next_state = MemoryState(
                stage=self._next_stage(state, grade),
                due=due,
                stability=1.0,
                difficulty=5.0,
                reps=state.reps + 1,
                lapses=state.lapses,
                last_review=now,
            )
            log = ReviewLog(
                grade=grade,
                stage=state.stage,
                due=state.due,
                stability=state.stability,
                difficulty=state.difficulty,
                reviewed_at=now,
                elapsed_days=0.0,
                scheduled_days=(due - now).total_seconds() / 86400,
            )
            projections[grade] = Projection(state=next_state, log=log)
        return projections


def make_card(card_id, is_custom=False, case="Genitive", gender="Feminine", number="Singular"):
    return DeclensionCard(
        id=card_id,
        front=f"front {card_id}",
        back=f"back {card_id}",
        declined=f"declined {card_id}",
        case=case,
        gender=gender,
        number=number,
        is_custom=is_custom,
    )


def make_record(item_id, stage, due, reps=1):
    return ReviewRecord(
        item_id=item_id,
        memory_state=MemoryState(stage=stage, due=due, stability=2.0, difficulty=5.0, reps=reps, last_review=due),
    )


def make_store(records=(), reviewed_today=(), new_items_today=(), last_rollover_date=TODAY):
    return ReviewStore(
        records={str(record.item_id): record for record in records},
        reviewed_today=frozenset(str(i) for i in reviewed_today),
        new_items_today=frozenset(str(i) for i in new_items_today),
        last_rollover_date=last_rollover_date,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def model():
    return StubMemoryModel()


@pytest.fixture
def settings():
    return StudySettings(new_items_per_day=10)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return get_session_factory(engine)
