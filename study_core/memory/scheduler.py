"""
Scheduler - memory model adapter

Wraps the `fsrs` library behind a single `repeat(state, now)` call that
projects the next state for every grade. Nothing else in the package talks
to the library directly, so any object with a compatible `repeat` method can
stand in for it (tests use this to pin due dates).

The adapter does no database calls and never mutates its input.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Mapping, Protocol

from fsrs import Card, Rating, Scheduler, State

from study_core import config
from study_core.memory.constants import (
    ALL_GRADES,
    LEARNING_STAGES,
    MAXIMUM_INTERVAL_DAYS,
    Grade,
    LearningStage,
)
from study_core.memory.memory_state import MemoryState, ReviewLog, ensure_utc


SECONDS_PER_DAY = 86400.0

# Card ids are irrelevant to scheduling; a fixed id avoids the library's
# timestamp-based id generation.
_ADAPTER_CARD_ID = 0


@dataclass(frozen=True)
class Projection:
    """The state an item would move to for one grade, plus its log."""
    state: MemoryState
    log: ReviewLog


class MemoryModel(Protocol):
    """Anything that can project next states for all grades."""

    def repeat(self, state: MemoryState, now: datetime) -> Mapping[Grade, Projection]:
        ...


class FsrsMemoryModel:
    """
    FSRS memory model backed by the `fsrs` package.
    """

    def __init__(
        self,
        desired_retention: float = 0.9,
        enable_fuzzing: bool = False,
        maximum_interval: int = MAXIMUM_INTERVAL_DAYS,
    ):
        self.scheduler = Scheduler(
            desired_retention=desired_retention,
            maximum_interval=maximum_interval,
            enable_fuzzing=enable_fuzzing,
        )

    def repeat(self, state: MemoryState, now: datetime) -> dict[Grade, Projection]:
        """
        Project the next memory state for every grade.

        Args:
            state: Current memory state (may be NEW)
            now: Review time

        Returns:
            Mapping of grade -> Projection
        """
        now = ensure_utc(now)
        card = _to_card(state)
        return {grade: self._project(card, state, grade, now) for grade in ALL_GRADES}

    def _project(self, card: Card, state: MemoryState, grade: Grade, now: datetime) -> Projection:
        # review_card deep-copies the card, so one Card serves all four grades
        reviewed, _ = self.scheduler.review_card(card, Rating(int(grade)), review_datetime=now)
        next_state = _from_card(reviewed, state, grade)

        if state.last_review is not None:
            elapsed_days = max(0.0, (now - ensure_utc(state.last_review)).total_seconds() / SECONDS_PER_DAY)
        else:
            elapsed_days = 0.0

        log = ReviewLog(
            grade=grade,
            stage=state.stage,
            due=state.due,
            stability=state.stability,
            difficulty=state.difficulty,
            reviewed_at=now,
            elapsed_days=elapsed_days,
            scheduled_days=(next_state.due - now).total_seconds() / SECONDS_PER_DAY,
        )
        return Projection(state=next_state, log=log)


def _to_card(state: MemoryState) -> Card:
    """Convert a MemoryState into an fsrs Card."""
    if state.stage == LearningStage.NEW:
        return Card(
            card_id=_ADAPTER_CARD_ID,
            state=State.Learning,
            step=0,
            due=ensure_utc(state.due),
        )

    step = state.step
    if state.stage in LEARNING_STAGES and step is None:
        step = 0
    if state.stage == LearningStage.REVIEW:
        step = None

    return Card(
        card_id=_ADAPTER_CARD_ID,
        state=State(int(state.stage)),
        step=step,
        stability=state.stability,
        difficulty=state.difficulty,
        due=ensure_utc(state.due),
        last_review=ensure_utc(state.last_review) if state.last_review else None,
    )


def _from_card(card: Card, previous: MemoryState, grade: Grade) -> MemoryState:
    """Convert a reviewed fsrs Card back into a MemoryState."""
    lapses = previous.lapses
    if grade == Grade.AGAIN and previous.stage == LearningStage.REVIEW:
        lapses += 1

    return MemoryState(
        stage=LearningStage(int(card.state)),
        due=ensure_utc(card.due),
        stability=card.stability,
        difficulty=card.difficulty,
        step=card.step,
        reps=previous.reps + 1,
        lapses=lapses,
        last_review=ensure_utc(card.last_review) if card.last_review else None,
    )


@lru_cache(maxsize=1)
def get_default_model() -> FsrsMemoryModel:
    """
    Shared memory model configured from the environment.
    """
    return FsrsMemoryModel(
        desired_retention=config.get_desired_retention(),
        enable_fuzzing=config.is_fuzzing_enabled(),
    )
