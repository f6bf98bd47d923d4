"""
Memory Model Constants

Grades, learning stages and scheduler defaults in one place.
The integer encodings match the FSRS conventions used by persisted data.
"""

from enum import IntEnum


# ---- Grades ----

class Grade(IntEnum):
    """User feedback on a retrieval attempt."""
    AGAIN = 1   # Retrieval failed
    HARD = 2    # Retrieved with high effort
    GOOD = 3    # Retrieved normally
    EASY = 4    # Retrieved fluently


ALL_GRADES = (Grade.AGAIN, Grade.HARD, Grade.GOOD, Grade.EASY)


# ---- Learning Stages ----

class LearningStage(IntEnum):
    """Algorithm-owned maturity of an item's memory."""
    NEW = 0         # Never reviewed
    LEARNING = 1    # Short-interval drilling after first exposure
    REVIEW = 2      # Graduated, scheduled by due date
    RELEARNING = 3  # Lapsed review being re-drilled


LEARNING_STAGES = frozenset({LearningStage.LEARNING, LearningStage.RELEARNING})


# ---- Scheduler Defaults ----

MAXIMUM_INTERVAL_DAYS = 36500


# ---- Session Defaults ----

PRACTICE_AHEAD_COUNT = 10
EXTRA_NEW_COUNT = 5
