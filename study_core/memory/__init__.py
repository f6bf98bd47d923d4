"""
Memory - per-item memory state and the memory model adapter

Quick start:
    from study_core import memory

    model = memory.get_default_model()
    projections = model.repeat(state, now)
    next_state = projections[memory.Grade.GOOD].state
"""

# Constants and enums
from study_core.memory.constants import (
    ALL_GRADES,
    LEARNING_STAGES,
    MAXIMUM_INTERVAL_DAYS,
    Grade,
    LearningStage,
)

# Memory state
from study_core.memory.memory_state import (
    MemoryState,
    ReviewLog,
    ensure_utc,
    is_due,
    new_memory_state,
)

# Memory model adapter
from study_core.memory.scheduler import (
    FsrsMemoryModel,
    MemoryModel,
    Projection,
    get_default_model,
)


__all__ = [
    # Enums
    "Grade",
    "LearningStage",
    "ALL_GRADES",
    "LEARNING_STAGES",
    "MAXIMUM_INTERVAL_DAYS",

    # Memory state
    "MemoryState",
    "ReviewLog",
    "ensure_utc",
    "is_due",
    "new_memory_state",

    # Adapter
    "MemoryModel",
    "FsrsMemoryModel",
    "Projection",
    "get_default_model",
]
