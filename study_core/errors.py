"""
Exceptions raised by study_core.
"""


class StudyCoreError(Exception):
    """Base class for study_core errors."""


class PersistenceError(StudyCoreError):
    """Saving or clearing a review store failed."""


class SessionFinishedError(StudyCoreError):
    """A card was answered after the session had finished."""
