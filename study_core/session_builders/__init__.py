"""Session builders shared by every study domain."""

from study_core.session_builders.extra_new import get_extra_new
from study_core.session_builders.filters import (
    DOMAIN_MATCHERS,
    Matcher,
    match_all,
    matches_conjugation,
    matches_declension,
    matches_sentence,
    matches_vocabulary,
)
from study_core.session_builders.pool_types import SessionCard, SessionPools
from study_core.session_builders.practice_ahead import get_practice_ahead
from study_core.session_builders.session_builder import build_session, remaining_new_quota

__all__ = [
    "build_session",
    "remaining_new_quota",
    "get_practice_ahead",
    "get_extra_new",
    "SessionCard",
    "SessionPools",
    "Matcher",
    "match_all",
    "matches_declension",
    "matches_vocabulary",
    "matches_conjugation",
    "matches_sentence",
    "DOMAIN_MATCHERS",
]
