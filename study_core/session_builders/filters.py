"""
Filter matchers per study domain.

A matcher is `(item, filters) -> bool`. Empty filter lists mean "any", and a
number filter of "All" accepts both numbers. Filters only gate which NEW
items may enter a session.
"""

from __future__ import annotations
from typing import Any, Callable

from study_core.schemas import (
    ConjugationFilters,
    DeclensionCard,
    DeclensionFilters,
    DrillableForm,
    Sentence,
    SentenceFilters,
    VocabularyFilters,
    VocabularyWord,
)


Matcher = Callable[[Any, Any], bool]


def match_all(item: Any, filters: Any) -> bool:
    """Matcher for unfiltered catalogs."""
    return True


def _allowed(value: Any, allowed: list) -> bool:
    return not allowed or value in allowed


def _number_allowed(value: Any, number: Any) -> bool:
    return number == "All" or value == number


def matches_declension(card: DeclensionCard, filters: DeclensionFilters) -> bool:
    return (
        _allowed(card.case, filters.cases)
        and _allowed(card.gender, filters.genders)
        and _number_allowed(card.number, filters.number)
    )


def matches_vocabulary(word: VocabularyWord, filters: VocabularyFilters) -> bool:
    """
    Words without a part of speech (or gender) only pass when that filter is empty.
    """
    if filters.parts_of_speech and word.part_of_speech not in filters.parts_of_speech:
        return False
    if filters.genders and word.gender not in filters.genders:
        return False
    return True


def matches_conjugation(form: DrillableForm, filters: ConjugationFilters) -> bool:
    """
    Match a drillable form against conjugation filters.

    A gender filter excludes forms that carry no gender (e.g. present tense).
    """
    if not _allowed(form.tense, filters.tenses):
        return False
    if not _allowed(form.person, filters.persons):
        return False
    if not _number_allowed(form.number, filters.number):
        return False
    if not _allowed(form.verb.aspect, filters.aspects):
        return False
    if not _allowed(form.verb.verb_class, filters.verb_classes):
        return False
    if filters.genders and form.gender not in filters.genders:
        return False
    return True


def matches_sentence(sentence: Sentence, filters: SentenceFilters) -> bool:
    if not _allowed(sentence.level, filters.levels):
        return False
    if filters.tags and not any(tag in filters.tags for tag in sentence.tags):
        return False
    return True


DOMAIN_MATCHERS: dict[str, Matcher] = {
    "declension": matches_declension,
    "vocabulary": matches_vocabulary,
    "conjugation": matches_conjugation,
    "sentences": matches_sentence,
    "aspect_pairs": match_all,
}
