"""
Unit tests for declension and vocabulary filter matchers.
"""

from study_core.schemas import DeclensionFilters, VocabularyFilters, VocabularyWord
from study_core.session_builders import (
    DOMAIN_MATCHERS,
    match_all,
    matches_conjugation,
    matches_declension,
    matches_vocabulary,
)

from conftest import make_card


def word(**fields):
    data = {"id": "custom_1", "polish": "kot", "english": "cat"}
    data.update(fields)
    return VocabularyWord.model_validate(data)


class TestDeclension:

    def test_empty_filters_match(self):
        assert matches_declension(make_card(1), DeclensionFilters())

    def test_case_list(self):
        card = make_card(1, case="Locative")

        assert matches_declension(card, DeclensionFilters(cases=["Locative", "Dative"]))
        assert not matches_declension(card, DeclensionFilters(cases=["Dative"]))

    def test_number_all_accepts_both(self):
        singular = make_card(1, number="Singular")
        plural = make_card(2, number="Plural")
        filters = DeclensionFilters(number="All")

        assert matches_declension(singular, filters)
        assert matches_declension(plural, filters)
        assert not matches_declension(plural, DeclensionFilters(number="Singular"))

    def test_gender(self):
        card = make_card(1, gender="Pronoun")

        assert matches_declension(card, DeclensionFilters(genders=["Pronoun"]))
        assert not matches_declension(card, DeclensionFilters(genders=["Neuter"]))


class TestVocabulary:

    def test_part_of_speech(self):
        noun = word(part_of_speech="noun", gender="masculine")

        assert matches_vocabulary(noun, VocabularyFilters(parts_of_speech=["noun"]))
        assert not matches_vocabulary(noun, VocabularyFilters(parts_of_speech=["verb"]))

    def test_untagged_word_only_passes_empty_filter(self):
        plain = word()

        assert matches_vocabulary(plain, VocabularyFilters())
        assert not matches_vocabulary(plain, VocabularyFilters(genders=["feminine"]))


class TestRegistry:

    def test_domain_matchers(self):
        assert DOMAIN_MATCHERS == {
            "declension": matches_declension,
            "vocabulary": matches_vocabulary,
            "conjugation": matches_conjugation,
        }

    def test_match_all(self):
        assert match_all(object(), None)
