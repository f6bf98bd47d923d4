"""
Unit tests for the Mongo catalog repository.

Uses in-memory stand-ins for pymongo collections; no MongoDB required.
"""

import pytest

from study_core.catalog_repo import CatalogRepository, load_items


class FakeCollection:
    def __init__(self, docs=()):
        self.docs = list(docs)

    def find(self, query):
        return iter([
            dict(doc) for doc in self.docs
            if all(doc.get(key) == value for key, value in query.items())
        ])


class FakeDatabase(dict):
    def __missing__(self, name):
        self[name] = FakeCollection()
        return self[name]


def vocab_doc(word_id, polish, **extra):
    doc = {"_id": f"oid-{word_id}", "id": word_id, "polish": polish, "english": polish.upper()}
    doc.update(extra)
    return doc


VERB_DOC = {
    "id": "isc",
    "infinitive": "iść",
    "infinitive_en": "to go",
    "aspect": "Imperfective",
    "verb_class": "Irregular",
    "is_irregular": True,
    "conjugations": {"present": {"1sg": {"pl": "idę", "en": ["I go"]}, "2sg": {"pl": "idziesz"}}},
}


class TestLoadItems:

    def test_valid_documents(self):
        items = load_items([vocab_doc(1, "kot"), vocab_doc(2, "pies")], "vocabulary")

        assert [item.id for item in items] == [1, 2]
        assert all(not item.is_custom for item in items)

    def test_invalid_documents_are_skipped(self):
        docs = [vocab_doc(1, "kot"), {"id": 2, "english": "missing polish"}, vocab_doc(3, "mysz")]

        items = load_items(docs, "vocabulary")

        assert [item.id for item in items] == [1, 3]

    def test_unknown_domain(self):
        with pytest.raises(ValueError):
            load_items([], "grammar")


class TestCatalogRepository:

    @pytest.fixture
    def db(self):
        db = FakeDatabase()
        db["vocabulary_words"] = FakeCollection([vocab_doc(1, "kot"), vocab_doc(2, "pies")])
        db["custom_vocabulary_words"] = FakeCollection([
            vocab_doc("custom_1", "dom", user_id="anna"),
            vocab_doc("custom_2", "las", user_id="ben"),
        ])
        db["verbs"] = FakeCollection([VERB_DOC])
        return db

    def test_custom_items_first(self, db):
        items = CatalogRepository(db).get_catalog("vocabulary", "anna")

        assert [item.id for item in items] == ["custom_1", 1, 2]
        assert items[0].is_custom is True

    def test_without_user_only_system_items(self, db):
        items = CatalogRepository(db).get_catalog("vocabulary")

        assert [item.id for item in items] == [1, 2]

    def test_conjugation_catalog_is_expanded(self, db):
        items = CatalogRepository(db).get_catalog("conjugation", "anna")

        assert [item.id for item in items] == ["isc:present:1sg", "isc:present:2sg"]

    def test_empty_collection(self, db):
        assert CatalogRepository(db).get_catalog("declension", "anna") == []

    def test_unknown_domain(self, db):
        with pytest.raises(ValueError):
            CatalogRepository(db).get_catalog("grammar")

    def test_sentence_catalog(self, db):
        db["sentences"] = FakeCollection([
            {"id": "s1", "polish": "Dzień dobry.", "english": "Good morning.", "level": "A1", "tags": ["basics"]},
            {"id": "s2", "polish": "Brak poziomu.", "english": "No level."},
        ])
        db["custom_sentences"] = FakeCollection([
            {"id": "c1", "polish": "Mój dom.", "english": "My house.", "level": "A2", "user_id": "anna"},
        ])

        items = CatalogRepository(db).get_catalog("sentences", "anna")

        assert [item.id for item in items] == ["c1", "s1"]
        assert items[0].is_custom is True

    def test_aspect_pair_catalog(self, db):
        db["verbs"] = FakeCollection([
            dict(VERB_DOC, aspect_pair="pojsc"),
            dict(VERB_DOC, id="pojsc", infinitive="pójść", aspect="Perfective", aspect_pair="isc"),
        ])

        items = CatalogRepository(db).get_catalog("aspect_pairs")

        assert [(item.id, item.pair_verb.id) for item in items] == [("isc", "pojsc")]
