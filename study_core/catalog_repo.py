"""
MongoDB repository for catalog access.

Loads a domain's system items plus a user's custom items and validates them
into pydantic models. Custom items come first in the merged catalog.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from loguru import logger
from pydantic import BaseModel, ValidationError
from pymongo import MongoClient
from pymongo.database import Database

from study_core import config
from study_core.conjugation import aspect_pairs, expand_verbs
from study_core.schemas import DeclensionCard, Sentence, Verb, VocabularyWord

# Collection names per domain
SYSTEM_COLLECTIONS = {
    "declension": "declension_cards",
    "vocabulary": "vocabulary_words",
    "conjugation": "verbs",
    "aspect_pairs": "verbs",
    "sentences": "sentences",
}
CUSTOM_COLLECTIONS = {
    "declension": "custom_declension_cards",
    "vocabulary": "custom_vocabulary_words",
    "conjugation": "custom_verbs",
    "aspect_pairs": "custom_verbs",
    "sentences": "custom_sentences",
}

ITEM_MODELS: dict[str, type[BaseModel]] = {
    "declension": DeclensionCard,
    "vocabulary": VocabularyWord,
    "conjugation": Verb,
    "aspect_pairs": Verb,
    "sentences": Sentence,
}

# Global connection pool (reused across requests)
_client: Optional[MongoClient] = None


# ---- Connection Management ----

def get_database() -> Database:
    """
    Get the catalog database, creating the shared client on first use.

    Returns:
        MongoDB database object
    """
    global _client

    if _client is None:
        _client = MongoClient(
            config.get_mongo_uri(),
            maxPoolSize=10,  # Connection pool size
            minPoolSize=1,   # Keep at least 1 connection alive
            maxIdleTimeMS=60000  # Keep connections alive for 60 seconds
        )
    return _client[config.get_catalog_db_name()]


# ---- Validation ----

def _model_for(domain: str) -> type[BaseModel]:
    try:
        return ITEM_MODELS[domain]
    except KeyError:
        raise ValueError(f"Unknown study domain: {domain}") from None


def load_items(docs: Iterable[dict], domain: str, is_custom: bool = False) -> list[Any]:
    """
    Validate raw documents into catalog models.

    Invalid documents are logged and skipped so one bad entry does not hide
    the rest of the catalog.

    Args:
        docs: Raw documents (Mongo's `_id` is ignored)
        domain: Study domain the documents belong to
        is_custom: Mark every item as user-authored

    Returns:
        Validated items in document order
    """
    model = _model_for(domain)
    items = []
    for doc in docs:
        data = {key: value for key, value in doc.items() if key != "_id"}
        if is_custom:
            data["is_custom"] = True
        try:
            items.append(model.model_validate(data))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {domain} document {data.get('id')!r}: {e.error_count()} errors")
    return items


# ---- Repository ----

class CatalogRepository:
    """
    Read access to the catalogs of every study domain.
    """

    def __init__(self, db: Optional[Database] = None):
        self.db = db if db is not None else get_database()

    def get_system_items(self, domain: str) -> list[Any]:
        _model_for(domain)
        docs = self.db[SYSTEM_COLLECTIONS[domain]].find({})
        return load_items(docs, domain)

    def get_custom_items(self, domain: str, user_id: str) -> list[Any]:
        _model_for(domain)
        docs = self.db[CUSTOM_COLLECTIONS[domain]].find({"user_id": user_id})
        return load_items(docs, domain, is_custom=True)

    def get_catalog(self, domain: str, user_id: Optional[str] = None) -> list[Any]:
        """
        Schedulable items for a domain: custom items first, then system items.

        Conjugation verbs are expanded into their drillable forms; aspect-pair
        catalogs pair each verb with its other-aspect partner.

        Args:
            domain: A key of SYSTEM_COLLECTIONS
            user_id: Owner of custom items; system items only when omitted

        Returns:
            Ordered list of catalog items
        """
        custom = self.get_custom_items(domain, user_id) if user_id else []
        items = custom + self.get_system_items(domain)
        if domain == "conjugation":
            items = expand_verbs(items)
        elif domain == "aspect_pairs":
            items = aspect_pairs(items)
        logger.debug(f"Loaded {len(items)} {domain} items ({len(custom)} custom)")
        return items
