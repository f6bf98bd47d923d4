"""
Typed pool models shared across session builders.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from study_core.review_store import ItemId, ReviewRecord


class CatalogItem(Protocol):
    """Minimal shape of a catalog item: a stable id."""
    id: ItemId


T = TypeVar("T")


@dataclass(frozen=True)
class SessionCard(Generic[T]):
    """
    One item paired with its review record for presentation.
    """
    item: T
    record: ReviewRecord
    is_new: bool

    @property
    def item_id(self) -> ItemId:
        return self.record.item_id


@dataclass(frozen=True)
class SessionPools(Generic[T]):
    """
    Output of a session build: due reviews and the capped batch of new items.
    """
    review_cards: tuple[SessionCard[T], ...] = ()
    new_cards: tuple[SessionCard[T], ...] = ()

    @property
    def queue(self) -> tuple[SessionCard[T], ...]:
        """Presentation order: reviews first, then new items."""
        return self.review_cards + self.new_cards

    def __len__(self) -> int:
        return len(self.review_cards) + len(self.new_cards)


def is_custom(item: Any) -> bool:
    """True for user-authored items; catalogs without the flag are all system items."""
    return getattr(item, "is_custom", False) is True
