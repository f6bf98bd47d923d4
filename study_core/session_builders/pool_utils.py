"""
Pool utilities for session builders.

These helpers provide shared, minimal primitives for ordering and sampling
session pools without enforcing a single scheduling policy.
"""

from __future__ import annotations
import random
from typing import Optional, Sequence, TypeVar, Union

from study_core.review_store import ReviewStore
from study_core.session_builders.pool_types import SessionCard, is_custom


T = TypeVar("T")


def sort_by_due(cards: Sequence[SessionCard]) -> list[SessionCard]:
    """
    Order cards earliest-due first.

    Python's sort is stable, so equal due dates keep catalog order.
    """
    return sorted(cards, key=lambda card: card.record.memory_state.due)


def session_rng(store: ReviewStore, seed: Optional[Union[int, str]] = None) -> random.Random:
    """
    Random generator for shuffling new items.

    Without an explicit seed the store's rollover date is used, so rebuilding
    a session on the same day with the same inputs gives the same order.
    """
    if seed is None:
        seed = f"session:{store.last_rollover_date}"
    return random.Random(seed)


def shuffled(items: Sequence[T], rng: random.Random) -> list[T]:
    """Uniform random permutation of `items` (input left untouched)."""
    result = list(items)
    rng.shuffle(result)
    return result


def custom_first_shuffle(cards: Sequence[SessionCard], rng: random.Random) -> list[SessionCard]:
    """
    Shuffle custom and system cards separately and put custom cards first.
    """
    custom_cards = [card for card in cards if is_custom(card.item)]
    system_cards = [card for card in cards if not is_custom(card.item)]
    return shuffled(custom_cards, rng) + shuffled(system_cards, rng)


def take(cards: Sequence[T], count: int) -> list[T]:
    """First `count` items; never pads, empty for count <= 0."""
    if count <= 0:
        return []
    return list(cards[:count])
