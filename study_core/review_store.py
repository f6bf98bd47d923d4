"""
Review store - per-user, per-scope review records and daily bookkeeping.

A ReviewStore is an immutable snapshot. Every helper here returns a new
store and leaves its argument untouched, so callers can keep the previous
snapshot around to roll back a failed save.

Item ids may be numeric or strings. Records and today-sets are keyed by the
string form of the id (`item_key`), which is also how they survive a JSON
round-trip through the persistence layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional, Union
from zoneinfo import ZoneInfo

from study_core.memory.memory_state import MemoryState, ReviewLog, ensure_utc, new_memory_state


ItemId = Union[int, str]


def item_key(item_id: ItemId) -> str:
    """Canonical key for an item id."""
    return str(item_id)


@dataclass(frozen=True)
class ReviewRecord:
    """
    Review state of one item.
    """
    item_id: ItemId
    memory_state: MemoryState
    log: Optional[ReviewLog] = None


@dataclass(frozen=True)
class ReviewStore:
    """
    All review records for one user and scope, plus today's bookkeeping.

    reviewed_today and new_items_today only ever hold items touched since
    last_rollover_date; both are cleared together by `rollover`.
    """
    records: Mapping[str, ReviewRecord] = field(default_factory=dict)
    reviewed_today: frozenset[str] = frozenset()
    new_items_today: frozenset[str] = frozenset()
    last_rollover_date: str = ""

    def __post_init__(self):
        # Freeze the containers so a snapshot cannot be edited behind our back
        object.__setattr__(self, "records", MappingProxyType(dict(self.records)))
        object.__setattr__(self, "reviewed_today", frozenset(item_key(i) for i in self.reviewed_today))
        object.__setattr__(self, "new_items_today", frozenset(item_key(i) for i in self.new_items_today))

    def get(self, item_id: ItemId) -> Optional[ReviewRecord]:
        return self.records.get(item_key(item_id))

    def was_reviewed_today(self, item_id: ItemId) -> bool:
        return item_key(item_id) in self.reviewed_today

    def was_new_today(self, item_id: ItemId) -> bool:
        return item_key(item_id) in self.new_items_today


def study_date(now: datetime, tz: Optional[str] = None) -> str:
    """
    Calendar date (YYYY-MM-DD) that `now` falls on in the study timezone.

    Args:
        now: Current time
        tz: IANA timezone name; UTC when omitted

    Returns:
        ISO date string used as the rollover marker
    """
    now = ensure_utc(now)
    if tz and tz.upper() != "UTC":
        now = now.astimezone(ZoneInfo(tz))
    return now.date().isoformat()


def default_store(today: str) -> ReviewStore:
    """Fresh store for a first run, a failed load or a progress reset."""
    return ReviewStore(last_rollover_date=today)


def get_or_create(item_id: ItemId, store: ReviewStore, now: datetime) -> ReviewRecord:
    """
    Return the item's record, or a fresh NEW record due at `now`.

    The store is not modified; callers merge a new record in with
    `with_record` once it has been rated.
    """
    record = store.get(item_id)
    if record is not None:
        return record
    return ReviewRecord(item_id=item_id, memory_state=new_memory_state(now))


def rollover(store: ReviewStore, today: str) -> ReviewStore:
    """
    Start a new study day if the date changed.

    Returns `store` itself when `today` matches its rollover date, otherwise
    a copy with both today-sets cleared.
    """
    if store.last_rollover_date == today:
        return store
    return replace(
        store,
        reviewed_today=frozenset(),
        new_items_today=frozenset(),
        last_rollover_date=today,
    )


def with_record(store: ReviewStore, record: ReviewRecord) -> ReviewStore:
    """Copy of the store with `record` inserted or replaced."""
    records = dict(store.records)
    records[item_key(record.item_id)] = record
    return replace(store, records=records)


def mark_reviewed(store: ReviewStore, item_id: ItemId) -> ReviewStore:
    """Add an item to reviewed_today (idempotent)."""
    key = item_key(item_id)
    if key in store.reviewed_today:
        return store
    return replace(store, reviewed_today=store.reviewed_today | {key})


def mark_new_seen(store: ReviewStore, item_id: ItemId) -> ReviewStore:
    """Add an item to new_items_today (idempotent)."""
    key = item_key(item_id)
    if key in store.new_items_today:
        return store
    return replace(store, new_items_today=store.new_items_today | {key})
