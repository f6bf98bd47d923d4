"""
Session cursor - walks a built session, re-queueing failed cards

The main queue (reviews then new items) is presented once, in order. A card
answered AGAIN is copied onto the relearn queue, which is worked through
round-robin after the main queue: AGAIN sends the head to the back, any
other grade drops it. The session finishes when the main queue is exhausted
and the relearn queue is empty.

Cursors are immutable; every transition returns a new cursor.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Sequence

from study_core.errors import SessionFinishedError
from study_core.memory.constants import Grade
from study_core.review_store import ItemId, ReviewRecord, item_key
from study_core.session_builders.pool_types import SessionCard


class CursorState(str, Enum):
    PRESENTING_MAIN = "presenting_main"
    PRESENTING_RELEARN = "presenting_relearn"
    FINISHED = "finished"


def _same_item(card: SessionCard, item_id: ItemId) -> bool:
    return item_key(card.item_id) == item_key(item_id)


@dataclass(frozen=True)
class SessionCursor:
    """
    Position within one study session.
    """
    main_queue: tuple[SessionCard, ...] = ()
    index: int = 0
    relearn_queue: tuple[SessionCard, ...] = ()

    @classmethod
    def start(cls, cards: Sequence[SessionCard]) -> "SessionCursor":
        """Cursor at the first card of `cards`."""
        return cls(main_queue=tuple(cards))

    @property
    def in_main(self) -> bool:
        return self.index < len(self.main_queue)

    @property
    def is_finished(self) -> bool:
        return not self.in_main and not self.relearn_queue

    @property
    def state(self) -> CursorState:
        if self.in_main:
            return CursorState.PRESENTING_MAIN
        if self.relearn_queue:
            return CursorState.PRESENTING_RELEARN
        return CursorState.FINISHED

    @property
    def current(self) -> Optional[SessionCard]:
        """Card being presented, or None once finished."""
        if self.in_main:
            return self.main_queue[self.index]
        if self.relearn_queue:
            return self.relearn_queue[0]
        return None

    @property
    def remaining(self) -> int:
        """Cards still to present, counting relearn copies."""
        return max(0, len(self.main_queue) - self.index) + len(self.relearn_queue)

    @property
    def relearn_count(self) -> int:
        return len(self.relearn_queue)

    @property
    def position(self) -> int:
        """Number of main-queue cards already answered."""
        return min(self.index, len(self.main_queue))

    def answer(self, grade: Grade, record: Optional[ReviewRecord] = None) -> "SessionCursor":
        """
        Advance past the current card.

        Args:
            grade: Grade given to the current card
            record: The card's record after rating; kept on relearn copies

        Returns:
            The next cursor

        Raises:
            SessionFinishedError: If the session is already finished
        """
        current = self.current
        if current is None:
            raise SessionFinishedError("Session is finished; no card to answer")

        updated = replace(current, record=record) if record is not None else current

        if Grade(grade) == Grade.AGAIN:
            if self.in_main:
                return replace(
                    self,
                    index=self.index + 1,
                    relearn_queue=self.relearn_queue + (updated,),
                )
            return replace(self, relearn_queue=self.relearn_queue[1:] + (updated,))

        if self.in_main:
            return replace(self, index=self.index + 1)
        return replace(self, relearn_queue=self.relearn_queue[1:])

    def remove_item(self, item_id: ItemId) -> "SessionCursor":
        """
        Drop a deleted item from both queues.
        """
        kept = tuple(card for card in self.main_queue if not _same_item(card, item_id))
        # Keep pointing at the same card when earlier cards are removed
        removed_before = sum(
            1 for card in self.main_queue[:self.index] if _same_item(card, item_id)
        )
        return replace(
            self,
            main_queue=kept,
            index=self.index - removed_before,
            relearn_queue=tuple(
                card for card in self.relearn_queue if not _same_item(card, item_id)
            ),
        )

    def update_item(self, item: Any) -> "SessionCursor":
        """
        Replace an edited item's payload everywhere it is queued.
        """
        def swap(cards: tuple[SessionCard, ...]) -> tuple[SessionCard, ...]:
            return tuple(
                replace(card, item=item) if _same_item(card, item.id) else card
                for card in cards
            )

        return replace(
            self,
            main_queue=swap(self.main_queue),
            relearn_queue=swap(self.relearn_queue),
        )
