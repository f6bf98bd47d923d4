"""
Unit tests for the session cursor state machine.
"""

import pytest

from study_core.errors import SessionFinishedError
from study_core.memory.constants import Grade, LearningStage
from study_core.review_store import default_store, get_or_create
from study_core.session_builders.pool_types import SessionCard
from study_core.session_cursor import CursorState, SessionCursor

from conftest import NOW, TODAY, make_card, make_record


def cards(*item_ids):
    store = default_store(TODAY)
    return [
        SessionCard(item=make_card(i), record=get_or_create(i, store, NOW), is_new=True)
        for i in item_ids
    ]


def current_id(cursor):
    return cursor.current.item_id


class TestMainQueue:
    """Walking the main queue."""

    def test_start_presents_first_card(self):
        cursor = SessionCursor.start(cards(1, 2))

        assert cursor.state == CursorState.PRESENTING_MAIN
        assert current_id(cursor) == 1
        assert cursor.remaining == 2
        assert cursor.position == 0

    def test_good_advances(self):
        cursor = SessionCursor.start(cards(1, 2)).answer(Grade.GOOD)

        assert current_id(cursor) == 2
        assert cursor.relearn_count == 0

    def test_again_in_main_requeues(self):
        """AGAIN moves the card to the relearn tail and advances."""
        cursor = SessionCursor.start(cards(1, 2, 3))
        updated = make_record(1, LearningStage.LEARNING, NOW)

        after = cursor.answer(Grade.AGAIN, updated)

        assert after.index == 1
        assert current_id(after) == 2
        assert after.relearn_count == 1
        assert after.relearn_queue[0].record is updated
        assert after.remaining == 3

    def test_empty_session_is_finished(self):
        cursor = SessionCursor.start([])

        assert cursor.is_finished
        assert cursor.state == CursorState.FINISHED
        assert cursor.current is None

    def test_transitions_do_not_mutate(self):
        cursor = SessionCursor.start(cards(1, 2))

        cursor.answer(Grade.AGAIN)

        assert cursor.index == 0
        assert cursor.relearn_queue == ()


class TestRelearnQueue:
    """Round-robin relearning after the main queue."""

    def test_relearn_follows_main_queue(self):
        cursor = SessionCursor.start(cards(1, 2))
        cursor = cursor.answer(Grade.AGAIN).answer(Grade.GOOD)

        assert cursor.state == CursorState.PRESENTING_RELEARN
        assert current_id(cursor) == 1

    def test_again_in_relearn_rotates(self):
        cursor = SessionCursor.start(cards(1, 2))
        cursor = cursor.answer(Grade.AGAIN).answer(Grade.AGAIN)
        assert [c.item_id for c in cursor.relearn_queue] == [1, 2]

        updated = make_record(1, LearningStage.LEARNING, NOW)
        cursor = cursor.answer(Grade.AGAIN, updated)

        assert [c.item_id for c in cursor.relearn_queue] == [2, 1]
        assert cursor.relearn_queue[-1].record is updated

    def test_good_in_relearn_pops(self):
        cursor = SessionCursor.start(cards(1))
        cursor = cursor.answer(Grade.AGAIN).answer(Grade.HARD)

        assert cursor.is_finished

    def test_answering_finished_cursor_raises(self):
        cursor = SessionCursor.start(cards(1)).answer(Grade.GOOD)

        with pytest.raises(SessionFinishedError):
            cursor.answer(Grade.GOOD)

    def test_session_terminates_once_everything_passes(self):
        """Every card failed once, then passed: the session ends."""
        cursor = SessionCursor.start(cards(1, 2, 3))
        steps = 0
        failed = set()
        while not cursor.is_finished:
            item_id = current_id(cursor)
            grade = Grade.GOOD if item_id in failed else Grade.AGAIN
            failed.add(item_id)
            cursor = cursor.answer(grade)
            steps += 1
            assert steps < 20

        assert steps == 6


class TestCatalogEdits:
    """Items deleted or edited mid-session."""

    def test_remove_from_main_queue(self):
        cursor = SessionCursor.start(cards(1, 2, 3)).answer(Grade.GOOD)

        cursor = cursor.remove_item(3)

        assert [c.item_id for c in cursor.main_queue] == [1, 2]
        assert current_id(cursor) == 2

    def test_remove_already_presented_keeps_current(self):
        cursor = SessionCursor.start(cards(1, 2, 3)).answer(Grade.GOOD)

        cursor = cursor.remove_item(1)

        assert current_id(cursor) == 2
        assert cursor.index == 0

    def test_remove_from_relearn_queue(self):
        cursor = SessionCursor.start(cards(1, 2))
        cursor = cursor.answer(Grade.AGAIN).answer(Grade.AGAIN)

        cursor = cursor.remove_item(1)

        assert [c.item_id for c in cursor.relearn_queue] == [2]

    def test_remove_during_main_drops_relearn_copy(self):
        cursor = SessionCursor.start(cards(1, 2, 3)).answer(Grade.AGAIN)

        cursor = cursor.remove_item(1)

        assert cursor.relearn_queue == ()
        assert [c.item_id for c in cursor.main_queue] == [2, 3]
        assert current_id(cursor) == 2

        seen = []
        while not cursor.is_finished:
            seen.append(current_id(cursor))
            cursor = cursor.answer(Grade.GOOD)
        assert seen == [2, 3]

    def test_remove_last_card_finishes(self):
        cursor = SessionCursor.start(cards(1)).answer(Grade.AGAIN)

        assert cursor.remove_item("1").is_finished

    def test_update_item_in_both_queues(self):
        cursor = SessionCursor.start(cards(1, 2)).answer(Grade.AGAIN)
        edited = make_card(1).model_copy(update={"back": "edited"})

        cursor = cursor.update_item(edited)

        assert cursor.main_queue[0].item.back == "edited"
        assert cursor.relearn_queue[0].item.back == "edited"
        assert cursor.main_queue[1].item.back == "back 2"
