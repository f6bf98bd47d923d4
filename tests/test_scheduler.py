"""
Tests for the FSRS memory model adapter (uses the real `fsrs` library).
"""

from datetime import timedelta

from study_core.memory.constants import ALL_GRADES, Grade, LearningStage
from study_core.memory.memory_state import is_due, new_memory_state
from study_core.memory.scheduler import FsrsMemoryModel, get_default_model
from study_core.rating import next_intervals

from conftest import NOW


class TestFsrsMemoryModel:

    def setup_method(self):
        self.model = FsrsMemoryModel(desired_retention=0.9, enable_fuzzing=False)

    def test_projects_every_grade(self):
        projections = self.model.repeat(new_memory_state(NOW), NOW)

        assert set(projections) == set(ALL_GRADES)
        for grade, projection in projections.items():
            assert projection.log.grade == grade
            assert projection.log.stage == LearningStage.NEW
            assert projection.state.reps == 1
            assert projection.state.stability is not None
            assert projection.state.due.tzinfo is not None

    def test_new_item_again_stays_in_learning(self):
        state = self.model.repeat(new_memory_state(NOW), NOW)[Grade.AGAIN].state

        assert state.stage == LearningStage.LEARNING
        assert state.due - NOW < timedelta(hours=1)

    def test_new_item_easy_graduates(self):
        state = self.model.repeat(new_memory_state(NOW), NOW)[Grade.EASY].state

        assert state.stage == LearningStage.REVIEW
        assert state.due - NOW >= timedelta(days=1)

    def test_harder_grades_never_schedule_later(self):
        projections = self.model.repeat(new_memory_state(NOW), NOW)
        dues = [projections[grade].state.due for grade in ALL_GRADES]

        assert dues == sorted(dues)

    def test_review_lapse_goes_to_relearning(self):
        state = self.model.repeat(new_memory_state(NOW), NOW)[Grade.EASY].state
        later = state.due + timedelta(days=1)

        lapsed = self.model.repeat(state, later)[Grade.AGAIN].state

        assert lapsed.stage == LearningStage.RELEARNING
        assert lapsed.lapses == 1
        assert lapsed.reps == 2

    def test_deterministic_without_fuzzing(self):
        state = new_memory_state(NOW)

        first = self.model.repeat(state, NOW)[Grade.GOOD].state
        second = self.model.repeat(state, NOW)[Grade.GOOD].state

        assert first == second

    def test_input_state_untouched(self):
        state = new_memory_state(NOW)

        self.model.repeat(state, NOW)

        assert state == new_memory_state(NOW)


class TestHelpers:

    def test_new_items_are_never_due(self):
        assert not is_due(new_memory_state(NOW - timedelta(days=3)), NOW)

    def test_default_model_is_shared(self):
        assert get_default_model() is get_default_model()

    def test_labels_from_real_model(self):
        labels = next_intervals(new_memory_state(NOW), NOW, FsrsMemoryModel())

        assert set(labels) == set(ALL_GRADES)
        assert labels[Grade.EASY].endswith("d")

    def test_is_new_until_first_rating(self):
        state = new_memory_state(NOW)
        rated = FsrsMemoryModel().repeat(state, NOW)[Grade.AGAIN].state

        assert state.is_new
        assert not rated.is_new
