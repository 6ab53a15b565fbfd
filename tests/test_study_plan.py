"""Unit tests for study plan progress tracking."""

import json

import config
from notes_storage import MappingStorage
from study_plan import StudyPlan, progress_key
from subjects import SUBJECT_IDS


class TestStudyPlan:

    def test_starts_empty(self, memory_storage):
        plan = StudyPlan(memory_storage)

        assert not plan.is_done("physics", 1)
        assert plan.percent_complete() == 0

    def test_toggle_persists(self, memory_storage):
        assert StudyPlan(memory_storage).toggle("physics", 2) is True

        reloaded = StudyPlan(memory_storage)
        assert reloaded.is_done("physics", 2)
        assert reloaded.is_done("physics", "2")
        stored = json.loads(memory_storage.mapping[config.STUDY_PROGRESS_KEY])
        assert stored == {"physics-2": True}

    def test_toggle_twice_undoes(self, memory_storage):
        plan = StudyPlan(memory_storage)

        plan.toggle("maths", 6)

        assert plan.toggle("maths", 6) is False
        assert not StudyPlan(memory_storage).is_done("maths", 6)

    def test_unknown_subject_or_block_ignored(self, memory_storage):
        plan = StudyPlan(memory_storage)

        assert plan.toggle("history", 1) is False
        assert plan.toggle("physics", 7) is False
        assert memory_storage.mapping == {}

    def test_percent_complete_rounds(self, memory_storage):
        plan = StudyPlan(memory_storage)

        plan.toggle("biology", 1)

        assert plan.percent_complete() == 2

    def test_all_done(self):
        progress = {progress_key(s, b): True for s in SUBJECT_IDS for b in range(1, 7)}
        storage = MappingStorage({config.STUDY_PROGRESS_KEY: json.dumps(progress)})

        assert StudyPlan(storage).percent_complete() == 100

    def test_malformed_progress_starts_empty(self):
        storage = MappingStorage({config.STUDY_PROGRESS_KEY: '{"physics-1": "yes"}'})

        assert StudyPlan(storage).progress == {}
