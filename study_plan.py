import logging

import config
from notes_storage import read_json_record, write_json_record
from subjects import BLOCK_COUNT, SUBJECT_IDS, is_known_subject, normalize_block

logger = logging.getLogger(__name__)


def progress_key(subject, block):
    return f"{subject}-{normalize_block(block)}"


def is_valid_progress(data) -> bool:
    return isinstance(data, dict) and all(isinstance(done, bool) for done in data.values())


class StudyPlan:
    """Tracks which subject blocks have been revised."""

    def __init__(self, storage, key=None):
        self.storage = storage
        self.key = key or config.STUDY_PROGRESS_KEY
        self.progress = read_json_record(self.storage, self.key, is_valid_progress, dict)

    def is_done(self, subject, block) -> bool:
        return self.progress.get(progress_key(subject, block), False)

    def toggle(self, subject, block) -> bool:
        """Flip a block between done and not done, save, and return the new state."""
        if not is_known_subject(subject) or normalize_block(block) is None:
            logger.warning(f"Ignoring study plan toggle for {subject!r} / {block!r}")
            return False

        key = progress_key(subject, block)
        self.progress = {**self.progress, key: not self.progress.get(key, False)}
        write_json_record(self.storage, self.key, self.progress)
        return self.progress[key]

    def percent_complete(self) -> int:
        total_blocks = len(SUBJECT_IDS) * BLOCK_COUNT
        completed = sum(
            1 for subject in SUBJECT_IDS
            for block in range(1, BLOCK_COUNT + 1)
            if self.is_done(subject, block)
        )
        return int(completed * 100 / total_blocks + 0.5)
