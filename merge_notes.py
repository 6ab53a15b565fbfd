"""
Copy-on-write updates to the notes mapping.

Every function returns a new top-level dict. Only the named subject's block
dict is replaced; all other subjects are shared with the input.
"""
import logging

from subjects import is_known_subject, normalize_block

logger = logging.getLogger(__name__)


def merge_single_block(notes: dict, subject: str, block, content: str) -> dict:
    """Return a new store with ``notes[subject][block] = content``."""
    block_key = normalize_block(block)
    if not is_known_subject(subject) or block_key is None:
        logger.warning(f"Ignoring note update for unknown subject/block: {subject!r} / {block!r}")
        return notes

    subject_notes = dict(notes.get(subject, {}))
    subject_notes[block_key] = content
    return {**notes, subject: subject_notes}


def merge_block_set(notes: dict, subject: str, block_contents: dict) -> dict:
    """
    Overwrite every block in ``block_contents`` for one subject.
    Blocks not mentioned keep their current content.
    """
    if not is_known_subject(subject):
        logger.warning(f"Ignoring block set for unknown subject: {subject!r}")
        return notes

    updates = {}
    for block, content in block_contents.items():
        block_key = normalize_block(block)
        if block_key is None:
            logger.warning(f"Skipping invalid block {block!r} for {subject}")
            continue
        updates[block_key] = content

    if not updates:
        return notes

    return {**notes, subject: {**notes.get(subject, {}), **updates}}
