import pytest

from subjects import BLOCKS, SUBJECT_IDS, normalize_block, subject_color, subject_name


@pytest.mark.parametrize("block, expected", [
    (1, "1"), ("6", "6"), (" 3 ", "3"), (0, None), (7, None), ("x", None), (None, None), (True, None),
])
def test_normalize_block(block, expected):
    assert normalize_block(block) == expected


def test_subjects_and_blocks():
    assert len(SUBJECT_IDS) == 9
    assert BLOCKS == ("1", "2", "3", "4", "5", "6")


def test_display_names():
    assert subject_name("ict") == "ICT"
    assert subject_name("history") == "History"
    assert subject_color("history") == "grey"
