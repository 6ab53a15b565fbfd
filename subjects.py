"""Subjects and blocks known to the app."""

SUBJECTS = [
    {"id": "biology", "name": "Biology", "color": "green"},
    {"id": "chemistry", "name": "Chemistry", "color": "red"},
    {"id": "ict", "name": "ICT", "color": "blue"},
    {"id": "physics", "name": "Physics", "color": "purple"},
    {"id": "maths", "name": "Maths", "color": "amber"},
    {"id": "english", "name": "English", "color": "teal"},
    {"id": "arabic", "name": "Arabic", "color": "orange"},
    {"id": "french", "name": "French", "color": "pink"},
    {"id": "social", "name": "Social", "color": "light-blue"},
]

SUBJECT_IDS = tuple(subject["id"] for subject in SUBJECTS)

BLOCK_COUNT = 6
BLOCKS = tuple(str(number) for number in range(1, BLOCK_COUNT + 1))


def is_known_subject(subject) -> bool:
    return subject in SUBJECT_IDS


def subject_name(subject: str) -> str:
    """Display name for a subject id, e.g. 'ict' -> 'ICT'."""
    for entry in SUBJECTS:
        if entry["id"] == subject:
            return entry["name"]
    return subject.capitalize()


def subject_color(subject: str) -> str:
    for entry in SUBJECTS:
        if entry["id"] == subject:
            return entry["color"]
    return "grey"


def normalize_block(block):
    """
    Return the storage key for a block number ("1".."6"), or None.
    Accepts ints and numeric strings.
    """
    if isinstance(block, bool):
        return None
    try:
        number = int(str(block).strip())
    except (TypeError, ValueError):
        return None
    if 1 <= number <= BLOCK_COUNT:
        return str(number)
    return None
