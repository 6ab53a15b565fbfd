import re
from dataclasses import dataclass

from subjects import SUBJECT_IDS, normalize_block

TAG_PATTERN = re.compile(r"<[^>]*>")
SNIPPET_LENGTH = 100


@dataclass
class SearchResult:
    subject: str
    block: int
    snippet: str


def strip_tags(html: str) -> str:
    return TAG_PATTERN.sub("", html or "")


def search_notes(notes: dict, query: str) -> list:
    """Case-insensitive substring search over every saved block."""
    query = (query or "").strip().lower()
    if not query:
        return []

    subject_order = {subject: index for index, subject in enumerate(SUBJECT_IDS)}
    results = []
    for subject, blocks in notes.items():
        for block, content in blocks.items():
            block_key = normalize_block(block)
            if block_key and content and query in content.lower():
                results.append(SearchResult(
                    subject=subject,
                    block=int(block_key),
                    snippet=strip_tags(content).strip()[:SNIPPET_LENGTH],
                ))

    results.sort(key=lambda r: (subject_order.get(r.subject, len(subject_order)), r.block))
    return results
