"""
Split AI generated curriculum notes into the six subject blocks.

Three strategies are tried in order until one yields all six blocks:

1. ``match_block_markers``  - "Block N:" level-2 headings, keyed by N
2. ``split_on_headings``    - any level-2 heading, keyed by position
3. ``chunk_evenly``         - blank-line paragraphs dealt into six groups

Each strategy is a pure function over plain text.
"""
import logging
import math
import re

from subjects import BLOCK_COUNT, BLOCKS, normalize_block

logger = logging.getLogger(__name__)

# <h2>Block 3: Cells</h2>, <h2>\n  Block 3: Cells\n</h2>, <h2 class="x"><strong>📘 Block 3 - Cells</strong></h2>, ## Block 3: Cells
BLOCK_MARKER = re.compile(
    r"(?:<h2\b[^>]*>\s*|^[ \t]*##[ \t]+)"
    r"(?:<(?!/h2)[^>]+>\s*)*"
    r"(?:[^\w<\n]{1,4}[ \t]*)?"
    r"Block[ \t]+(\d+)[ \t]*[:.\-–—]",
    re.IGNORECASE | re.MULTILINE,
)

HEADING_OPEN = re.compile(r"<h2[\s>]|^[ \t]*##[ \t]", re.IGNORECASE | re.MULTILINE)

PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")


def empty_blocks():
    return {block: "" for block in BLOCKS}


def match_block_markers(text: str) -> dict:
    """
    Blocks keyed by the number in their "Block N" heading.

    Each block runs from its heading up to the next heading or end of text.
    Text before the first heading is dropped. Numbers outside 1-6 are not
    treated as boundaries. When a number repeats, the later block wins.
    """
    markers = []
    for match in BLOCK_MARKER.finditer(text):
        block = normalize_block(match.group(1))
        if block is None:
            logger.debug(f"Ignoring out of range block marker: {match.group(0)!r}")
            continue
        markers.append((match.start(), block))

    blocks = {}
    for index, (start, block) in enumerate(markers):
        end = markers[index + 1][0] if index + 1 < len(markers) else len(text)
        if block in blocks:
            logger.warning(f"Block {block} appears more than once, keeping the later one")
        blocks[block] = text[start:end]
    return blocks


def split_on_headings(text: str) -> dict:
    """
    Blocks 1-6 assigned in order to the segments between level-2 headings.
    Blank segments are skipped. Anything past the sixth segment is appended
    to block 6.
    """
    starts = [match.start() for match in HEADING_OPEN.finditer(text)]
    if not starts:
        return {}

    bounds = [0] + starts + [len(text)]
    segments = [text[a:b] for a, b in zip(bounds, bounds[1:])]
    segments = [segment for segment in segments if segment.strip()]

    blocks = {}
    for index, segment in enumerate(segments[:BLOCK_COUNT]):
        blocks[BLOCKS[index]] = segment
    if len(segments) > BLOCK_COUNT:
        blocks[BLOCKS[-1]] += "".join(segments[BLOCK_COUNT:])
    return blocks


def split_paragraphs(text: str) -> list:
    return [part.strip() for part in PARAGRAPH_BREAK.split(text) if part.strip()]


def chunk_evenly(text: str) -> dict:
    """
    Deal paragraphs into six contiguous groups of ceil(n/6).
    Each non-empty group gets a "Block N" heading; trailing groups may be "".
    """
    paragraphs = split_paragraphs(text)
    blocks = empty_blocks()
    if not paragraphs:
        return blocks

    size = math.ceil(len(paragraphs) / BLOCK_COUNT)
    for index, block in enumerate(BLOCKS):
        group = paragraphs[index * size:(index + 1) * size]
        if group:
            blocks[block] = f"<h2>Block {block}</h2>\n" + "\n\n".join(group)
    return blocks


def segment_full_curriculum(text: str) -> dict:
    """Always returns exactly the keys "1".."6"."""
    text = text or ""

    blocks = match_block_markers(text)
    if len(blocks) >= BLOCK_COUNT:
        logger.info("Segmented curriculum using block markers")
        return {block: blocks[block] for block in BLOCKS}

    blocks = split_on_headings(text)
    if len(blocks) >= BLOCK_COUNT:
        logger.info("Segmented curriculum using heading positions")
        return {block: blocks[block] for block in BLOCKS}

    if text.strip():
        logger.info("No usable headings found, chunking curriculum evenly")
    return chunk_evenly(text)


def segment_single_block(text: str, target_block) -> dict:
    """The whole generated text goes to the requested block."""
    block = normalize_block(target_block)
    if block is None:
        raise ValueError(f"Invalid block number: {target_block!r}")
    return {block: text or ""}
