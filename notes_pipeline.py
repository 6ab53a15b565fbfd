"""
AI note generation: build the request, call Gemini, segment, merge.

``generate_*`` functions return block sets ({"1": html, ...}) so a caller can
merge them into whatever the notes look like when the response arrives.
``import_*`` functions do the merge as well. Saving is left to the caller.
"""
import logging

from error_handler import EmptyInputError, GenerationRequestError
from generate_notes import generate_text
from generation_request import FULL, SINGLE, GenerationRequest, build_generation_request
from logger import get_generation_logger
from merge_notes import merge_block_set
from segment_content import segment_full_curriculum, segment_single_block

logger = logging.getLogger(__name__)


def run_generation(request: GenerationRequest, api_key, client=None, generation_logger=None, to_blocks=None):
    """
    One logged Gemini call for a generation request.
    Returns the generated text, or ``to_blocks(text)`` when given.
    """
    if not request.raw_input_text or not request.raw_input_text.strip():
        raise EmptyInputError("No content provided for generation")

    generation_logger = generation_logger or get_generation_logger()
    session_id = generation_logger.start_generation(
        request.subject, request.mode, request.target_block, len(request.raw_input_text)
    )

    def record_usage(input_tokens, output_tokens, total_tokens):
        generation_logger.record_tokens(session_id, input_tokens, output_tokens, total_tokens)

    try:
        text = generate_text(build_generation_request(request), api_key, client=client, on_usage=record_usage)
    except GenerationRequestError as e:
        generation_logger.fail_generation(session_id, e.error_type, e.technical_error)
        raise

    if to_blocks is None:
        generation_logger.complete_generation(session_id)
        return text

    blocks = to_blocks(text)
    generation_logger.complete_generation(session_id, blocks_written=list(blocks))
    return blocks


def generate_full_curriculum(subject, raw_text, api_key, client=None, generation_logger=None) -> dict:
    """Have Gemini split a whole curriculum, then segment it into blocks 1-6."""
    request = GenerationRequest(subject=subject, mode=FULL, raw_input_text=raw_text)
    blocks = run_generation(request, api_key, client, generation_logger, to_blocks=segment_full_curriculum)
    logger.info(f"Full curriculum generated for {subject}")
    return blocks


def generate_block_notes(subject, block, raw_text, api_key, client=None, generation_logger=None) -> dict:
    """Format resource text as the notes of one block."""
    request = GenerationRequest(subject=subject, mode=SINGLE, raw_input_text=raw_text, target_block=block)
    blocks = run_generation(
        request, api_key, client, generation_logger,
        to_blocks=lambda text: segment_single_block(text, request.target_block)
    )
    logger.info(f"Block {request.target_block} generated for {subject}")
    return blocks


def import_full_curriculum(notes, subject, raw_text, api_key, client=None, generation_logger=None) -> dict:
    blocks = generate_full_curriculum(subject, raw_text, api_key, client, generation_logger)
    return merge_block_set(notes, subject, blocks)


def import_single_block(notes, subject, block, raw_text, api_key, client=None, generation_logger=None) -> dict:
    blocks = generate_block_notes(subject, block, raw_text, api_key, client, generation_logger)
    return merge_block_set(notes, subject, blocks)


def enhance_note(subject, block, content, api_key, client=None, generation_logger=None) -> str:
    """Summarize and format a note. Nothing is merged; the editor decides."""
    request = GenerationRequest(subject=subject, mode=SINGLE, raw_input_text=content, target_block=block)
    return run_generation(request, api_key, client, generation_logger)
