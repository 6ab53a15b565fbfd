import logging

from error_handler import ErrorHandler, GenerationRequestError
from generate_notes import generate_text
from generation_request import build_assistant_request
from subjects import BLOCKS, subject_name

logger = logging.getLogger(__name__)

FALLBACK_REPLY = (
    "I apologize, but I couldn't generate a response. "
    "Please try asking your question in a different way."
)


def build_context(notes: dict, subject) -> str:
    """Saved notes of one subject, block by block, for the assistant prompt."""
    if not subject or not notes.get(subject):
        return ""

    subject_notes = notes[subject]
    context = f"Here are the relevant notes for {subject_name(subject)}:\n\n"
    for block in BLOCKS:
        if subject_notes.get(block):
            context += f"Block {block}:\n{subject_notes[block]}\n\n"
    return context


def ask(notes: dict, subject, question: str, api_key, client=None) -> str:
    """Answer a question about the notes. Failures become an apology reply."""
    if not question or not question.strip():
        return ""

    payload = build_assistant_request(subject, build_context(notes, subject), question.strip())
    try:
        return generate_text(payload, api_key, client=client)
    except GenerationRequestError as e:
        ErrorHandler.log_exception(e, "Study assistant question")
        return FALLBACK_REPLY
