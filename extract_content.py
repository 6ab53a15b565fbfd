import logging
from pathlib import Path

# Libraries for reading uploaded resources
import fitz  # PyMuPDF for PDFs
from docx import Document  # python-docx for DOCX files

import config
from error_handler import ResourceExtractionError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt", ".md")


def validate_file_size(file_size_bytes):
    file_size_mb = file_size_bytes / (1024 * 1024)
    if file_size_mb > config.MAX_FILE_SIZE_MB:
        logger.warning(f"File too large: {file_size_mb:.1f}MB > {config.MAX_FILE_SIZE_MB}MB")
        raise ResourceExtractionError(f"File is {file_size_mb:.1f}MB", "FILE_TOO_LARGE")


def extract_pdf_text(file_path):
    try:
        doc = fitz.open(file_path)
    except Exception as e:
        # PyMuPDF raises its own FileDataError/RuntimeError family
        raise ResourceExtractionError(f"Could not open PDF {file_path}: {e}") from e

    try:
        if doc.page_count > config.MAX_PAGES:
            logger.warning(f"Too many pages: {doc.page_count} > {config.MAX_PAGES}")
            raise ResourceExtractionError(f"PDF has {doc.page_count} pages", "TOO_MANY_PAGES")
        return "\n\n".join(page.get_text() for page in doc)
    finally:
        doc.close()


def extract_docx_text(file_path):
    try:
        doc = Document(file_path)
    except Exception as e:
        raise ResourceExtractionError(f"Could not open DOCX {file_path}: {e}") from e
    return "\n\n".join(p.text for p in doc.paragraphs if p.text.strip())


def extract_text(file_path) -> str:
    """Read the text of an uploaded resource (PDF, DOCX, TXT or MD)."""
    file_path = Path(file_path)
    file_extension = file_path.suffix.lower()
    logger.info(f"Extracting text from: {file_path} (type: {file_extension})")

    if file_extension not in SUPPORTED_EXTENSIONS:
        raise ResourceExtractionError(f"Unsupported file format: {file_extension}", "UNSUPPORTED_FORMAT")

    try:
        validate_file_size(file_path.stat().st_size)
    except OSError as e:
        raise ResourceExtractionError(f"Could not read {file_path}: {e}") from e

    if file_extension == ".pdf":
        text = extract_pdf_text(file_path)
    elif file_extension == ".docx":
        text = extract_docx_text(file_path)
    else:
        try:
            text = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ResourceExtractionError(f"Could not read {file_path}: {e}") from e

    if not text.strip():
        raise ResourceExtractionError(f"No text found in {file_path.name}")

    logger.info(f"Extracted {len(text)} characters from {file_path.name}")
    return text


def combine_resources(resources) -> str:
    """Join (file name, text) pairs into one prompt input."""
    return "\n\n".join(f"{name}\n{text.strip()}" for name, text in resources)
