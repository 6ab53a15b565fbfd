import logging
import traceback
from datetime import datetime

import requests

import config

logger = logging.getLogger(__name__)


class NotesAppError(Exception):
    """Base error for the notes app. Carries an error type for the UI."""

    default_error_type = "UNKNOWN_ERROR"

    def __init__(self, technical_error: str = "", error_type: str = None):
        super().__init__(technical_error)
        self.technical_error = technical_error
        self.error_type = error_type or self.default_error_type


class StorageReadError(NotesAppError):
    default_error_type = "STORAGE_READ_ERROR"


class StorageWriteError(NotesAppError):
    default_error_type = "STORAGE_WRITE_ERROR"


class GenerationRequestError(NotesAppError):
    default_error_type = "NOTES_GENERATION_FAILED"


class EmptyInputError(NotesAppError):
    default_error_type = "EMPTY_INPUT"


class ResourceExtractionError(NotesAppError):
    default_error_type = "EXTRACTION_FAILED"


class ErrorHandler:
    """
    Centralized error handling for the notes app.
    Classifies technical errors, logs them and returns user-friendly messages.
    """

    error_messages = {
        "API_KEY_MISSING": (
            "🔧 AI Not Configured",
            "The AI service has no API key configured. Add GOOGLE_API_KEY to your environment and try again."
        ),
        "API_AUTHENTICATION_ERROR": (
            "🔧 Service Configuration Issue",
            "The AI service rejected our credentials. Please check the API key and try again."
        ),
        "API_QUOTA_EXCEEDED": (
            "⏳ Service Temporarily Busy",
            "The AI service is experiencing high demand. Please wait a few minutes and try again. Your notes are safe."
        ),
        "NETWORK_ERROR": (
            "🌐 Connection Issue",
            "We're having trouble connecting to the AI service. Please check your internet connection and try again."
        ),
        "PROCESSING_TIMEOUT": (
            "⏱️ Processing Timeout",
            "The AI is taking longer than expected. Please try again with less content."
        ),
        "NOTES_GENERATION_FAILED": (
            "🤖 AI Processing Issue",
            "The AI had trouble generating your notes. This is usually temporary. Please try again."
        ),
        "EMPTY_INPUT": (
            "✏️ Nothing to Process",
            "Please enter some content first."
        ),
        "EXTRACTION_FAILED": (
            "📄 Document Processing Issue",
            "We had trouble reading your file. Please try a different file or format."
        ),
        "FILE_TOO_LARGE": (
            "📁 File Size Too Large",
            f"Your file is larger than our {config.MAX_FILE_SIZE_MB}MB limit. Please upload a smaller file."
        ),
        "TOO_MANY_PAGES": (
            "📖 Document Too Long",
            f"Your document has more than {config.MAX_PAGES} pages. Please split it into smaller sections."
        ),
        "UNSUPPORTED_FORMAT": (
            "📄 Unsupported File Format",
            "We support PDF, DOCX and plain text files. Please convert your file and try again."
        ),
        "STORAGE_READ_ERROR": (
            "💾 Notes Could Not Be Loaded",
            "Your saved notes could not be read, so we started with an empty notebook."
        ),
        "STORAGE_WRITE_ERROR": (
            "💾 Notes Could Not Be Saved",
            "Your latest change could not be saved. It is still visible until you leave the page."
        ),
        "UNKNOWN_ERROR": (
            "🚧 Unexpected Issue",
            "Something unexpected happened. Please try again."
        )
    }

    @staticmethod
    def classify_error(technical_error: str) -> str:
        """
        Automatically classify errors based on technical error messages.
        Returns the appropriate error type.
        """
        error_lower = technical_error.lower()

        if any(keyword in error_lower for keyword in ["google_api_key not found", "no api key configured"]):
            return "API_KEY_MISSING"

        if any(keyword in error_lower for keyword in
               ["api key", "authentication", "unauthorized", "401", "permission denied"]):
            return "API_AUTHENTICATION_ERROR"

        if any(keyword in error_lower for keyword in
               ["rate limit", "429", "too many requests", "quota", "limit exceeded", "resource_exhausted"]):
            return "API_QUOTA_EXCEEDED"

        if any(keyword in error_lower for keyword in ["timeout", "timed out", "504", "deadline"]):
            return "PROCESSING_TIMEOUT"

        if any(keyword in error_lower for keyword in ["connection", "network", "503", "502", "unavailable"]):
            return "NETWORK_ERROR"

        return "NOTES_GENERATION_FAILED"

    @staticmethod
    def get_user_friendly_message(error_type: str) -> tuple:
        """Convert an error type to a (title, message) pair"""
        return ErrorHandler.error_messages.get(error_type, ErrorHandler.error_messages["UNKNOWN_ERROR"])

    @staticmethod
    def log_error(error_type: str, error_details: str, user_action: str = "", additional_data: dict = None):
        """Log errors for developer debugging and send a report if configured"""
        current_traceback = traceback.format_exc()
        if current_traceback == "NoneType: None\n":
            current_traceback = "No traceback available"

        logger.error(f"ERROR: {error_type} | {error_details} | Action: {user_action}")
        logger.debug(f"Full traceback: {current_traceback}")

        if not config.ERROR_REPORT_URL:
            return

        error_info = {
            "timestamp": datetime.now().isoformat(),
            "component": "klaab_notes",
            "error_type": error_type,
            "error_details": error_details,
            "user_action": user_action,
            "additional_data": additional_data or {},
            "traceback": current_traceback,
        }

        try:
            response = requests.post(config.ERROR_REPORT_URL, json=error_info, timeout=10)
            logger.info(f"Error report sent. Response: {response.status_code}")
        except requests.RequestException as e:
            logger.error(f"Failed to send error report: {e}")

    @staticmethod
    def log_exception(error: NotesAppError, user_action: str = ""):
        ErrorHandler.log_error(error.error_type, error.technical_error, user_action)
