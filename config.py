import logging
import os
import secrets

# import dotenv library to load api key and other settings
from dotenv import load_dotenv

# Load the .env file
load_dotenv()

# Gemini
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# Tuning for note generation (formatting and splitting)
GENERATION_TEMPERATURE = 0.2
GENERATION_TOP_P = 0.8
GENERATION_MAX_OUTPUT_TOKENS = 8000

# Tuning for the study assistant chat
ASSISTANT_TEMPERATURE = 0.3
ASSISTANT_TOP_P = 0.8
ASSISTANT_MAX_OUTPUT_TOKENS = 800

# Storage
NOTES_STORAGE_KEY = "zan2t-klaab-notes"
STUDY_PROGRESS_KEY = "studyProgress"
NOTES_BACKEND = os.getenv("NOTES_BACKEND", "browser")  # browser, file or mongo
NOTES_FILE = os.getenv("NOTES_FILE", "notes_store.json")
MONGODB_URI = os.getenv("MONGODB_URI")
MONGODB_DATABASE = os.getenv("MONGODB_DATABASE", "klaab_notes")

# Resource upload limits
MAX_PAGES = 15
MAX_FILE_SIZE_MB = 60

# Error reporting and logs
ERROR_REPORT_URL = os.getenv("ERROR_REPORT_URL")
LOG_FILE = os.getenv("LOG_FILE", "app_debug.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOGS_FOLDER = os.getenv("LOGS_FOLDER", "logs")

# Web server
PORT = int(os.getenv("PORT", 8080))
STORAGE_SECRET = os.getenv("STORAGE_SECRET")


def configure_logging(log_file=None, level=None):
    """Configure logging for developer debugging (file + console)."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file or LOG_FILE),
            logging.StreamHandler()
        ]
    )


def storage_secret(backend=None):
    """Secret that signs NiceGUI's per-browser storage cookie. Must be stable for browser storage."""
    if STORAGE_SECRET:
        return STORAGE_SECRET
    if (backend or NOTES_BACKEND) == "browser":
        raise ValueError("STORAGE_SECRET must be set when NOTES_BACKEND is 'browser'")
    return secrets.token_hex(32)
