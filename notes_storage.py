"""
Durable storage for notes.

The store talks to a small key-value port (``read``/``write``) so the same
notes can live in NiceGUI's per-browser storage, a JSON file or MongoDB.
"""
import json
import logging
import os
from pathlib import Path

from pymongo import MongoClient
from pymongo.errors import PyMongoError

import config
from error_handler import ErrorHandler, StorageReadError, StorageWriteError
from subjects import SUBJECT_IDS

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """Storage port: one string value per key."""

    def read(self, key: str):
        """Return the stored value, or None if the key is absent."""
        raise NotImplementedError

    def write(self, key: str, value: str) -> None:
        raise NotImplementedError


class MappingStorage(KeyValueStorage):
    """Wraps a dict-like object such as ``app.storage.user``."""

    def __init__(self, mapping):
        self.mapping = mapping

    def read(self, key):
        return self.mapping.get(key)

    def write(self, key, value):
        self.mapping[key] = value


class JsonFileStorage(KeyValueStorage):
    """All keys in a single JSON file: {"key": "value", ...}"""

    def __init__(self, path=None):
        self.path = Path(path or config.NOTES_FILE)

    def _read_all(self):
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageReadError(f"Could not read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageReadError(f"{self.path} does not contain a JSON object")
        return data

    def read(self, key):
        return self._read_all().get(key)

    def write(self, key, value):
        try:
            data = self._read_all()
        except StorageReadError:
            logger.warning(f"Overwriting unreadable storage file {self.path}")
            data = {}
        data[key] = value

        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(temp_path, self.path)
        except OSError as e:
            raise StorageWriteError(f"Could not write {self.path}: {e}") from e


class MongoStorage(KeyValueStorage):
    """One document per key: {"key": ..., "value": ...}"""

    def __init__(self, mongo_uri=None, database=None, collection="notes", client=None):
        if client is None:
            mongo_uri = mongo_uri or config.MONGODB_URI
            if not mongo_uri:
                raise StorageReadError("MONGODB_URI not set in environment variables")
            try:
                client = MongoClient(mongo_uri)
            except (PyMongoError, ValueError) as e:
                # bad URI, unresolvable SRV host or bad port
                raise StorageReadError(f"Could not connect to MongoDB: {e}") from e

        self.client = client
        self.db = self.client[database or config.MONGODB_DATABASE]
        self.records = self.db[collection]

    def read(self, key):
        try:
            document = self.records.find_one({"key": key})
        except PyMongoError as e:
            raise StorageReadError(f"MongoDB read failed for '{key}': {e}") from e
        if not document:
            return None
        return document.get("value")

    def write(self, key, value):
        try:
            self.records.update_one({"key": key}, {"$set": {"value": value}}, upsert=True)
        except PyMongoError as e:
            raise StorageWriteError(f"MongoDB write failed for '{key}': {e}") from e


def default_notes():
    """Every known subject with no notes yet."""
    return {subject: {} for subject in SUBJECT_IDS}


def is_valid_notes(data) -> bool:
    if not isinstance(data, dict):
        return False
    for subject, blocks in data.items():
        if not isinstance(subject, str) or not isinstance(blocks, dict):
            return False
        if not all(isinstance(content, str) for content in blocks.values()):
            return False
    return True


def read_json_record(storage, key, is_valid, default):
    """
    Load one JSON record from storage.
    Missing, unreadable or malformed records fall back to ``default()``.
    """
    try:
        stored = storage.read(key)
    except StorageReadError as e:
        ErrorHandler.log_exception(e, f"Loading '{key}'")
        return default()

    if stored is None:
        logger.info(f"No saved record under '{key}', starting empty")
        return default()

    try:
        data = json.loads(stored)
    except (TypeError, json.JSONDecodeError) as e:
        ErrorHandler.log_error("STORAGE_READ_ERROR", f"Malformed JSON under '{key}': {e}", "Loading")
        return default()

    if not is_valid(data):
        ErrorHandler.log_error("STORAGE_READ_ERROR", f"Unexpected structure under '{key}'", "Loading")
        return default()

    return data


def write_json_record(storage, key, data):
    """Serialize and write one record. Failures are logged, never raised."""
    try:
        storage.write(key, json.dumps(data, ensure_ascii=False))
    except StorageWriteError as e:
        ErrorHandler.log_exception(e, f"Saving '{key}'")
    except (TypeError, ValueError) as e:
        ErrorHandler.log_error("STORAGE_WRITE_ERROR", f"Could not serialize '{key}': {e}", "Saving")


class NoteStore:
    """Loads and saves the subject -> block -> HTML mapping under one key."""

    def __init__(self, storage: KeyValueStorage, key: str = None):
        self.storage = storage
        self.key = key or config.NOTES_STORAGE_KEY

    def load(self) -> dict:
        notes = read_json_record(self.storage, self.key, is_valid_notes, default_notes)
        # records saved before a subject existed lack its key
        return {**default_notes(), **notes}

    def save(self, notes: dict) -> None:
        write_json_record(self.storage, self.key, notes)
        logger.debug(f"Saved notes under '{self.key}'")


def create_storage(backend=None, browser_storage=None) -> KeyValueStorage:
    """Build the storage backend named in config (browser, file or mongo)."""
    backend = backend or config.NOTES_BACKEND

    if backend == "file":
        return JsonFileStorage(config.NOTES_FILE)
    if backend == "mongo":
        return MongoStorage()
    if backend != "browser":
        logger.warning(f"Unknown NOTES_BACKEND '{backend}', using browser storage")
    if browser_storage is None:
        raise ValueError("browser storage requires a mapping such as app.storage.user")
    return MappingStorage(browser_storage)


def load_notes(storage: KeyValueStorage) -> dict:
    return NoteStore(storage).load()


def save_notes(notes: dict, storage: KeyValueStorage) -> None:
    NoteStore(storage).save(notes)
